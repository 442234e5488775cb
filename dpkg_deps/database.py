"""
Index of the installed packages recorded in a dpkg status file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Union

from .stanza import PackageStanza


logger = logging.getLogger(__name__)

DEFAULT_STATUS_PATH = "/var/lib/dpkg/status"


class PackageDatabase(Mapping[str, PackageStanza]):
    """Read-only mapping of package name to its installed stanza."""

    def __init__(self, packages: Mapping[str, PackageStanza]) -> None:
        self._packages = MappingProxyType(dict(packages))

    @classmethod
    def parse(cls, path: Union[str, Path] = DEFAULT_STATUS_PATH) -> "PackageDatabase":
        """Read the status file at ``path``.

        Raises:
            OSError: If the file is missing or unreadable.
        """
        with open(path, encoding="utf-8", errors="replace") as f:
            database = cls.from_lines(f)
        logger.info("Parsed %d installed packages from %s", len(database), path)
        return database

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "PackageDatabase":
        """Build the index from status file lines.

        Stanzas without a ``Package`` field or not installed are skipped.
        When a name occurs more than once, the last installed stanza wins.
        """
        packages: Dict[str, PackageStanza] = {}
        line_iter = iter(lines)

        while True:
            stanza = PackageStanza.read(line_iter)
            if stanza is None:
                break
            if stanza.name is None:
                if stanza.fields:
                    logger.debug("Skipping stanza without Package field: %s", dict(stanza.fields))
                continue
            if not stanza.installed:
                logger.debug("Skipping %s (status: %s)", stanza.name, stanza.status)
                continue
            if stanza.name in packages:
                logger.debug("Duplicate installed stanza for %s, keeping the later one", stanza.name)
            packages[stanza.name] = stanza

        return cls(packages)

    def __getitem__(self, name: str) -> PackageStanza:
        return self._packages[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._packages)

    def __len__(self) -> int:
        return len(self._packages)

    def __repr__(self) -> str:
        return f"<PackageDatabase packages={len(self)}>"
