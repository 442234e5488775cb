"""
Reader for a single stanza of a dpkg status file.

A stanza is a run of ``Field: value`` lines ended by a blank line or by the
end of the file. Lines starting with whitespace continue the value of the
previous field; a continuation line holding only ``.`` stands for an empty
line inside the value.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional, Tuple

from .dependencies import parse_relationship_field
from .models import DependencyAlternatives


logger = logging.getLogger(__name__)

_FIELD_RE = re.compile(r"(?P<name>[^\s:]+):(?:[ \t]+(?P<value>.*))?")


class LineKind(Enum):
    """Category of a physical line within a stanza."""

    BLANK = "blank"
    FIELD = "field"
    CONTINUATION = "continuation"
    OTHER = "other"


def classify_line(line: str) -> Tuple[LineKind, Optional[str], Optional[str]]:
    """Classify a line with its terminator already removed.

    Returns:
        ``(kind, field_name, text)``. ``field_name`` is only set for field
        lines; ``text`` is the field value or the continuation content.
    """
    if not line:
        return LineKind.BLANK, None, None
    if line[0].isspace():
        content = line.lstrip()
        if not content:
            # Whitespace-only lines count as stanza separators too.
            return LineKind.BLANK, None, None
        return LineKind.CONTINUATION, None, content
    match = _FIELD_RE.fullmatch(line)
    if match:
        return LineKind.FIELD, match.group("name"), match.group("value") or ""
    return LineKind.OTHER, None, line


class PackageStanza:
    """One package record of the status file.

    Field names are case-sensitive and kept as they appear. Unknown fields
    are stored uninterpreted.
    """

    def __init__(self, fields: Mapping[str, str]) -> None:
        self._fields = MappingProxyType(dict(fields))
        self._requires: List[DependencyAlternatives] = []
        self._requires_parsed = False

    @classmethod
    def read(cls, lines: Iterator[str]) -> Optional["PackageStanza"]:
        """Consume lines up to and including the next blank line.

        Args:
            lines: Iterator over text lines, e.g. an open status file.

        Returns:
            The stanza, or ``None`` if ``lines`` was already exhausted.
        """
        fields = {}
        current = None
        consumed = False

        for raw in lines:
            consumed = True
            kind, name, text = classify_line(raw.rstrip("\r\n"))

            if kind is LineKind.BLANK:
                break
            if kind is LineKind.FIELD:
                current = name
                fields[current] = text
            elif kind is LineKind.CONTINUATION:
                if current is None:
                    logger.debug("Skipping continuation line without a field: %r", raw)
                    continue
                fields[current] += "\n" + ("" if text == "." else text)
            else:
                logger.debug("Skipping unrecognized line: %r", raw)

        if not consumed:
            return None
        return cls(fields)

    @property
    def fields(self) -> Mapping[str, str]:
        return self._fields

    def get(self, field: str, default: Optional[str] = None) -> Optional[str]:
        return self._fields.get(field, default)

    @property
    def name(self) -> Optional[str]:
        return self._fields.get("Package")

    @property
    def version(self) -> Optional[str]:
        return self._fields.get("Version")

    @property
    def status(self) -> Optional[str]:
        return self._fields.get("Status")

    @property
    def installed(self) -> bool:
        """True when the last word of ``Status`` is ``installed``."""
        words = (self.status or "").split()
        return bool(words) and words[-1] == "installed"

    @property
    def requires(self) -> List[DependencyAlternatives]:
        """Groups declared in ``Depends``, parsed once on first access."""
        if not self._requires_parsed:
            self._requires = parse_relationship_field(self._fields.get("Depends"))
            self._requires_parsed = True
        return list(self._requires)

    def relationship(self, field: str) -> List[DependencyAlternatives]:
        """Parse any relationship field, e.g. ``Pre-Depends`` or ``Recommends``."""
        if field == "Depends":
            return self.requires
        return parse_relationship_field(self._fields.get(field))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageStanza):
            return NotImplemented
        return dict(self._fields) == dict(other._fields)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"<Package name={self.name} version={self.version}>"
