"""
Parsing of dpkg relationship fields (Depends, Pre-Depends, Recommends, ...).

A relationship field is a comma-separated AND-list of alternative groups,
each group being a ``|``-separated list of package names with an optional
version constraint::

    libc6 (>= 2.34), libssl3 | libssl1.1, debconf (>= 0.5) | debconf-2.0
"""

from __future__ import annotations

import re
from typing import List, Optional

from .models import DependencyAlternatives, DependencySpec, Operator


_SPEC_RE = re.compile(
    r"""
    (?P<name>[^\s(),|]+)
    (?:
        \s*\(\s*
        (?P<operator><<|<=|>=|>>|=|<|>)
        \s*
        (?P<version>[0-9A-Za-z][^\s()]*)
        \s*\)
    )?
    """,
    re.VERBOSE,
)
_COMMA_RE = re.compile(r"\s*,\s*")
_PIPE_RE = re.compile(r"\s*\|\s*")


class MalformedDependencyError(ValueError):
    """A relationship field contains a token that is not a valid dependency."""

    def __init__(self, token: str, reason: str = "not a valid dependency") -> None:
        super().__init__(f"Malformed dependency {token!r}: {reason}")
        self.token = token
        self.reason = reason


def parse_dependency_spec(token: str) -> DependencySpec:
    """Parse one dependency token, e.g. ``libapr1 (>= 1.2.7)`` or ``libc6``.

    Raises:
        MalformedDependencyError: If the token has no package name or
            carries anything besides a name and one version constraint.
    """
    stripped = token.strip()
    if not stripped:
        raise MalformedDependencyError(token, "empty dependency")

    match = _SPEC_RE.fullmatch(stripped)
    if match is None:
        raise MalformedDependencyError(token)

    operator = match.group("operator")
    return DependencySpec(
        name=match.group("name"),
        operator=Operator(operator) if operator else None,
        version=match.group("version"),
    )


def parse_alternatives(segment: str) -> DependencyAlternatives:
    """Parse one ``|``-separated group such as ``default-mta | mail-transport-agent``."""
    if not segment.strip():
        raise MalformedDependencyError(segment, "empty dependency group")
    tokens = _PIPE_RE.split(segment.strip())
    return DependencyAlternatives(tuple(parse_dependency_spec(t) for t in tokens))


def parse_relationship_field(value: Optional[str]) -> List[DependencyAlternatives]:
    """Parse a whole relationship field into its AND-list of groups.

    A missing field (``None``) means no relationships and yields ``[]``.
    An empty or whitespace-only value is rejected like any other empty group.
    """
    if value is None:
        return []
    return [parse_alternatives(segment) for segment in _COMMA_RE.split(value.strip())]
