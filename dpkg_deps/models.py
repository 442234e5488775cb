"""
Core data models for package relationships.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple


class Operator(str, Enum):
    """Version comparison operator of a dependency constraint."""

    EARLIER = "<<"
    EARLIER_OR_EQUAL = "<="
    EQUAL = "="
    LATER_OR_EQUAL = ">="
    LATER = ">>"
    # Obsolete forms, still accepted by dpkg.
    OLD_EARLIER_OR_EQUAL = "<"
    OLD_LATER_OR_EQUAL = ">"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DependencySpec:
    """A single dependency: a package name with an optional version constraint."""

    name: str
    operator: Optional[Operator] = None
    version: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.operator is None) != (self.version is None):
            raise ValueError(
                f"Operator and version must be given together for {self.name!r}"
            )

    @property
    def constrained(self) -> bool:
        return self.operator is not None

    def __str__(self) -> str:
        if self.operator is None:
            return self.name
        return f"{self.name} ({self.operator.value} {self.version})"


@dataclass(frozen=True)
class DependencyAlternatives:
    """An OR-group of dependencies, in order of preference."""

    specs: Tuple[DependencySpec, ...]

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.specs)

    def __iter__(self) -> Iterator[DependencySpec]:
        return iter(self.specs)

    def __len__(self) -> int:
        return len(self.specs)

    def __str__(self) -> str:
        return " | ".join(str(spec) for spec in self.specs)
