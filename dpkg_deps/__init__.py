"""
dpkg status dependency reader

A tool for reading installed packages and their declared dependencies from a
dpkg status database.
"""

__version__ = "0.1.0"

from .database import DEFAULT_STATUS_PATH, PackageDatabase
from .dependencies import MalformedDependencyError, parse_relationship_field
from .models import DependencyAlternatives, DependencySpec, Operator
from .stanza import PackageStanza
from .cli import main

__all__ = [
    "DEFAULT_STATUS_PATH",
    "DependencyAlternatives",
    "DependencySpec",
    "MalformedDependencyError",
    "Operator",
    "PackageDatabase",
    "PackageStanza",
    "main",
    "parse_relationship_field",
]
