"""Collection types backing the dependency graph."""

from .multimap import Multimap
from .set import Set

__all__ = [
    "Set",
    "Multimap",
]
