"""Unordered set of unique hashable values."""

from collections.abc import Hashable, Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T", bound=Hashable)


class Set(Generic[T]):
    """Unique, unordered collection of values.

    Iteration order is unspecified. Callers that need a stable order must
    sort the result of :meth:`to_list` themselves.
    """

    __slots__ = ("_items",)

    def __init__(self, values: Iterable[T] = ()):
        self._items: set[T] = set(values)

    def add(self, value: T) -> None:
        """Insert value; a no-op when already present."""
        self._items.add(value)

    def remove(self, value: T) -> None:
        """Delete value if present."""
        self._items.discard(value)

    def contains(self, value: T) -> bool:
        return value in self._items

    def to_list(self) -> list[T]:
        """Materialize the members as a list safe for the caller to reorder."""
        return list(self._items)

    def copy(self) -> "Set[T]":
        return Set(self._items)

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Set({sorted(map(repr, self._items))})"
