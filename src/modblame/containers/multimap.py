"""Mapping from a key to a set of values."""

from collections.abc import Callable, Hashable, Iterator
from typing import Generic, TypeVar

from .set import Set

K = TypeVar("K", bound=Hashable)
V = TypeVar("V", bound=Hashable)


class Multimap(Generic[K, V]):
    """Mapping from key to a set of values.

    A key is present only while its value set is non-empty: removing the
    last value of a key removes the key as well. :class:`~modblame.graph.Graph`
    relies on this to answer "does this node have any edges" with a key
    lookup.

    The number of (key, value) pairs is tracked as a counter so that
    :meth:`size` is constant time.
    """

    __slots__ = ("_entries", "_size")

    def __init__(self):
        self._entries: dict[K, Set[V]] = {}
        self._size = 0

    def add(self, key: K, value: V) -> None:
        """Associate value with key, creating the key's value set if needed."""
        values = self._entries.get(key)
        if values is None:
            values = Set()
            self._entries[key] = values
        if value not in values:
            values.add(value)
            self._size += 1

    def remove(self, key: K, value: V) -> None:
        """Remove the (key, value) pair; drop the key once it has no values."""
        values = self._entries.get(key)
        if values is None or value not in values:
            return

        values.remove(value)
        self._size -= 1
        if not values:
            del self._entries[key]

    def contains(self, key: K, value: V) -> bool:
        values = self._entries.get(key)
        return values is not None and value in values

    def contains_key(self, key: K) -> bool:
        return key in self._entries

    def size(self) -> int:
        """Total number of (key, value) pairs across all keys."""
        return self._size

    def keys(self) -> list[K]:
        return list(self._entries)

    def values(self, key: K) -> list[V]:
        """Values associated with key, empty when the key is absent."""
        values = self._entries.get(key)
        if values is None:
            return []
        return values.to_list()

    def pairs(self) -> Iterator[tuple[K, V]]:
        for key, values in self._entries.items():
            for value in values:
                yield key, value

    def for_each_pair(self, visitor: Callable[[K, V], bool]) -> bool:
        """Call visitor for every pair until it returns False.

        Returns:
            True if every pair was visited, False if the visitor stopped early
        """
        for key, value in self.pairs():
            if not visitor(key, value):
                return False
        return True

    def inverse(self) -> "Multimap[V, K]":
        """New multimap with every (key, value) pair re-added as (value, key)."""
        inverse: Multimap[V, K] = Multimap()
        for key, value in self.pairs():
            inverse.add(value, key)
        return inverse

    def clone(self) -> "Multimap[K, V]":
        """Copy whose value sets are independent of this multimap's."""
        clone: Multimap[K, V] = Multimap()
        clone._entries = {key: values.copy() for key, values in self._entries.items()}
        clone._size = self._size
        return clone

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return f"Multimap(keys={len(self._entries)}, pairs={self._size})"
