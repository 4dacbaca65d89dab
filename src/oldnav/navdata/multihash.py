"""A hash map holding several values per key."""

from collections.abc import Hashable, Iterator
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class MultiHash(Generic[K, V]):
    """Like a dict, except that every key maps to a list of values.

    Examples:
        >>> fixes = MultiHash()
        >>> fixes.insert("ABC", 1)
        >>> fixes.insert("ABC", 2)
        >>> fixes.get("ABC")
        [1, 2]
    """

    def __init__(self) -> None:
        self._map: dict[K, list[V]] = {}

    def insert(self, key: K, value: V) -> None:
        """Add a value under key, keeping any values already there."""
        self._map.setdefault(key, []).append(value)

    def get(self, key: K) -> list[V]:
        """Get the values stored under key (empty list if none)."""
        return self._map.get(key, [])

    def contains_key(self, key: K) -> bool:
        """Check whether any values are stored under key."""
        return key in self._map

    def keys(self) -> Iterator[K]:
        """Iterate over the keys, in insertion order."""
        return iter(self._map)

    def values(self) -> Iterator[V]:
        """Iterate over every stored value, across all keys."""
        for values in self._map.values():
            yield from values

    def __contains__(self, key: object) -> bool:
        return key in self._map

    def __iter__(self) -> Iterator[K]:
        return iter(self._map)

    def __len__(self) -> int:
        return len(self._map)

    def __repr__(self) -> str:
        return f"MultiHash: {{n_items: {len(self._map)}}}"
