"""Read-only views over a built multimap.

Each view is a thin projection over the entries tuple and key index owned
by an :class:`~listmultimap.multimap.ImmutableListMultimap`. Views never
copy the backing data and expose no mutators.
"""

from collections import Counter
from collections.abc import Collection, Sequence, Set
from typing import Any, Dict, Iterator, Mapping, Tuple


class EntriesView(Sequence):
    """All ``(key, value)`` pairs in the order they were appended.

    Iteration is restartable. Membership tests use the key index rather than
    a linear scan.
    """

    __slots__ = ("_entries", "_index")

    def __init__(self, entries: Tuple[Tuple[Any, Any], ...], index: Mapping):
        self._entries = entries
        self._index = index

    def __getitem__(self, position):
        return self._entries[position]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Tuple[Any, Any]]:
        return iter(self._entries)

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, tuple) or len(item) != 2:
            return False
        key, value = item
        try:
            return value in self._index.get(key, ())
        except TypeError:
            return False

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EntriesView):
            return self._entries == other._entries
        if isinstance(other, (list, tuple)):
            return list(self._entries) == list(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"EntriesView({list(self._entries)!r})"


class KeySetView(Set):
    """Distinct keys in order of first appearance."""

    __slots__ = ("_index",)

    def __init__(self, index: Mapping):
        self._index = index

    @classmethod
    def _from_iterable(cls, iterable):
        return cls(dict.fromkeys(iterable))

    def __contains__(self, key: object) -> bool:
        try:
            return key in self._index
        except TypeError:
            return False

    def __iter__(self) -> Iterator[Any]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    __hash__ = Set._hash

    def __repr__(self) -> str:
        return f"KeySetView({list(self._index)!r})"


class KeysMultiset(Collection):
    """Keys repeated once per value they own.

    ``count(key)`` equals the number of values under ``key``. Iteration
    yields each key that many times, grouped, keys in first-appearance order.
    Two multisets are equal when every key has the same count; a
    :class:`collections.Counter` with the same positive counts is equal too.
    """

    __slots__ = ("_index",)

    def __init__(self, index: Mapping):
        self._index = index

    def count(self, key: Any) -> int:
        try:
            return len(self._index.get(key, ()))
        except TypeError:
            return 0

    def element_set(self) -> KeySetView:
        return KeySetView(self._index)

    def counts(self) -> Dict[Any, int]:
        return {key: len(values) for key, values in self._index.items()}

    def __contains__(self, key: object) -> bool:
        return self.count(key) > 0

    def __iter__(self) -> Iterator[Any]:
        for key, values in self._index.items():
            for _ in range(len(values)):
                yield key

    def __len__(self) -> int:
        return sum(len(values) for values in self._index.values())

    def __eq__(self, other: object) -> bool:
        if isinstance(other, KeysMultiset):
            return self.counts() == other.counts()
        if isinstance(other, Counter):
            return self.counts() == {k: n for k, n in other.items() if n > 0}
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self.counts().items()))

    def __repr__(self) -> str:
        return f"KeysMultiset({self.counts()!r})"
