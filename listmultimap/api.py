"""Multimap capability interface.

This module defines :class:`Multimap`, the abstract base class shared by
every multimap the library can read from. The only required operation is
``entries()``, an ordered iteration of ``(key, value)`` pairs. Every other
read operation, as well as equality, hashing and string rendering, is
derived from it.

Classes do not need to inherit from :class:`Multimap` to be accepted as a
source: any class that defines an ``entries()`` method is recognised by
``isinstance(obj, Multimap)``.

Example:
    A minimal foreign multimap::

        class PairList:
            def __init__(self, pairs):
                self._pairs = list(pairs)

            def entries(self):
                return iter(self._pairs)

        multimap = ImmutableListMultimap.copy_of(PairList([("a", 1), ("a", 2)]))
"""

import sys
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Dict, Generic, Iterable, Mapping, Tuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")

_HASH_MASK = sys.maxsize


def group_entries(entries: Iterable[Tuple[K, V]]) -> Dict[K, Tuple[V, ...]]:
    """Group ordered ``(key, value)`` pairs by key.

    Keys keep the order of their first appearance and each group keeps the
    order its values were seen in.

    Args:
        entries: Iterable of ``(key, value)`` pairs.

    Returns:
        A new dict mapping each key to a tuple of its values.
    """
    groups: Dict[K, list] = {}
    for key, value in entries:
        groups.setdefault(key, []).append(value)
    return {key: tuple(values) for key, values in groups.items()}


def key_groups(multimap: Any) -> Mapping:
    """Return the key → values-tuple mapping of any multimap-capable object."""
    if Multimap in type(multimap).__mro__:
        return multimap._key_groups()
    return group_entries(multimap.entries())


def render(groups: Mapping) -> str:
    """Render key groups as ``{key=[v1, v2], other=[v3]}``."""
    parts = []
    for key, values in groups.items():
        rendered = ", ".join(str(value) for value in values)
        parts.append(f"{key}=[{rendered}]")
    return "{" + ", ".join(parts) + "}"


def hash_groups(groups: Mapping) -> int:
    """Order-independent hash of key groups; ``0`` for no groups."""
    total = 0
    for key, values in groups.items():
        total += hash(key) ^ hash(tuple(values))
    return total & _HASH_MASK


class Multimap(ABC, Generic[K, V]):
    """Abstract multimap: keys mapped to ordered, duplicate-permitting values.

    Subclasses implement :meth:`entries`. Two multimaps are equal when they
    map the same keys to the same ordered value sequences. The order of
    different keys does not affect equality, the order of values under one
    key does.
    """

    __slots__ = ()

    @abstractmethod
    def entries(self) -> Iterable[Tuple[K, V]]:
        """Return all ``(key, value)`` pairs in iteration order."""
        pass

    @classmethod
    def __subclasshook__(cls, subclass):
        if cls is Multimap:
            for base in subclass.__mro__:
                if "entries" in base.__dict__:
                    return callable(base.__dict__["entries"]) or NotImplemented
        return NotImplemented

    def _key_groups(self) -> Mapping:
        return group_entries(self.entries())

    def as_map(self) -> Mapping:
        return MappingProxyType(dict(self._key_groups()))

    def get(self, key: K) -> Tuple[V, ...]:
        return tuple(value for k, value in self.entries() if k == key)

    def contains_key(self, key: Any) -> bool:
        return any(k == key for k, _ in self.entries())

    def contains_value(self, value: Any) -> bool:
        return any(v == value for _, v in self.entries())

    def contains_entry(self, key: Any, value: Any) -> bool:
        return any(k == key and v == value for k, v in self.entries())

    def size(self) -> int:
        return sum(1 for _ in self.entries())

    def is_empty(self) -> bool:
        for _ in self.entries():
            return False
        return True

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: Any) -> bool:
        return self.contains_key(key)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Multimap):
            return NotImplemented
        return dict(self._key_groups()) == dict(key_groups(other))

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash_groups(self._key_groups())

    def __str__(self) -> str:
        return render(self._key_groups())

    def __repr__(self) -> str:
        groups = {key: list(values) for key, values in self._key_groups().items()}
        return f"{type(self).__name__}({groups!r})"
