"""Immutable, order-preserving list multimap and its builder.

An :class:`ImmutableListMultimap` maps each key to a tuple of values kept
in the order they were appended, duplicates included. Instances are made
with :meth:`ImmutableListMultimap.builder`, :meth:`ImmutableListMultimap.of`
or :meth:`ImmutableListMultimap.copy_of` and never change afterwards.

Example:
    Building a multimap::

        from listmultimap import ImmutableListMultimap

        multimap = (
            ImmutableListMultimap.builder()
            .put("foo", 1)
            .put("bar", 2)
            .put("foo", 3)
            .build()
        )
        multimap.get("foo")        # (1, 3)
        list(multimap.entries())   # [("foo", 1), ("bar", 2), ("foo", 3)]
        str(multimap)              # "{foo=[1, 3], bar=[2]}"
"""

import copy
from types import MappingProxyType
from typing import Any, Generic, Iterable, List, Mapping, Optional, Tuple, TypeVar

from listmultimap.api import Multimap, group_entries, hash_groups
from listmultimap.exceptions import IllegalArgumentException
from listmultimap.logging import MULTIMAP, get_logger
from listmultimap.views import EntriesView, KeySetView, KeysMultiset

_logger = get_logger(MULTIMAP)

K = TypeVar("K")
V = TypeVar("V")


def _check_entry(key: Any, value: Any) -> None:
    if key is None:
        raise IllegalArgumentException(f"null key in entry: null={value!r}")
    if value is None:
        raise IllegalArgumentException(f"null value in entry: {key!r}=null")
    try:
        hash(key)
    except TypeError as e:
        raise IllegalArgumentException(f"unhashable key in entry: {key!r}", cause=e)


class ImmutableListMultimapBuilder(Generic[K, V]):
    """Accumulates ``(key, value)`` pairs for an :class:`ImmutableListMultimap`.

    Pairs are kept in the order they are supplied. Every append method
    validates its whole input before appending anything, so a call that
    raises :class:`IllegalArgumentException` leaves the builder unchanged.
    The builder may be reused after :meth:`build`; later appends never
    affect an instance that was already built.

    Example:
        >>> builder = ImmutableListMultimap.builder()
        >>> _ = builder.put_all("foo", [1, 2, 3]).put_values("bar", 4, 5)
        >>> builder.build().size()
        5
    """

    def __init__(self):
        self._entries: List[Tuple[K, V]] = []

    def put(self, key: K, value: V) -> "ImmutableListMultimapBuilder[K, V]":
        """Append a single pair.

        Args:
            key: The key, must not be None.
            value: The value, must not be None.

        Returns:
            This builder.

        Raises:
            IllegalArgumentException: If ``key`` or ``value`` is None, or
                ``key`` is unhashable.
        """
        _check_entry(key, value)
        self._entries.append((key, value))
        return self

    def put_all(self, key: K, values: Iterable[V]) -> "ImmutableListMultimapBuilder[K, V]":
        """Append every value of ``values`` under ``key``, in order.

        Args:
            key: The key, must not be None.
            values: Iterable of values, none of which may be None.

        Returns:
            This builder.

        Raises:
            IllegalArgumentException: If ``key``, ``values`` or any of the
                values is None.
        """
        if key is None:
            raise IllegalArgumentException("null key in put_all")
        if values is None:
            raise IllegalArgumentException("values must not be None")
        pending = []
        for value in values:
            _check_entry(key, value)
            pending.append((key, value))
        self._entries.extend(pending)
        return self

    def put_values(self, key: K, *values: V) -> "ImmutableListMultimapBuilder[K, V]":
        """Varargs form of :meth:`put_all`."""
        return self.put_all(key, values)

    def put_entries(
        self, entries: Iterable[Tuple[K, V]]
    ) -> "ImmutableListMultimapBuilder[K, V]":
        """Append ``(key, value)`` pairs in iteration order.

        Raises:
            IllegalArgumentException: If a pair is malformed or holds None.
        """
        if entries is None:
            raise IllegalArgumentException("entries must not be None")
        pending = []
        for entry in entries:
            try:
                key, value = entry
            except (TypeError, ValueError) as e:
                raise IllegalArgumentException(
                    f"entry is not a (key, value) pair: {entry!r}", cause=e
                )
            _check_entry(key, value)
            pending.append((key, value))
        self._entries.extend(pending)
        return self

    def put_multimap(self, source: Any) -> "ImmutableListMultimapBuilder[K, V]":
        """Append every entry of ``source`` in the source's ``entries()`` order.

        Args:
            source: Any object providing ``entries()``.

        Returns:
            This builder.

        Raises:
            IllegalArgumentException: If ``source`` is not a multimap or
                contains a None key or value.
        """
        if isinstance(source, ImmutableListMultimap):
            self._entries.extend(source._entries)
            return self
        if not isinstance(source, Multimap):
            raise IllegalArgumentException(
                f"expected a multimap providing entries(), got {type(source).__name__}"
            )
        return self.put_entries(source.entries())

    def build(self) -> "ImmutableListMultimap[K, V]":
        """Return an immutable multimap holding the accumulated pairs."""
        if not self._entries:
            return EMPTY
        multimap = ImmutableListMultimap._create(tuple(self._entries))
        _logger.debug(
            "Built multimap with %d entries under %d keys",
            len(multimap._entries),
            len(multimap._index),
        )
        return multimap

    def __len__(self) -> int:
        return len(self._entries)


class ImmutableListMultimap(Multimap[K, V]):
    """An immutable multimap that keeps every value in insertion order.

    Storage is one tuple of all entries plus an index from each key to the
    tuple of its values. Keys in the index are ordered by first appearance.

    Constructing directly from pairs is equivalent to using the builder::

        ImmutableListMultimap([("foo", 1), ("bar", 2), ("foo", 3)])

    Raises:
        IllegalArgumentException: If any key or value is None.
    """

    __slots__ = ("_entries", "_index", "_hash")

    Builder = ImmutableListMultimapBuilder

    def __init__(self, entries: Iterable[Tuple[K, V]] = ()):
        builder = ImmutableListMultimapBuilder()
        if isinstance(entries, Multimap):
            builder.put_multimap(entries)
        else:
            builder.put_entries(entries)
        self._initialize(tuple(builder._entries))

    def _initialize(self, entries: Tuple[Tuple[K, V], ...]) -> None:
        self._entries = entries
        self._index = group_entries(entries)
        self._hash: Optional[int] = None

    @classmethod
    def _create(cls, entries: Tuple[Tuple[K, V], ...]) -> "ImmutableListMultimap[K, V]":
        instance = cls.__new__(cls)
        instance._initialize(entries)
        return instance

    @staticmethod
    def builder() -> ImmutableListMultimapBuilder:
        """Return a new, empty builder."""
        return ImmutableListMultimapBuilder()

    @classmethod
    def of(cls, *keys_and_values: Any) -> "ImmutableListMultimap":
        """Create a multimap from alternating keys and values.

        Example:
            >>> ImmutableListMultimap.of("one", 1, "two", 2).size()
            2

        Raises:
            IllegalArgumentException: On an odd argument count or a None.
        """
        if len(keys_and_values) % 2:
            raise IllegalArgumentException(
                "of() expects alternating keys and values, "
                f"got {len(keys_and_values)} arguments"
            )
        builder = ImmutableListMultimapBuilder()
        for i in range(0, len(keys_and_values), 2):
            builder.put(keys_and_values[i], keys_and_values[i + 1])
        return builder.build()

    @classmethod
    def copy_of(cls, source: Any) -> "ImmutableListMultimap":
        """Return an immutable copy of ``source``.

        An ``ImmutableListMultimap`` is returned as is.

        Raises:
            IllegalArgumentException: If ``source`` is not a multimap or
                holds a None key or value.
        """
        if isinstance(source, ImmutableListMultimap):
            return source
        return ImmutableListMultimapBuilder().put_multimap(source).build()

    def _key_groups(self) -> Mapping:
        return self._index

    def get(self, key: K) -> Tuple[V, ...]:
        """Return the values under ``key`` in insertion order, or ``()``."""
        try:
            return self._index.get(key, ())
        except TypeError:
            return ()

    def __getitem__(self, key: K) -> Tuple[V, ...]:
        return self.get(key)

    def contains_key(self, key: Any) -> bool:
        try:
            return key in self._index
        except TypeError:
            return False

    def contains_value(self, value: Any) -> bool:
        return any(value in values for values in self._index.values())

    def contains_entry(self, key: Any, value: Any) -> bool:
        return value in self.get(key)

    def entries(self) -> EntriesView:
        """Return all pairs in the order they were appended."""
        return EntriesView(self._entries, self._index)

    def key_set(self) -> KeySetView:
        """Return distinct keys in order of first appearance."""
        return KeySetView(self._index)

    def keys(self) -> KeysMultiset:
        """Return a multiset with each key counted once per value."""
        return KeysMultiset(self._index)

    def values(self) -> Tuple[V, ...]:
        """Return all values in append order, duplicates included."""
        return tuple(value for _, value in self._entries)

    def as_map(self) -> Mapping:
        """Return a read-only mapping of each key to its values tuple."""
        return MappingProxyType(self._index)

    def size(self) -> int:
        return len(self._entries)

    def is_empty(self) -> bool:
        return not self._entries

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash_groups(self._index)
        return self._hash

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ImmutableListMultimap):
            if self is other:
                return True
            if len(self._entries) != len(other._entries):
                return False
            return self._index == other._index
        return super().__eq__(other)

    def __reduce__(self):
        return (_restore, (self._entries,))

    def __copy__(self) -> "ImmutableListMultimap[K, V]":
        return self

    def __deepcopy__(self, memo: dict) -> "ImmutableListMultimap[K, V]":
        if not self._entries:
            return EMPTY
        return ImmutableListMultimap._create(copy.deepcopy(self._entries, memo))


def _restore(entries: Tuple[Tuple[Any, Any], ...]) -> ImmutableListMultimap:
    if not entries:
        return EMPTY
    return ImmutableListMultimap._create(tuple(entries))


EMPTY: ImmutableListMultimap = ImmutableListMultimap._create(())
