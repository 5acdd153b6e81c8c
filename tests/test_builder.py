"""Unit tests for listmultimap.multimap.ImmutableListMultimapBuilder."""

import pytest

from listmultimap.exceptions import IllegalArgumentException
from listmultimap.multimap import (
    EMPTY,
    ImmutableListMultimap,
    ImmutableListMultimapBuilder,
)


class TestBuilderPut:
    """Tests for single and bulk appends."""

    def test_builder_is_nested_alias(self):
        assert ImmutableListMultimap.Builder is ImmutableListMultimapBuilder
        assert isinstance(ImmutableListMultimap.builder(), ImmutableListMultimapBuilder)

    def test_put_returns_builder(self):
        builder = ImmutableListMultimap.builder()
        assert builder.put("foo", 1) is builder

    def test_put_all_iterable(self):
        builder = ImmutableListMultimap.builder()
        builder.put_all("foo", [1, 2, 3])
        builder.put_all("bar", [4, 5])
        builder.put_all("foo", [6, 7])
        multimap = builder.build()
        assert multimap.get("foo") == (1, 2, 3, 6, 7)
        assert multimap.get("bar") == (4, 5)
        assert multimap.size() == 7

    def test_put_all_generator(self):
        multimap = ImmutableListMultimap.builder().put_all("foo", (i for i in range(3))).build()
        assert multimap.get("foo") == (0, 1, 2)

    def test_put_values_varargs(self):
        builder = ImmutableListMultimap.builder()
        builder.put_values("foo", 1, 2, 3)
        builder.put_values("bar", 4, 5)
        builder.put_values("foo", 6, 7)
        multimap = builder.build()
        assert multimap.get("foo") == (1, 2, 3, 6, 7)
        assert multimap.get("bar") == (4, 5)
        assert multimap.size() == 7

    def test_put_values_no_values(self):
        builder = ImmutableListMultimap.builder().put_values("foo")
        assert builder.build() is EMPTY

    def test_put_multimap(self, linked_multimap):
        to_put = linked_multimap
        to_put.put("foo", 1)
        to_put.put("bar", 4)
        to_put.put("foo", 2)
        to_put.put("foo", 3)
        more_to_put = type(linked_multimap)()
        more_to_put.put("foo", 6)
        more_to_put.put("bar", 5)
        more_to_put.put("foo", 7)

        multimap = (
            ImmutableListMultimap.builder()
            .put_multimap(to_put)
            .put_multimap(more_to_put)
            .build()
        )
        assert multimap.get("foo") == (1, 2, 3, 6, 7)
        assert multimap.get("bar") == (4, 5)
        assert multimap.size() == 7

    def test_put_multimap_keeps_source_entry_order(self, linked_multimap):
        linked_multimap.put("foo", 1)
        linked_multimap.put("bar", 2)
        linked_multimap.put("foo", 3)
        multimap = ImmutableListMultimap.builder().put_multimap(linked_multimap).build()
        assert list(multimap.entries()) == [("foo", 1), ("bar", 2), ("foo", 3)]

    def test_put_multimap_from_immutable(self, sample_multimap):
        multimap = (
            ImmutableListMultimap.builder()
            .put("baz", 9)
            .put_multimap(sample_multimap)
            .build()
        )
        assert list(multimap.entries()) == [("baz", 9), ("foo", 1), ("bar", 2), ("foo", 3)]

    def test_put_multimap_duck_typed(self, pair_list):
        source = pair_list([("a", 1), ("b", 2), ("a", 3)])
        multimap = ImmutableListMultimap.builder().put_multimap(source).build()
        assert multimap.get("a") == (1, 3)

    def test_put_entries(self):
        multimap = ImmutableListMultimap.builder().put_entries([("a", 1), ("b", 2)]).build()
        assert list(multimap.entries()) == [("a", 1), ("b", 2)]

    def test_len_counts_pending_entries(self):
        builder = ImmutableListMultimap.builder().put_values("foo", 1, 2)
        assert len(builder) == 2


class TestBuilderDuplicates:
    """Tests that duplicates are kept and counted."""

    def test_put_all_with_duplicates(self):
        builder = ImmutableListMultimap.builder()
        builder.put_values("foo", 1, 2, 3)
        builder.put_values("bar", 4, 5)
        builder.put_values("foo", 1, 6, 7)
        multimap = builder.build()
        assert multimap.get("foo") == (1, 2, 3, 1, 6, 7)
        assert multimap.get("bar") == (4, 5)
        assert multimap.size() == 8

    def test_put_with_duplicates(self):
        builder = ImmutableListMultimap.builder()
        builder.put_values("foo", 1, 2, 3)
        builder.put_values("bar", 4, 5)
        builder.put("foo", 1)
        multimap = builder.build()
        assert multimap.get("foo") == (1, 2, 3, 1)
        assert multimap.get("bar") == (4, 5)
        assert multimap.size() == 6

    def test_put_multimap_with_duplicates(self, linked_multimap):
        to_put = linked_multimap
        to_put.put("foo", 1)
        to_put.put("bar", 4)
        to_put.put("foo", 2)
        to_put.put("foo", 1)
        to_put.put("bar", 5)
        more_to_put = type(linked_multimap)()
        more_to_put.put("foo", 6)
        more_to_put.put("bar", 4)
        more_to_put.put("foo", 7)
        more_to_put.put("foo", 2)

        multimap = (
            ImmutableListMultimap.builder()
            .put_multimap(to_put)
            .put_multimap(more_to_put)
            .build()
        )
        assert multimap.get("foo") == (1, 2, 1, 6, 7, 2)
        assert multimap.get("bar") == (4, 5, 4)
        assert multimap.size() == 9

    def test_duplicate_value_scenario(self):
        multimap = (
            ImmutableListMultimap.builder()
            .put("foo", 1)
            .put("bar", 4)
            .put("foo", 1)
            .build()
        )
        assert multimap.get("foo") == (1, 1)
        assert multimap.size() == 3


class TestBuilderNullRejection:
    """Tests that None keys and values are rejected at the call site."""

    def test_put_null_key(self):
        with pytest.raises(IllegalArgumentException):
            ImmutableListMultimap.builder().put(None, 1)

    def test_put_null_value(self):
        with pytest.raises(IllegalArgumentException):
            ImmutableListMultimap.builder().put("foo", None)

    def test_put_all_null_key(self):
        with pytest.raises(IllegalArgumentException):
            ImmutableListMultimap.builder().put_all(None, [1, 2, 3])

    def test_put_values_null_key(self):
        with pytest.raises(IllegalArgumentException):
            ImmutableListMultimap.builder().put_values(None, 1, 2, 3)

    def test_put_all_null_values_argument(self):
        with pytest.raises(IllegalArgumentException):
            ImmutableListMultimap.builder().put_all("foo", None)

    def test_put_all_null_value(self):
        with pytest.raises(IllegalArgumentException):
            ImmutableListMultimap.builder().put_all("foo", [1, None, 3])

    def test_put_values_null_value(self):
        with pytest.raises(IllegalArgumentException):
            ImmutableListMultimap.builder().put_values("foo", 1, None, 3)

    def test_put_multimap_null_key(self, linked_multimap):
        linked_multimap.put(None, 1)
        with pytest.raises(IllegalArgumentException):
            ImmutableListMultimap.builder().put_multimap(linked_multimap)

    def test_put_multimap_null_value(self, linked_multimap):
        linked_multimap.put("foo", None)
        with pytest.raises(IllegalArgumentException):
            ImmutableListMultimap.builder().put_multimap(linked_multimap)

    def test_put_multimap_not_a_multimap(self):
        with pytest.raises(IllegalArgumentException):
            ImmutableListMultimap.builder().put_multimap({"foo": [1]})

    def test_put_entries_malformed_pair(self):
        with pytest.raises(IllegalArgumentException):
            ImmutableListMultimap.builder().put_entries([("foo", 1, 2)])

    def test_illegal_argument_is_value_error(self):
        with pytest.raises(ValueError):
            ImmutableListMultimap.builder().put("foo", None)


class TestBuilderUnhashableKeys:
    """Tests that unhashable keys are rejected by the call that supplies them."""

    def test_put_unhashable_key(self):
        builder = ImmutableListMultimap.builder()
        with pytest.raises(IllegalArgumentException) as exc_info:
            builder.put(["a"], 1)
        assert isinstance(exc_info.value.cause, TypeError)
        assert len(builder) == 0

    def test_builder_still_builds_after_rejection(self):
        builder = ImmutableListMultimap.builder().put("a", 1)
        with pytest.raises(IllegalArgumentException):
            builder.put({"b": 2}, 2)
        assert builder.build() == ImmutableListMultimap.of("a", 1)

    def test_tuple_key_with_unhashable_member(self):
        with pytest.raises(IllegalArgumentException):
            ImmutableListMultimap.builder().put(("a", ["b"]), 1)

    def test_put_all_unhashable_key(self):
        builder = ImmutableListMultimap.builder()
        with pytest.raises(IllegalArgumentException):
            builder.put_all(["a"], [1, 2])
        assert len(builder) == 0

    def test_put_entries_unhashable_key_is_atomic(self):
        builder = ImmutableListMultimap.builder()
        with pytest.raises(IllegalArgumentException):
            builder.put_entries([("a", 1), (["b"], 2)])
        assert len(builder) == 0

    def test_put_multimap_unhashable_key(self, linked_multimap):
        linked_multimap.put("a", 1)
        linked_multimap.put(["b"], 2)
        builder = ImmutableListMultimap.builder()
        with pytest.raises(IllegalArgumentException):
            builder.put_multimap(linked_multimap)
        assert len(builder) == 0

    def test_of_unhashable_key(self):
        with pytest.raises(IllegalArgumentException):
            ImmutableListMultimap.of("a", 1, ["b"], 2)

    def test_unhashable_value_is_accepted(self):
        multimap = ImmutableListMultimap.of("a", [1, 2])
        assert multimap.get("a") == ([1, 2],)


class TestBuilderAtomicity:
    """Tests that a rejected bulk append leaves the builder unchanged."""

    def test_put_all_rejects_atomically(self):
        builder = ImmutableListMultimap.builder().put("foo", 0)
        with pytest.raises(IllegalArgumentException):
            builder.put_all("foo", [1, 2, None, 3])
        assert builder.build().get("foo") == (0,)

    def test_put_values_rejects_atomically(self):
        builder = ImmutableListMultimap.builder()
        with pytest.raises(IllegalArgumentException):
            builder.put_values("foo", 1, None)
        assert len(builder) == 0
        assert builder.build() is EMPTY

    def test_put_multimap_rejects_atomically(self, linked_multimap):
        linked_multimap.put("foo", 1)
        linked_multimap.put("bar", 2)
        linked_multimap.put("foo", None)
        builder = ImmutableListMultimap.builder().put("baz", 3)
        with pytest.raises(IllegalArgumentException):
            builder.put_multimap(linked_multimap)
        assert list(builder.build().entries()) == [("baz", 3)]

    def test_put_entries_rejects_atomically(self):
        builder = ImmutableListMultimap.builder()
        with pytest.raises(IllegalArgumentException):
            builder.put_entries([("a", 1), (None, 2)])
        assert len(builder) == 0


class TestBuilderBuild:
    """Tests for build()."""

    def test_build_empty_returns_canonical_instance(self):
        assert ImmutableListMultimap.builder().build() is EMPTY

    def test_build_is_not_affected_by_later_puts(self):
        builder = ImmutableListMultimap.builder().put("foo", 1)
        first = builder.build()
        builder.put("foo", 2).put("bar", 3)
        second = builder.build()
        assert first.get("foo") == (1,)
        assert first.size() == 1
        assert second.get("foo") == (1, 2)
        assert second.size() == 3

    def test_builds_are_independent(self):
        builder = ImmutableListMultimap.builder().put("foo", 1)
        assert builder.build() == builder.build()
        assert builder.build() is not builder.build()

    def test_size_equals_number_of_puts(self):
        builder = ImmutableListMultimap.builder()
        count = 0
        for key in ("a", "b", "a", "c"):
            for value in range(3):
                builder.put(key, value % 2)
                count += 1
        assert builder.build().size() == count
