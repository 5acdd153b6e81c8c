"""Shared pytest fixtures for listmultimap tests."""

import logging
from typing import Any, List, Tuple

import pytest

from listmultimap.api import Multimap
from listmultimap.config import CodecConfig, YamlLayout, ByteOrder
from listmultimap.logging import ROOT_LOGGER_NAME
from listmultimap.multimap import ImmutableListMultimap


class LinkedListMultimap(Multimap):
    """Mutable multimap test double that keeps global insertion order."""

    def __init__(self):
        self._pairs: List[Tuple[Any, Any]] = []

    def put(self, key, value):
        self._pairs.append((key, value))

    def put_all(self, key, values):
        for value in values:
            self.put(key, value)

    def entries(self):
        return list(self._pairs)


class ArrayListMultimap(Multimap):
    """Mutable multimap test double that iterates grouped by key."""

    def __init__(self):
        self._groups = {}

    def put(self, key, value):
        self._groups.setdefault(key, []).append(value)

    def put_all(self, key, values):
        for value in values:
            self.put(key, value)

    def entries(self):
        return [(key, value) for key, values in self._groups.items() for value in values]


class PairList:
    """Duck-typed multimap that does not inherit from Multimap."""

    def __init__(self, pairs):
        self._pairs = list(pairs)

    def entries(self):
        return iter(self._pairs)


@pytest.fixture
def linked_multimap():
    """Create an empty LinkedListMultimap."""
    return LinkedListMultimap()


@pytest.fixture
def array_multimap():
    """Create an empty ArrayListMultimap."""
    return ArrayListMultimap()


@pytest.fixture
def pair_list():
    """Return the PairList class."""
    return PairList


@pytest.fixture
def sample_multimap():
    """Create {foo=[1, 3], bar=[2]} from puts foo=1, bar=2, foo=3."""
    return (
        ImmutableListMultimap.builder()
        .put("foo", 1)
        .put("bar", 2)
        .put("foo", 3)
        .build()
    )


@pytest.fixture
def entries_config():
    """Create a CodecConfig using the ENTRIES YAML layout."""
    return CodecConfig(yaml_layout=YamlLayout.ENTRIES)


@pytest.fixture
def big_endian_config():
    """Create a CodecConfig using big-endian binary output."""
    return CodecConfig(byte_order=ByteOrder.BIG_ENDIAN)


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore the listmultimap logger after each test."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
