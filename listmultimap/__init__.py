"""Immutable, order-preserving list multimaps."""

from listmultimap.api import Multimap
from listmultimap.multimap import (
    EMPTY,
    ImmutableListMultimap,
    ImmutableListMultimapBuilder,
)
from listmultimap.views import EntriesView, KeySetView, KeysMultiset
from listmultimap.exceptions import (
    MultimapException,
    IllegalArgumentException,
    ConfigurationException,
    SerializationException,
)
from listmultimap.config import CodecConfig, YamlLayout, ByteOrder
from listmultimap.codec import (
    to_dict,
    from_dict,
    to_entries,
    from_entries,
    dump_yaml,
    load_yaml,
    load_yaml_file,
)
from listmultimap.serialization import MultimapSerializer, SerializationService
from listmultimap.logging import get_logger, configure_logging

__version__ = "0.1.0"

__all__ = [
    "Multimap",
    "EMPTY",
    "ImmutableListMultimap",
    "ImmutableListMultimapBuilder",
    "EntriesView",
    "KeySetView",
    "KeysMultiset",
    "MultimapException",
    "IllegalArgumentException",
    "ConfigurationException",
    "SerializationException",
    "CodecConfig",
    "YamlLayout",
    "ByteOrder",
    "to_dict",
    "from_dict",
    "to_entries",
    "from_entries",
    "dump_yaml",
    "load_yaml",
    "load_yaml_file",
    "MultimapSerializer",
    "SerializationService",
    "get_logger",
    "configure_logging",
]
