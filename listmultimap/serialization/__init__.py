"""Binary serialization for listmultimap.

This package provides a compact, type-tagged binary format for multimaps
and the interfaces needed to plug in serializers for custom key and value
types.
"""

from listmultimap.serialization.api import DataInput, DataOutput, Serializer
from listmultimap.serialization.service import (
    DataInputImpl,
    DataOutputImpl,
    MultimapSerializer,
    SerializationService,
)

__all__ = [
    "DataInput",
    "DataOutput",
    "Serializer",
    "DataInputImpl",
    "DataOutputImpl",
    "MultimapSerializer",
    "SerializationService",
]
