"""Serialization service implementation.

Binary multimap layout::

    +-------+---------+------------+-------------+---------------------+
    | "LMM" | version | byte order | entry count | key, value, ...     |
    | 3 B   | 1 B     | 1 B        | int32       | type-tagged objects |
    +-------+---------+------------+-------------+---------------------+

Entries are written in the multimap's ``entries()`` order, so decoding
restores both the per-key value order and the global entry order.
"""

import struct
import threading
from typing import Any, Dict, Optional

from listmultimap.config import ByteOrder, CodecConfig
from listmultimap.exceptions import IllegalArgumentException, SerializationException
from listmultimap.logging import SERIALIZATION, get_logger
from listmultimap.multimap import ImmutableListMultimap
from listmultimap.serialization.api import DataInput, DataOutput, Serializer
from listmultimap.serialization.builtin import (
    NONE_TYPE_ID,
    get_builtin_serializers,
    get_type_serializer_mapping,
)

_logger = get_logger(SERIALIZATION)

MAGIC = b"LMM"
FORMAT_VERSION = 1
HEADER_SIZE = len(MAGIC) + 2

_BYTE_ORDER_FLAGS = {
    ByteOrder.LITTLE_ENDIAN: 0,
    ByteOrder.BIG_ENDIAN: 1,
}


class DataInputImpl(DataInput):
    """Implementation of DataInput over an in-memory buffer."""

    def __init__(
        self,
        buffer: bytes,
        service: "SerializationService",
        byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN,
        offset: int = 0,
    ):
        self._buffer = buffer
        self._service = service
        self._prefix = byte_order.struct_prefix
        self._pos = offset

    def _unpack(self, fmt: str, size: int) -> Any:
        try:
            value = struct.unpack_from(self._prefix + fmt, self._buffer, self._pos)[0]
        except struct.error as e:
            raise SerializationException(
                f"Unexpected end of data at position {self._pos}", cause=e
            )
        self._pos += size
        return value

    def _read_bytes(self, length: int) -> bytes:
        if length < 0 or self._pos + length > len(self._buffer):
            raise SerializationException(
                f"Invalid length {length} at position {self._pos}"
            )
        data = self._buffer[self._pos:self._pos + length]
        self._pos += length
        return bytes(data)

    def read_boolean(self) -> bool:
        return self._unpack("B", 1) != 0

    def read_byte(self) -> int:
        return self._unpack("b", 1)

    def read_int(self) -> int:
        return self._unpack("i", 4)

    def read_long(self) -> int:
        return self._unpack("q", 8)

    def read_double(self) -> float:
        return self._unpack("d", 8)

    def read_string(self) -> str:
        data = self._read_bytes(self.read_int())
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SerializationException("Invalid UTF-8 string data", cause=e)

    def read_byte_array(self) -> bytes:
        return self._read_bytes(self.read_int())

    def read_object(self) -> Any:
        return self._service._read_object(self)

    def position(self) -> int:
        return self._pos

    def remaining(self) -> int:
        return len(self._buffer) - self._pos


class DataOutputImpl(DataOutput):
    """Implementation of DataOutput backed by a bytearray."""

    def __init__(
        self,
        service: "SerializationService",
        byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN,
    ):
        self._buffer = bytearray()
        self._service = service
        self._prefix = byte_order.struct_prefix

    def _pack(self, fmt: str, value: Any) -> None:
        try:
            self._buffer.extend(struct.pack(self._prefix + fmt, value))
        except struct.error as e:
            raise SerializationException(f"Cannot write {value!r}: {e}", cause=e)

    def write_boolean(self, value: bool) -> None:
        self._pack("B", 1 if value else 0)

    def write_byte(self, value: int) -> None:
        self._pack("b", value)

    def write_int(self, value: int) -> None:
        self._pack("i", value)

    def write_long(self, value: int) -> None:
        self._pack("q", value)

    def write_double(self, value: float) -> None:
        self._pack("d", value)

    def write_string(self, value: str) -> None:
        self.write_byte_array(value.encode("utf-8"))

    def write_byte_array(self, value: bytes) -> None:
        self.write_int(len(value))
        self._buffer.extend(value)

    def write_raw(self, value: bytes) -> None:
        """Write bytes without a length prefix."""
        self._buffer.extend(value)

    def write_object(self, value: Any) -> None:
        self._service._write_object(self, value)

    def to_byte_array(self) -> bytes:
        return bytes(self._buffer)


class SerializationService:
    """Type-tagged element serialization used by :class:`MultimapSerializer`.

    Args:
        custom_serializers: Optional mapping of Python types to serializers
            with positive type IDs.
    """

    def __init__(self, custom_serializers: Optional[Dict[type, Serializer]] = None):
        self._type_id_to_serializer: Dict[int, Serializer] = get_builtin_serializers()
        self._type_to_serializer: Dict[type, Serializer] = get_type_serializer_mapping()
        self._lock = threading.Lock()

        if custom_serializers:
            for clazz, serializer in custom_serializers.items():
                self.register_serializer(clazz, serializer)

    def register_serializer(self, clazz: type, serializer: Serializer) -> None:
        """Register a custom serializer for a type.

        Args:
            clazz: The class to serialize.
            serializer: The serializer to use.

        Raises:
            IllegalArgumentException: If the serializer's type ID is not
                positive or is already taken by another serializer.
        """
        type_id = serializer.type_id
        if type_id <= 0:
            raise IllegalArgumentException(
                f"Custom serializer type ID must be positive, got {type_id}"
            )
        with self._lock:
            existing = self._type_id_to_serializer.get(type_id)
            if existing is not None and existing is not serializer:
                raise IllegalArgumentException(
                    f"Type ID {type_id} is already registered"
                )
            self._type_to_serializer[clazz] = serializer
            self._type_id_to_serializer[type_id] = serializer

    def _find_serializer_for_object(self, obj: Any) -> Optional[Serializer]:
        serializer = self._type_to_serializer.get(type(obj))
        if serializer:
            return serializer

        for base_type, ser in tuple(self._type_to_serializer.items()):
            if isinstance(obj, base_type):
                return ser

        return None

    def _write_object(self, output: DataOutput, obj: Any) -> None:
        if obj is None:
            output.write_int(NONE_TYPE_ID)
            return

        serializer = self._find_serializer_for_object(obj)
        if serializer is None:
            raise SerializationException(f"No serializer for type: {type(obj)}")

        output.write_int(serializer.type_id)
        serializer.write(output, obj)

    def _read_object(self, input_stream: DataInput) -> Any:
        type_id = input_stream.read_int()

        if type_id == NONE_TYPE_ID:
            return None

        serializer = self._type_id_to_serializer.get(type_id)
        if serializer is None:
            raise SerializationException(f"No serializer for type ID: {type_id}")

        return serializer.read(input_stream)


class MultimapSerializer:
    """Binary round-trip for :class:`ImmutableListMultimap`.

    Any multimap-capable object can be serialized. Deserialization always
    produces an ``ImmutableListMultimap`` equal to the original, and the
    empty payload decodes to the shared empty instance.

    Args:
        config: Codec configuration; only ``byte_order`` is used here.
        service: Element serialization service. A default one is created
            when omitted.

    Example:
        >>> serializer = MultimapSerializer()
        >>> data = serializer.serialize(multimap)
        >>> serializer.deserialize(data) == multimap
        True
    """

    def __init__(
        self,
        config: Optional[CodecConfig] = None,
        service: Optional[SerializationService] = None,
    ):
        self._config = config or CodecConfig()
        self._service = service or SerializationService()

    @property
    def service(self) -> SerializationService:
        """Get the element serialization service."""
        return self._service

    def serialize(self, multimap: Any) -> bytes:
        """Serialize a multimap to bytes.

        Raises:
            IllegalArgumentException: If ``multimap`` is not a multimap or
                holds a None key or value.
            SerializationException: If a key or value has no serializer.
        """
        multimap = ImmutableListMultimap.copy_of(multimap)
        byte_order = self._config.byte_order
        output = DataOutputImpl(self._service, byte_order)
        entries = multimap.entries()

        output.write_raw(MAGIC + bytes([FORMAT_VERSION, _BYTE_ORDER_FLAGS[byte_order]]))
        output.write_int(len(entries))
        for key, value in entries:
            output.write_object(key)
            output.write_object(value)

        data = output.to_byte_array()
        _logger.debug("Serialized %d entries into %d bytes", len(entries), len(data))
        return data

    def deserialize(self, data: bytes) -> ImmutableListMultimap:
        """Deserialize bytes produced by :meth:`serialize`.

        Raises:
            SerializationException: If the payload is malformed, truncated,
                or decodes to a None key or value.
        """
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise SerializationException(
                f"Expected bytes, got {type(data).__name__}"
            )
        data = bytes(data)
        if len(data) < HEADER_SIZE or data[:len(MAGIC)] != MAGIC:
            raise SerializationException("Not a serialized multimap")

        version = data[len(MAGIC)]
        if version != FORMAT_VERSION:
            raise SerializationException(f"Unsupported format version: {version}")

        flag = data[len(MAGIC) + 1]
        byte_order = next(
            (order for order, value in _BYTE_ORDER_FLAGS.items() if value == flag),
            None,
        )
        if byte_order is None:
            raise SerializationException(f"Unknown byte order flag: {flag}")

        input_stream = DataInputImpl(data, self._service, byte_order, HEADER_SIZE)
        count = input_stream.read_int()
        if count < 0:
            raise SerializationException(f"Negative entry count: {count}")

        builder = ImmutableListMultimap.builder()
        for _ in range(count):
            key = input_stream.read_object()
            value = input_stream.read_object()
            try:
                builder.put(key, value)
            except IllegalArgumentException as e:
                raise SerializationException(f"Corrupted entry: {e}", cause=e)

        if input_stream.remaining():
            raise SerializationException(
                f"{input_stream.remaining()} trailing bytes after {count} entries"
            )

        _logger.debug("Deserialized %d entries", count)
        return builder.build()
