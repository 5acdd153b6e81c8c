"""Built-in serializers for Python primitive types.

Supported Types:
    - Primitives: None (nested only), bool, int, float, str, bytes
    - Collections: tuple, frozenset

Type IDs:
    Built-in serializers use negative type IDs to distinguish them from
    user-defined serializers (which must use positive IDs).
"""

from typing import Dict

from listmultimap.serialization.api import DataInput, DataOutput, Serializer


NONE_TYPE_ID = 0
BOOLEAN_TYPE_ID = -1
INTEGER_TYPE_ID = -2
DOUBLE_TYPE_ID = -3
STRING_TYPE_ID = -4
BYTE_ARRAY_TYPE_ID = -5
TUPLE_TYPE_ID = -6
FROZENSET_TYPE_ID = -7


class NoneSerializer(Serializer[None]):
    """Serializer for None nested inside a composite key or value.

    The type ID alone marks the value, no payload is written.
    """

    @property
    def type_id(self) -> int:
        return NONE_TYPE_ID

    def write(self, output: DataOutput, obj: None) -> None:
        pass

    def read(self, input: DataInput) -> None:
        return None


class BoolSerializer(Serializer[bool]):
    """Serializes bool as a single byte (0 or 1)."""

    @property
    def type_id(self) -> int:
        return BOOLEAN_TYPE_ID

    def write(self, output: DataOutput, obj: bool) -> None:
        output.write_boolean(obj)

    def read(self, input: DataInput) -> bool:
        return input.read_boolean()


class IntegerSerializer(Serializer[int]):
    """Serializer for integers of any size.

    Values are written as length-prefixed two's complement big-endian
    bytes, so Python's arbitrary precision survives the round trip.
    """

    @property
    def type_id(self) -> int:
        return INTEGER_TYPE_ID

    def write(self, output: DataOutput, obj: int) -> None:
        output.write_byte_array(self._int_to_bytes(int(obj)))

    def read(self, input: DataInput) -> int:
        return self._bytes_to_int(input.read_byte_array())

    @staticmethod
    def _int_to_bytes(value: int) -> bytes:
        length = (value + (value < 0)).bit_length() // 8 + 1
        return value.to_bytes(length, byteorder="big", signed=True)

    @staticmethod
    def _bytes_to_int(data: bytes) -> int:
        if not data:
            return 0
        return int.from_bytes(data, byteorder="big", signed=True)


class DoubleSerializer(Serializer[float]):
    """Serializes float as a 64-bit IEEE 754 double."""

    @property
    def type_id(self) -> int:
        return DOUBLE_TYPE_ID

    def write(self, output: DataOutput, obj: float) -> None:
        output.write_double(obj)

    def read(self, input: DataInput) -> float:
        return input.read_double()


class StringSerializer(Serializer[str]):
    """Serializes str as length-prefixed UTF-8."""

    @property
    def type_id(self) -> int:
        return STRING_TYPE_ID

    def write(self, output: DataOutput, obj: str) -> None:
        output.write_string(obj)

    def read(self, input: DataInput) -> str:
        return input.read_string()


class ByteArraySerializer(Serializer[bytes]):
    """Serializer for bytes and bytearray. Always reads back as bytes."""

    @property
    def type_id(self) -> int:
        return BYTE_ARRAY_TYPE_ID

    def write(self, output: DataOutput, obj: bytes) -> None:
        output.write_byte_array(bytes(obj))

    def read(self, input: DataInput) -> bytes:
        return input.read_byte_array()


class TupleSerializer(Serializer[tuple]):
    """Serializer for tuples, typically composite keys.

    Each item is written as a nested, type-tagged object.
    """

    @property
    def type_id(self) -> int:
        return TUPLE_TYPE_ID

    def write(self, output: DataOutput, obj: tuple) -> None:
        output.write_int(len(obj))
        for item in obj:
            output.write_object(item)

    def read(self, input: DataInput) -> tuple:
        size = input.read_int()
        return tuple(input.read_object() for _ in range(size))


class FrozenSetSerializer(Serializer[frozenset]):
    """Serializer for frozensets."""

    @property
    def type_id(self) -> int:
        return FROZENSET_TYPE_ID

    def write(self, output: DataOutput, obj: frozenset) -> None:
        output.write_int(len(obj))
        for item in obj:
            output.write_object(item)

    def read(self, input: DataInput) -> frozenset:
        size = input.read_int()
        return frozenset(input.read_object() for _ in range(size))


def get_builtin_serializers() -> Dict[int, Serializer]:
    """Get all built-in serializers indexed by type ID."""
    serializers = [
        NoneSerializer(),
        BoolSerializer(),
        IntegerSerializer(),
        DoubleSerializer(),
        StringSerializer(),
        ByteArraySerializer(),
        TupleSerializer(),
        FrozenSetSerializer(),
    ]
    return {s.type_id: s for s in serializers}


def get_type_serializer_mapping() -> Dict[type, Serializer]:
    """Get mapping from Python types to their default serializers.

    ``bool`` precedes ``int`` so subclass lookups pick the narrower type.
    """
    return {
        type(None): NoneSerializer(),
        bool: BoolSerializer(),
        int: IntegerSerializer(),
        float: DoubleSerializer(),
        str: StringSerializer(),
        bytes: ByteArraySerializer(),
        bytearray: ByteArraySerializer(),
        tuple: TupleSerializer(),
        frozenset: FrozenSetSerializer(),
    }
