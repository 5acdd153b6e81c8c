"""Serialization API interfaces.

This module defines the interfaces used by the binary multimap serializer:
abstract base classes for reading and writing primitive data, and the
:class:`Serializer` interface for individual key and value types.

Example:
    Implementing a custom serializer::

        from listmultimap.serialization.api import DataInput, DataOutput, Serializer

        class PointSerializer(Serializer[Point]):
            @property
            def type_id(self) -> int:
                return 1000

            def write(self, output: DataOutput, point: Point) -> None:
                output.write_double(point.x)
                output.write_double(point.y)

            def read(self, input: DataInput) -> Point:
                return Point(input.read_double(), input.read_double())
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class DataInput(ABC):
    """Interface for reading serialized data.

    Provides methods for reading primitive types and objects from
    a binary buffer. Used by serializers during deserialization.
    """

    @abstractmethod
    def read_boolean(self) -> bool:
        """Read a boolean value."""
        pass

    @abstractmethod
    def read_byte(self) -> int:
        """Read a signed byte value (-128 to 127)."""
        pass

    @abstractmethod
    def read_int(self) -> int:
        """Read a 32-bit integer value."""
        pass

    @abstractmethod
    def read_long(self) -> int:
        """Read a 64-bit integer value."""
        pass

    @abstractmethod
    def read_double(self) -> float:
        """Read a 64-bit floating point value."""
        pass

    @abstractmethod
    def read_string(self) -> str:
        """Read a UTF-8 string.

        Returns:
            The decoded string.
        """
        pass

    @abstractmethod
    def read_byte_array(self) -> bytes:
        """Read a length-prefixed byte array."""
        pass

    @abstractmethod
    def read_object(self) -> Any:
        """Read a type-tagged object.

        Returns:
            The deserialized object, which may be None when nested.
        """
        pass

    @abstractmethod
    def position(self) -> int:
        """Get the current read position."""
        pass

    @abstractmethod
    def remaining(self) -> int:
        """Get the number of unread bytes."""
        pass


class DataOutput(ABC):
    """Interface for writing serialized data.

    Provides methods for writing primitive types and objects to
    a binary buffer. Used by serializers during serialization.
    """

    @abstractmethod
    def write_boolean(self, value: bool) -> None:
        """Write a boolean value."""
        pass

    @abstractmethod
    def write_byte(self, value: int) -> None:
        """Write a signed byte value."""
        pass

    @abstractmethod
    def write_int(self, value: int) -> None:
        """Write a 32-bit integer value."""
        pass

    @abstractmethod
    def write_long(self, value: int) -> None:
        """Write a 64-bit integer value."""
        pass

    @abstractmethod
    def write_double(self, value: float) -> None:
        """Write a 64-bit floating point value."""
        pass

    @abstractmethod
    def write_string(self, value: str) -> None:
        """Write a UTF-8 string with a length prefix."""
        pass

    @abstractmethod
    def write_byte_array(self, value: bytes) -> None:
        """Write a byte array with a length prefix."""
        pass

    @abstractmethod
    def write_object(self, value: Any) -> None:
        """Write an object preceded by its type ID."""
        pass

    @abstractmethod
    def to_byte_array(self) -> bytes:
        """Get everything written so far.

        Returns:
            The serialized bytes.
        """
        pass


class Serializer(ABC, Generic[T]):
    """Base interface for element serializers.

    Built-in serializers use negative type IDs. Custom serializers must use
    positive type IDs.

    Example:
        >>> class PointSerializer(Serializer[Point]):
        ...     @property
        ...     def type_id(self) -> int:
        ...         return 1000
        ...
        ...     def write(self, output: DataOutput, obj: Point) -> None:
        ...         output.write_double(obj.x)
        ...         output.write_double(obj.y)
        ...
        ...     def read(self, input: DataInput) -> Point:
        ...         return Point(input.read_double(), input.read_double())
    """

    @property
    @abstractmethod
    def type_id(self) -> int:
        """Get the unique type ID for this serializer."""
        pass

    @abstractmethod
    def write(self, output: DataOutput, obj: T) -> None:
        """Serialize an object.

        Args:
            output: The output to write to.
            obj: The object to serialize.
        """
        pass

    @abstractmethod
    def read(self, input: DataInput) -> T:
        """Deserialize an object.

        Args:
            input: The input to read from.

        Returns:
            The deserialized object.
        """
        pass
