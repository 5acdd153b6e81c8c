"""Multimap exceptions.

This module defines the exception hierarchy for the listmultimap library.
All exceptions inherit from :class:`MultimapException`.

Example:
    Handling multimap exceptions::

        from listmultimap.exceptions import (
            MultimapException,
            IllegalArgumentException,
        )

        try:
            builder.put("key", None)
        except IllegalArgumentException:
            print("None values are not allowed")
        except MultimapException as e:
            print(f"Multimap error: {e}")
"""


class MultimapException(Exception):
    """Base class for all multimap exceptions.

    All exceptions raised by the listmultimap library inherit from
    this class, allowing for broad exception handling when needed.

    Args:
        message: The error message describing the exception.
        cause: The underlying exception that caused this error, if any.

    Attributes:
        cause: The underlying cause of this exception, if any.
    """

    def __init__(self, message: str = "", cause: Exception = None):
        super().__init__(message)
        self.cause = cause


class IllegalArgumentException(MultimapException, ValueError):
    """Raised when an illegal or inappropriate argument is passed.

    This is the only error a well-formed read or write can produce on a
    multimap. It is raised synchronously by the call that introduces the
    bad argument, before any state changes.

    Example:
        - Passing None as a key or value
        - Passing an odd number of arguments to ``of()``
        - Copying from an object that has no ``entries()``
    """
    pass


class ConfigurationException(MultimapException):
    """Raised when there is a configuration error.

    Example:
        - Unknown YAML layout or byte order name
        - Configuration file that cannot be read or parsed
    """
    pass


class SerializationException(MultimapException):
    """Raised when encoding or decoding a multimap fails.

    Example:
        - Element type with no registered serializer
        - Truncated or corrupted binary payload
        - YAML document with an unexpected shape
    """
    pass
