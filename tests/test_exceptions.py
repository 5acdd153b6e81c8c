"""Unit tests for listmultimap.exceptions module."""

import pytest

from listmultimap.exceptions import (
    MultimapException,
    IllegalArgumentException,
    ConfigurationException,
    SerializationException,
)


class TestMultimapException:
    """Tests for MultimapException base class."""

    def test_create_with_message(self):
        ex = MultimapException("test message")
        assert str(ex) == "test message"
        assert ex.cause is None

    def test_create_with_message_and_cause(self):
        cause = ValueError("original error")
        ex = MultimapException("wrapper message", cause=cause)
        assert str(ex) == "wrapper message"
        assert ex.cause is cause

    def test_create_empty(self):
        ex = MultimapException()
        assert str(ex) == ""
        assert ex.cause is None

    def test_inheritance(self):
        assert isinstance(MultimapException("test"), Exception)


class TestIllegalArgumentException:
    """Tests for IllegalArgumentException."""

    def test_inheritance(self):
        ex = IllegalArgumentException("null key")
        assert isinstance(ex, MultimapException)
        assert isinstance(ex, ValueError)

    def test_catch_as_value_error(self):
        with pytest.raises(ValueError):
            raise IllegalArgumentException("bad")


class TestOtherExceptions:
    """Tests for ConfigurationException and SerializationException."""

    @pytest.mark.parametrize("exc_class", [ConfigurationException, SerializationException])
    def test_inheritance(self, exc_class):
        ex = exc_class("error")
        assert isinstance(ex, MultimapException)
        assert not isinstance(ex, IllegalArgumentException)

    def test_cause_chain(self):
        root = OSError("disk")
        middle = SerializationException("read failed", cause=root)
        top = ConfigurationException("config failed", cause=middle)
        assert top.cause is middle
        assert top.cause.cause is root

    def test_catch_all_with_base(self):
        for exc_class in (IllegalArgumentException, ConfigurationException, SerializationException):
            with pytest.raises(MultimapException):
                raise exc_class("error")
