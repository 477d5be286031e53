"""Tests for elastic_scroll.exceptions module."""

import pytest

from elastic_scroll.exceptions import (
    ElasticScrollError,
    ParseError,
    ProtocolError,
    ScrollTimeoutError,
    UsageError,
    AuthenticationError,
    TransportError,
)


class TestExceptionHierarchy:
    """Tests for exception inheritance and attributes."""

    def test_all_exceptions_inherit_from_base(self):
        """All custom exceptions inherit from ElasticScrollError."""
        exceptions = [
            ParseError,
            ProtocolError,
            ScrollTimeoutError,
            UsageError,
            AuthenticationError,
            TransportError,
        ]
        for exc_class in exceptions:
            assert issubclass(exc_class, ElasticScrollError)

    def test_base_inherits_from_exception(self):
        """ElasticScrollError inherits from base Exception."""
        assert issubclass(ElasticScrollError, Exception)

    def test_builtin_compatibility(self):
        """Timeout and usage errors also match their builtin counterparts."""
        assert issubclass(ScrollTimeoutError, TimeoutError)
        assert issubclass(UsageError, ValueError)

    def test_catching_base_catches_all(self):
        """Catching ElasticScrollError catches all derived exceptions."""
        with pytest.raises(ElasticScrollError):
            raise ProtocolError("no scroll id on scroll response")

        with pytest.raises(ElasticScrollError):
            raise ScrollTimeoutError("scroll request timed out")


class TestTransportError:
    """Tests for TransportError attributes."""

    def test_stores_status_code(self):
        """TransportError stores the status_code attribute."""
        exc = TransportError("Bad gateway", status_code=502)
        assert exc.status_code == 502
        assert str(exc) == "Bad gateway"

    def test_status_code_defaults_to_none(self):
        """status_code defaults to None if not provided."""
        exc = TransportError("Connection refused")
        assert exc.status_code is None
