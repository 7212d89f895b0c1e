"""Tests for exception classes."""

import pytest

from openx_client.exceptions import (
    AuthenticationError,
    HandshakeError,
    OpenXAuthError,
    OpenXError,
    PreconditionError,
    TransportError,
    UnsupportedMethodError,
)


class TestExceptionHierarchy:
    """Tests for exception class hierarchy."""

    def test_openx_error_is_base(self) -> None:
        """All exceptions should inherit from OpenXError."""
        for cls in (
            AuthenticationError,
            HandshakeError,
            OpenXAuthError,
            PreconditionError,
            TransportError,
            UnsupportedMethodError,
        ):
            assert issubclass(cls, OpenXError)

    def test_handshake_errors_share_auth_base(self) -> None:
        assert issubclass(HandshakeError, OpenXAuthError)
        assert issubclass(AuthenticationError, OpenXAuthError)
        assert issubclass(PreconditionError, OpenXAuthError)

    def test_transport_error_is_not_auth_error(self) -> None:
        """Network failures must not be caught as rejected credentials."""
        assert not issubclass(TransportError, OpenXAuthError)
        assert not issubclass(AuthenticationError, TransportError)

    def test_unsupported_method_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            raise UnsupportedMethodError("trace")


class TestErrorAttributes:
    """Tests for stored error details."""

    def test_stores_message(self) -> None:
        error = OpenXError("Something went wrong")

        assert error.message == "Something went wrong"
        assert str(error) == "Something went wrong"

    def test_transport_error_details(self) -> None:
        error = TransportError("API error: 404", status_code=404, response_body={"a": 1})

        assert error.status_code == 404
        assert error.response_body == {"a": 1}

    def test_transport_error_without_response(self) -> None:
        error = TransportError("Connection refused")

        assert error.status_code is None
        assert error.response_body is None

    def test_handshake_error_stage(self) -> None:
        error = HandshakeError("bad", stage="request_token", status_code=500)

        assert error.stage == "request_token"
        assert error.status_code == 500

    def test_authentication_error_stage(self) -> None:
        error = AuthenticationError("Login rejected: 401", status_code=401)

        assert error.stage == "login"
        assert error.status_code == 401

    def test_precondition_error_stage(self) -> None:
        assert PreconditionError("call login()", stage="access_token").stage == "access_token"

    def test_unsupported_method_message(self) -> None:
        error = UnsupportedMethodError("trace")

        assert error.method == "trace"
        assert error.message == "Unsupported HTTP method: 'trace'"
