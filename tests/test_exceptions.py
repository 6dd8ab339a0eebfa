"""Tests for the exception hierarchy and package re-exports."""

from miro_mcp.exceptions import (
    AuthError,
    HTTPError,
    MiroError,
    StartupConfigError,
    TransportError,
    UnknownOperationError,
    ValidationError,
)


class TestExceptionHierarchy:
    def test_miro_error_is_exception(self):
        assert issubclass(MiroError, Exception)

    def test_startup_config_error_is_miro_error(self):
        assert issubclass(StartupConfigError, MiroError)

    def test_auth_error_is_transport_error(self):
        assert issubclass(AuthError, TransportError)
        assert issubclass(TransportError, MiroError)

    def test_validation_and_unknown_operation_are_miro_errors(self):
        assert issubclass(ValidationError, MiroError)
        assert issubclass(UnknownOperationError, MiroError)

    def test_http_error_not_miro_error(self):
        assert not issubclass(HTTPError, MiroError)

    def test_exit_codes(self):
        assert MiroError.exit_code == 1
        assert StartupConfigError.exit_code == 2
        assert TransportError.exit_code == 1


class TestTransportErrorAttrs:
    def test_status(self):
        err = TransportError("boom", status=502)
        assert err.status == 502
        assert str(err) == "boom"

    def test_status_defaults_to_none(self):
        assert TransportError("boom").status is None


class TestHTTPErrorAttrs:
    def test_http_error_attrs(self):
        err = HTTPError(404, "Not Found", "body text", {"X-Req": "abc"})
        assert err.code == 404
        assert err.reason == "Not Found"
        assert err.body == "body text"
        assert err.headers == {"X-Req": "abc"}

    def test_http_error_default_headers(self):
        err = HTTPError(500, "Server Error", "")
        assert err.headers == {}


class TestReExports:
    def test_init_re_exports(self):
        from miro_mcp import MiroError as InitMiroError
        from miro_mcp import ValidationError as InitValidationError

        assert InitMiroError is MiroError
        assert InitValidationError is ValidationError
