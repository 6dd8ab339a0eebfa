"""Core helpers: _call dispatcher wrapper and the error response contract."""

from __future__ import annotations

from miro_mcp.config import CONTRACT_SCHEMA_VERSION
from miro_mcp.dispatcher import Dispatcher
from miro_mcp.exceptions import (
    AuthError,
    MiroError,
    TransportError,
    UnknownOperationError,
    ValidationError,
)


def _contract_error(message: str, error_type: str = "error") -> dict:
    """Return a stable MCP error envelope."""
    return {
        "ok": False,
        "schema_version": CONTRACT_SCHEMA_VERSION,
        "type": error_type,
        "error": message,
        "error_detail": {
            "type": error_type,
            "message": message,
        },
    }


def _error_type(err: MiroError) -> str:
    # AuthError first: it is also a TransportError.
    if isinstance(err, AuthError):
        return "auth"
    if isinstance(err, TransportError):
        return "transport"
    if isinstance(err, ValidationError):
        return "validation"
    if isinstance(err, UnknownOperationError):
        return "unknown_operation"
    return "error"


def _call(dispatcher: Dispatcher, operation: str, **kwargs):
    """Invoke a dispatcher operation, converting exceptions to error dicts."""
    try:
        return dispatcher.invoke(operation, kwargs)
    except MiroError as e:
        return _contract_error(str(e), _error_type(e))
    except Exception as e:
        return _contract_error(f"Unexpected error: {e}", "error")
