"""
miro-mcp exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class MiroError(Exception):
    """Base error for miro-mcp. Exit code 1."""

    exit_code = 1


class StartupConfigError(MiroError):
    """Exit code 2: no OAuth token configured."""

    exit_code = 2


class ValidationError(MiroError):
    """Operation parameters are missing or out of range. Nothing was sent."""


class UnknownOperationError(MiroError):
    """Operation name is not in the dispatcher catalog."""


class TransportError(MiroError):
    """Non-success HTTP response, network failure, or unreadable response body."""

    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status


class AuthError(TransportError):
    """Miro rejected the OAuth token (401/403)."""


class HTTPError(Exception):
    """Raised by _http_request for HTTP errors that callers want to handle."""

    def __init__(self, code, reason, body, headers=None):
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
