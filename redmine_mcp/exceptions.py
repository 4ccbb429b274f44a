"""
redmine-mcp exception hierarchy.

All custom exceptions live here to avoid circular imports.
"""


class RedmineError(Exception):
    """Exit code 1 — validation, not-found, network, parse errors."""

    exit_code = 1
    error_type = "error"


class SetupError(RedmineError):
    """Exit code 2 — REDMINE_URL or REDMINE_API_KEY not configured."""

    exit_code = 2
    error_type = "setup"


class InvalidInput(RedmineError):
    """Local validation failed; no request was sent."""

    error_type = "invalid_input"


class UpstreamError(RedmineError):
    """Redmine answered with a non-2xx status."""

    error_type = "upstream"

    def __init__(self, message, status=None, reason=None, detail=None):
        super().__init__(message)
        self.status = status
        self.reason = reason
        self.detail = detail


class NotFound(UpstreamError):
    """Redmine answered 404."""

    error_type = "not_found"


class TransportError(RedmineError):
    """The request never produced a response (DNS, refused, timeout)."""

    error_type = "transport"


class HTTPError(Exception):
    """Raised by _http_request for HTTP errors that callers want to handle."""

    def __init__(self, code, reason, body, headers=None):
        self.code = code
        self.reason = reason
        self.body = body
        self.headers = headers or {}
