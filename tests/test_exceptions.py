"""Tests for the exception hierarchy and package re-exports."""

from redmine_mcp.exceptions import (
    HTTPError,
    InvalidInput,
    NotFound,
    RedmineError,
    SetupError,
    TransportError,
    UpstreamError,
)


class TestExceptionHierarchy:
    def test_redmine_error_is_exception(self):
        assert issubclass(RedmineError, Exception)

    def test_all_domain_errors_are_redmine_errors(self):
        for cls in (SetupError, InvalidInput, UpstreamError, NotFound, TransportError):
            assert issubclass(cls, RedmineError)

    def test_not_found_is_upstream_error(self):
        assert issubclass(NotFound, UpstreamError)

    def test_http_error_not_redmine_error(self):
        assert not issubclass(HTTPError, RedmineError)

    def test_exit_codes(self):
        assert RedmineError.exit_code == 1
        assert InvalidInput.exit_code == 1
        assert SetupError.exit_code == 2

    def test_error_types(self):
        assert RedmineError.error_type == "error"
        assert SetupError.error_type == "setup"
        assert InvalidInput.error_type == "invalid_input"
        assert UpstreamError.error_type == "upstream"
        assert NotFound.error_type == "not_found"
        assert TransportError.error_type == "transport"


class TestUpstreamErrorAttrs:
    def test_carries_status_and_reason(self):
        err = NotFound("Failed to fetch issue 1: 404 Not Found", status=404, reason="Not Found")
        assert err.status == 404
        assert err.reason == "Not Found"
        assert err.detail is None
        assert "404" in str(err)


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


class TestPackageReExports:
    def test_init_re_exports(self):
        from redmine_mcp import InvalidInput as InitInvalidInput
        from redmine_mcp import RedmineError as InitRedmineError

        assert InitRedmineError is RedmineError
        assert InitInvalidInput is InvalidInput
