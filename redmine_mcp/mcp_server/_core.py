"""Core helpers: client caching, _call dispatcher, response contract."""

from __future__ import annotations

from redmine_mcp import RedmineClient, RedmineError
from redmine_mcp.config import CONTRACT_SCHEMA_VERSION

_client: RedmineClient | None = None


def _get_client() -> RedmineClient:
    """Return a cached RedmineClient, creating one on first use."""
    global _client
    if _client is None:
        _client = RedmineClient()
    return _client


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


def _finalize_tool_result(result, list_key: str = "items"):
    """Add contract metadata (ok/schema_version) to a tool result.

    Error envelopes pass through unchanged; list results are wrapped under
    *list_key* so every tool returns an object.
    """
    if isinstance(result, dict):
        if result.get("ok") is False:
            return result
        out = dict(result)
        out.setdefault("ok", True)
        out.setdefault("schema_version", CONTRACT_SCHEMA_VERSION)
        return out
    return {
        "ok": True,
        "schema_version": CONTRACT_SCHEMA_VERSION,
        list_key: result,
    }


_ALLOWED_METHODS = {
    "get_issue",
    "update_issue",
    "list_issue_statuses",
    "list_project_members",
    "whoami",
}


def _call(method_name: str, action: str, **kwargs):
    """Call a RedmineClient method, converting exceptions to error dicts.

    *action* prefixes error messages ("fetching issue" -> "Error fetching issue: ...").
    """
    if method_name not in _ALLOWED_METHODS:
        return _contract_error(f"Unknown method: {method_name}", "error")
    try:
        client = _get_client()
        return getattr(client, method_name)(**kwargs)
    except RedmineError as e:
        return _contract_error(f"Error {action}: {e}", e.error_type)
    except Exception as e:
        return _contract_error(f"Error {action}: Unexpected error: {e}", "error")
