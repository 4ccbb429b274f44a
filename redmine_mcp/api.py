"""
HTTP request layer and security helpers for redmine-mcp.
"""

import hashlib
import http.client
import json
import re
import sys
import time
import urllib.error
import urllib.parse
import urllib.request
import uuid

from redmine_mcp.config import API_KEY_HEADER
from redmine_mcp.exceptions import (
    HTTPError,
    NotFound,
    RedmineError,
    TransportError,
    UpstreamError,
)

# ---------------------------------------------------------------------------
# Security helpers
# ---------------------------------------------------------------------------


def _mask_token(token):
    """Show only first 6 chars of a token for safe logging."""
    return token[:6] + "..." if len(token) > 6 else token


def _sanitize_error(body, max_len=500):
    """Truncate and clean error body for safe display."""
    if not body:
        return ""
    cleaned = re.sub(r"<[^>]+>", "", body)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if len(cleaned) > max_len:
        return cleaned[:max_len] + "... [truncated]"
    return cleaned


def _redmine_error_detail(body):
    """Extract Redmine's {"errors": [...]} validation messages from an error body.

    Falls back to the sanitized raw body when it is not that shape.
    """
    if not body:
        return ""
    try:
        parsed = json.loads(body)
    except (json.JSONDecodeError, TypeError):
        return _sanitize_error(body)
    if isinstance(parsed, dict) and isinstance(parsed.get("errors"), list):
        return "; ".join(str(msg) for msg in parsed["errors"])
    return _sanitize_error(body)


# ---------------------------------------------------------------------------
# Structured HTTP logging
# ---------------------------------------------------------------------------


def _sanitize_url_for_log(url):
    """Mask sensitive query params in URLs before logging."""
    parsed = urllib.parse.urlsplit(url)
    if not parsed.query:
        return url
    pairs = urllib.parse.parse_qsl(parsed.query, keep_blank_values=True)
    masked = []
    for key, value in pairs:
        if key.lower() in {"key", "api_key"}:
            masked.append((key, "***"))
        else:
            masked.append((key, value))
    safe_query = urllib.parse.urlencode(masked, doseq=True)
    return urllib.parse.urlunsplit(
        (parsed.scheme, parsed.netloc, parsed.path, safe_query, parsed.fragment)
    )


def _log_http_event(config, **fields):
    """Emit structured HTTP logs to stderr when enabled."""
    if not config.http_log_enabled:
        return
    print("[HTTP] " + json.dumps(fields, ensure_ascii=False, sort_keys=True), file=sys.stderr)


def _is_sampled_request(config, request_id):
    """Decide if a request should be logged based on sample rate."""
    rate = config.http_log_sample_rate
    if rate <= 0:
        return False
    if rate >= 1:
        return True
    if not request_id:
        return False
    digest = hashlib.sha256(request_id.encode("utf-8")).digest()
    bucket = int.from_bytes(digest[:4], "big") / 4294967295.0
    return bucket < rate


# ---------------------------------------------------------------------------
# HTTP request layer
# ---------------------------------------------------------------------------


def build_headers(config, json_body=False):
    """Auth + Accept headers for every call; Content-Type only when a body is sent."""
    headers = {
        API_KEY_HEADER: config.api_key,
        "Accept": "application/json",
    }
    if json_body:
        headers["Content-Type"] = "application/json"
    return headers


def build_url(config, path, params=None):
    """Join the base URL, a resource path, and optional query params."""
    url = config.redmine_url + path
    if params:
        url += "?" + urllib.parse.urlencode(params, safe=",")
    return url


def _http_request(config, url, data=None, headers=None, method="GET"):
    """Make one HTTP request.

    Returns parsed JSON on success, or None for an empty success body.
    Raises HTTPError for non-2xx answers, TransportError when no answer arrives,
    RedmineError for an unreadable success body.
    """
    body = json.dumps(data).encode("utf-8") if data is not None else None
    request_id = str(uuid.uuid4())
    safe_url = _sanitize_url_for_log(url)
    sampled = _is_sampled_request(config, request_id)
    timeout = max(1, config.http_timeout_seconds)
    start = time.perf_counter()

    req = urllib.request.Request(url, data=body, headers=headers or {}, method=method)
    if sampled:
        _log_http_event(
            config,
            phase="request",
            method=method,
            url=safe_url,
            request_id=request_id,
            timeout_seconds=timeout,
        )
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            content_type = resp.headers.get("Content-Type", "")
            raw = resp.read(config.http_max_response_bytes + 1)
            if len(raw) > config.http_max_response_bytes:
                raise RedmineError(
                    "Response too large from Redmine API "
                    f"(>{config.http_max_response_bytes} bytes)."
                )
            if sampled:
                _log_http_event(
                    config,
                    phase="response",
                    method=method,
                    url=safe_url,
                    status=getattr(resp, "status", 200),
                    content_type=content_type,
                    bytes=len(raw),
                    latency_ms=round((time.perf_counter() - start) * 1000, 2),
                    request_id=request_id,
                )
    except urllib.error.HTTPError as e:
        error_body = (
            e.read(config.http_max_response_bytes).decode("utf-8", errors="replace")
            if e.fp
            else ""
        )
        if sampled:
            _log_http_event(
                config,
                phase="response",
                method=method,
                url=safe_url,
                status=e.code,
                latency_ms=round((time.perf_counter() - start) * 1000, 2),
                request_id=request_id,
            )
        raise HTTPError(e.code, e.reason, error_body, headers=e.headers) from e
    except TimeoutError as e:
        if sampled:
            _log_http_event(
                config,
                phase="network_error",
                method=method,
                url=safe_url,
                error="timeout",
                request_id=request_id,
            )
        raise TransportError(
            f"Request timed out after {timeout} seconds. Is Redmine reachable?"
        ) from e
    except urllib.error.URLError as e:
        if sampled:
            _log_http_event(
                config,
                phase="network_error",
                method=method,
                url=safe_url,
                error=f"url_error: {e.reason}",
                request_id=request_id,
            )
        raise TransportError(f"Connection failed: {e.reason}") from e
    except (OSError, http.client.HTTPException) as e:
        if sampled:
            _log_http_event(
                config,
                phase="network_error",
                method=method,
                url=safe_url,
                error=f"{type(e).__name__}: {e}",
                request_id=request_id,
            )
        raise TransportError(f"Connection failed: {e}") from e

    # PUT /issues/{id}.json answers 204 or 200 with an empty body.
    if not raw.strip():
        return None
    try:
        return json.loads(raw.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        if content_type and "json" not in content_type.lower():
            raise RedmineError(
                f"Unexpected Content-Type from server ({content_type}). "
                "This may be a proxy or network issue."
            ) from None
        raise RedmineError("Unexpected response from Redmine API (not valid JSON).") from None


def request(config, path, operation, method="GET", data=None, params=None):
    """Make an authenticated Redmine request.

    *operation* names the action for error messages ("fetch issue 42").
    404 raises NotFound, any other non-2xx raises UpstreamError.
    """
    url = build_url(config, path, params)
    headers = build_headers(config, json_body=data is not None)
    try:
        return _http_request(config, url, data, headers, method)
    except HTTPError as e:
        detail = _redmine_error_detail(e.body)
        message = f"Failed to {operation}: {e.code} {e.reason}"
        if detail:
            message += f" ({detail})"
        error_cls = NotFound if e.code == 404 else UpstreamError
        raise error_cls(message, status=e.code, reason=e.reason, detail=detail) from e


def expect_key(result, key, operation):
    """Return result[key], failing clearly when Redmine answered another shape."""
    if isinstance(result, dict) and key in result:
        return result[key]
    shape = sorted(result.keys()) if isinstance(result, dict) else type(result).__name__
    raise RedmineError(f"Unexpected response to {operation}: missing '{key}' (got {shape}).")
