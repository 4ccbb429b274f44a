"""
Journal windowing for fetched issues.

Issues can carry hundreds of journal entries; callers get a bounded window
plus a descriptor of the full history so they can ask for the next one.
"""

from __future__ import annotations

from typing import Any

from redmine_mcp.config import DEFAULT_JOURNAL_LIMIT, DEFAULT_JOURNAL_OFFSET
from redmine_mcp.exceptions import InvalidInput


def paginate_journals(
    journals: list[dict[str, Any]],
    limit: int | None = None,
    offset: int | None = None,
) -> tuple[list[dict[str, Any]], dict[str, int]]:
    """Slice journals[offset:offset + limit] (oldest-first order kept).

    Returns:
        (window, pagination) where pagination is
        {"total_count", "offset", "limit"} and total_count counts every journal.
    """
    if limit is None:
        limit = DEFAULT_JOURNAL_LIMIT
    if offset is None:
        offset = DEFAULT_JOURNAL_OFFSET
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise InvalidInput(f"Invalid journal limit: {limit!r} (must be a positive integer)")
    if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
        raise InvalidInput(f"Invalid journal offset: {offset!r} (must be >= 0)")

    window = list(journals[offset : offset + limit])
    pagination = {
        "total_count": len(journals),
        "offset": offset,
        "limit": limit,
    }
    return window, pagination


def paginate_issue(
    issue: dict[str, Any],
    limit: int | None = None,
    offset: int | None = None,
) -> dict[str, Any]:
    """Return {"issue", "journalPagination"} with the issue's journals windowed.

    The input issue is not modified; a shallow copy carries the window.
    """
    window, pagination = paginate_journals(issue.get("journals") or [], limit, offset)
    out = dict(issue)
    out["journals"] = window
    return {"issue": out, "journalPagination": pagination}
