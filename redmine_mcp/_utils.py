"""
Shared pure-utility functions for redmine-mcp.

These helpers have no business logic and no side effects.
"""

import re
from datetime import datetime

from redmine_mcp.exceptions import InvalidInput

_LEADING_INT = re.compile(r"[+-]?\d+")


def parse_issue_id(issue_id):
    """Parse "#12345" or "12345" into 12345. Raises InvalidInput otherwise.

    Like a lenient integer parse, trailing garbage after the leading digits is ignored.
    """
    if isinstance(issue_id, bool):
        raise InvalidInput(f"Invalid issue ID: {issue_id}")
    if isinstance(issue_id, int):
        return issue_id
    text = str(issue_id).strip()
    if text.startswith("#"):
        text = text[1:]
    match = _LEADING_INT.match(text.strip())
    if not match:
        raise InvalidInput(f"Invalid issue ID: {issue_id}")
    return int(match.group(0))


def _parse_date(date_str, field_name="date"):
    """Validate a YYYY-MM-DD string and return it unchanged. Raises InvalidInput."""
    if not isinstance(date_str, str) or not re.fullmatch(r"\d{4}-\d{2}-\d{2}", date_str):
        raise InvalidInput(f"Invalid {field_name} '{date_str}'. Use YYYY-MM-DD format.")
    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise InvalidInput(f"Invalid {field_name} '{date_str}'. Use YYYY-MM-DD format.") from e
    return date_str


def _drop_none(d):
    """Return a copy of d without keys whose value is None."""
    return {k: v for k, v in d.items() if v is not None}
