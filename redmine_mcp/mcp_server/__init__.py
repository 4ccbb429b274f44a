"""MCP server exposing RedmineClient methods as tools.

Package structure:
  __init__.py           — FastMCP init, register() calls, re-exports
  __main__.py           — ``python -m redmine_mcp.mcp_server`` entry point
  _core.py              — Client caching, _call dispatcher, response contract
  _tools_issues.py      — get-issue, update-issue
  _tools_reference.py   — list-issue-statuses, list-project-members, whoami

Run: python -m redmine_mcp.mcp_server  (needs REDMINE_URL and REDMINE_API_KEY)
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from redmine_mcp.mcp_server import _tools_issues, _tools_reference

mcp = FastMCP(
    "redmine",
    instructions=(
        "Redmine issue tracker tools. "
        "Issue IDs may be given as '123' or '#123'. "
        "get-issue returns 5 journals by default; page through history with "
        "journalLimit/journalOffset using journalPagination.total_count. "
        "update-issue can log time in the same call (logHours); if "
        "'time_entry_error' appears, the issue update succeeded but the time "
        "entry was not created. "
        "Use list-issue-statuses and list-project-members to find valid IDs."
    ),
)

for _mod in [_tools_issues, _tools_reference]:
    _mod.register(mcp)

# ---------------------------------------------------------------------------
# Re-exports (tests import via mcp_mod.xxx)
# ---------------------------------------------------------------------------

from redmine_mcp.mcp_server._core import (  # noqa: E402, F401
    _call,
    _contract_error,
    _finalize_tool_result,
    _get_client,
)
from redmine_mcp.mcp_server._tools_issues import get_issue, update_issue  # noqa: E402, F401
from redmine_mcp.mcp_server._tools_reference import (  # noqa: E402, F401
    list_issue_statuses,
    list_project_members,
    whoami,
)


def main():
    """Run the MCP server (stdio transport)."""
    mcp.run()
