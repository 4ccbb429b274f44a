"""Reference-data tools: statuses, project members, current user."""

from __future__ import annotations

from redmine_mcp.mcp_server._core import _call, _finalize_tool_result


def list_issue_statuses() -> dict:
    """List all available issue statuses in Redmine, with IDs, names, and whether each
    represents a closed state. Use this to find valid status IDs for update-issue.

    Returns:
        Dict with statuses (list of {id, name, is_closed}).
    """
    return _finalize_tool_result(
        _call("list_issue_statuses", "fetching issue statuses"), list_key="statuses"
    )


def list_project_members(
    projectId: str,  # noqa: N803
    limit: int | None = None,
    offset: int | None = None,
) -> dict:
    """List members of a Redmine project: users and groups with their roles.
    Use this to find user IDs for assigning issues.

    Args:
        projectId: Project ID or identifier (e.g., 'my-project' or '1').
        limit: Max members to return (Redmine default 25).
        offset: Members to skip for pagination.

    Returns:
        Dict with memberships, total_count, offset, limit.
    """
    return _finalize_tool_result(
        _call(
            "list_project_members",
            "listing project members",
            project_id=projectId,
            limit=limit,
            offset=offset,
        )
    )


def whoami() -> dict:
    """Get the current user's account information (ID, login, name, email). Use this
    to identify yourself, e.g. to assign issues to yourself.

    Returns:
        Dict with the user's profile fields. The API key is never included.
    """
    return _finalize_tool_result(_call("whoami", "fetching current user"))


def register(mcp):
    """Register reference-data tools with the FastMCP instance."""
    mcp.tool(name="list-issue-statuses")(list_issue_statuses)
    mcp.tool(name="list-project-members")(list_project_members)
    mcp.tool(name="whoami")(whoami)
