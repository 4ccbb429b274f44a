"""Issue tools: get-issue and update-issue (with optional time logging).

Argument names are camelCase: they are the tool contract agents call with.
"""

from __future__ import annotations

from redmine_mcp import InvalidInput, IssueUpdate, TimeLog
from redmine_mcp.mcp_server._core import _call, _contract_error, _finalize_tool_result


def get_issue(
    issueId: str,  # noqa: N803
    includeAttachments: bool | None = None,  # noqa: N803
    includeWatchers: bool | None = None,  # noqa: N803
    includeRelations: bool | None = None,  # noqa: N803
    includeChildren: bool | None = None,  # noqa: N803
    journalLimit: int | None = None,  # noqa: N803
    journalOffset: int | None = None,  # noqa: N803
) -> dict:
    """Fetch details about a Redmine issue by ID. Returns subject, description, status,
    priority, assignee, and change history (journals).

    Args:
        issueId: Issue ID (e.g., '#12345' or '12345').
        includeAttachments/includeWatchers/includeRelations/includeChildren: Extra data.
        journalLimit: Max journal entries to return (default 5).
        journalOffset: Journal entries to skip, oldest first (default 0).

    Returns:
        Dict with issue and journalPagination {total_count, offset, limit}.
    """
    return _finalize_tool_result(
        _call(
            "get_issue",
            "fetching issue",
            issue_id=issueId,
            include_attachments=bool(includeAttachments),
            include_watchers=bool(includeWatchers),
            include_relations=bool(includeRelations),
            include_children=bool(includeChildren),
            journal_limit=journalLimit,
            journal_offset=journalOffset,
        )
    )


def update_issue(
    issueId: str,  # noqa: N803
    subject: str | None = None,
    description: str | None = None,
    statusId: int | None = None,  # noqa: N803
    priorityId: int | None = None,  # noqa: N803
    assignedToId: int | None = None,  # noqa: N803
    trackerId: int | None = None,  # noqa: N803
    parentIssueId: int | None = None,  # noqa: N803
    startDate: str | None = None,  # noqa: N803
    dueDate: str | None = None,  # noqa: N803
    doneRatio: int | None = None,  # noqa: N803
    estimatedHours: float | None = None,  # noqa: N803
    notes: str | None = None,
    privateNotes: bool | None = None,  # noqa: N803
    logHours: float | None = None,  # noqa: N803
    logActivityId: int | None = None,  # noqa: N803
    logComments: str | None = None,  # noqa: N803
    logSpentOn: str | None = None,  # noqa: N803
) -> dict:
    """Update a Redmine issue: fields like status or assignee, add notes, and optionally
    log time spent. All parameters except issueId are optional.

    Args:
        assignedToId: User ID to assign (0 to unassign).
        startDate/dueDate: YYYY-MM-DD.
        doneRatio: Percent done (0-100).
        notes: Comment added to the issue journal; privateNotes makes it private.
        logHours: Hours to log as a time entry.
        logActivityId: Time entry activity (default activity if omitted).
        logSpentOn: Time entry date, YYYY-MM-DD (Redmine defaults to today).

    Returns:
        Dict with issue and journalPagination, plus time_entry on success or
        time_entry_error when the issue was updated but logging time failed.
    """
    try:
        update = IssueUpdate(
            subject=subject,
            description=description,
            status_id=statusId,
            priority_id=priorityId,
            assigned_to_id=assignedToId,
            tracker_id=trackerId,
            parent_issue_id=parentIssueId,
            start_date=startDate,
            due_date=dueDate,
            done_ratio=doneRatio,
            estimated_hours=estimatedHours,
            notes=notes,
            private_notes=privateNotes,
        )
        time_log = None
        if logHours is not None:
            time_log = TimeLog(
                hours=logHours,
                activity_id=logActivityId,
                comments=logComments,
                spent_on=logSpentOn,
            )
    except InvalidInput as e:
        return _finalize_tool_result(
            _contract_error(f"Error updating issue: {e}", e.error_type)
        )
    return _finalize_tool_result(
        _call(
            "update_issue",
            "updating issue",
            issue_id=issueId,
            update=update,
            time_log=time_log,
        )
    )


def register(mcp):
    """Register issue tools with the FastMCP instance."""
    mcp.tool(name="get-issue")(get_issue)
    mcp.tool(name="update-issue")(update_issue)
