"""
RedmineClient — public Python API for reading and updating Redmine issues.

Single entry point for programmatic use and for the MCP server.
All methods return plain dicts/lists suitable for JSON serialization.
"""

from __future__ import annotations

# TypedDict return types live in redmine_mcp.types for documentation.
from typing import Any

from redmine_mcp._utils import parse_issue_id
from redmine_mcp.config import Config, load_config
from redmine_mcp.exceptions import RedmineError
from redmine_mcp.journals import paginate_issue, paginate_journals
from redmine_mcp.models import IssueUpdate, TimeLog
from redmine_mcp.redmine import RedmineGateway

_TIME_ENTRY_ERROR_PREFIX = "Failed to create time entry"


def _pick_activity_id(activities: list[dict[str, Any]]) -> int | None:
    """Default-flagged activity, else the first one, else None."""
    for activity in activities:
        if activity.get("is_default"):
            return activity.get("id")
    if activities:
        return activities[0].get("id")
    return None


class RedmineClient:
    """Programmatic API for Redmine issues, time logging, and reference data.

    Args:
        config: Connection settings. Defaults to load_config() (.env + environment).
        gateway: Pre-built RedmineGateway, mainly for tests.
    """

    def __init__(self, config: Config | None = None, *, gateway: RedmineGateway | None = None):
        if gateway is None:
            gateway = RedmineGateway(config if config is not None else load_config())
        self.gateway = gateway

    # -------------------------------------------------------------------
    # Issues
    # -------------------------------------------------------------------

    def get_issue(
        self,
        issue_id: str | int,
        *,
        include_attachments: bool = False,
        include_watchers: bool = False,
        include_relations: bool = False,
        include_children: bool = False,
        journal_limit: int | None = None,
        journal_offset: int | None = None,
    ) -> dict[str, Any]:
        """Fetch an issue with a window of its journals.

        Args:
            issue_id: "#123", "123" or 123.
            journal_limit/journal_offset: Journal window (default 5/0).

        Returns:
            Dict with issue (journals windowed) and journalPagination.
        """
        numeric_id = parse_issue_id(issue_id)
        paginate_journals([], journal_limit, journal_offset)
        issue = self.gateway.get_issue(
            numeric_id,
            include_attachments=include_attachments,
            include_watchers=include_watchers,
            include_relations=include_relations,
            include_children=include_children,
        )
        return paginate_issue(issue, journal_limit, journal_offset)

    def update_issue(
        self,
        issue_id: str | int,
        update: IssueUpdate | None = None,
        time_log: TimeLog | None = None,
    ) -> dict[str, Any]:
        """Apply a sparse issue update, then optionally log time.

        The issue update is all-or-nothing: a bad id or a failed PUT raises.
        Time logging is best-effort: its failure is reported in
        time_entry_error while the updated issue is still returned.

        Returns:
            Dict with issue, journalPagination, and time_entry or time_entry_error
            when time_log was given.
        """
        numeric_id = parse_issue_id(issue_id)
        fields = (update or IssueUpdate()).to_payload()

        result = self.gateway.update_issue(numeric_id, fields)
        response = {
            "issue": result["issue"],
            "journalPagination": result["journalPagination"],
        }
        if time_log is None:
            return response

        try:
            response["time_entry"] = self._log_time(numeric_id, time_log)
        except RedmineError as e:
            message = str(e)
            if not message.startswith(_TIME_ENTRY_ERROR_PREFIX):
                message = f"{_TIME_ENTRY_ERROR_PREFIX}: {message}"
            response["time_entry_error"] = message
        return response

    def _log_time(self, issue_id: int, time_log: TimeLog) -> dict[str, Any]:
        activity_id = time_log.activity_id
        if activity_id is None:
            # Empty list leaves activity_id unset; Redmine applies or rejects its own default.
            activity_id = _pick_activity_id(self.gateway.list_time_entry_activities())
        return self.gateway.create_time_entry(time_log.to_payload(issue_id, activity_id))

    # -------------------------------------------------------------------
    # Reference data
    # -------------------------------------------------------------------

    def list_issue_statuses(self) -> list[dict[str, Any]]:
        """List all issue statuses (id, name, is_closed)."""
        return self.gateway.list_issue_statuses()

    def list_project_members(
        self,
        project_id: str | int,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        """List project memberships (users and groups with roles), one page."""
        return self.gateway.list_project_members(project_id, limit=limit, offset=offset)

    def whoami(self) -> dict[str, Any]:
        """Current user's account info, without the API key."""
        return self.gateway.get_current_user()
