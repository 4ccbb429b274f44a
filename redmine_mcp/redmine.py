"""
RedmineGateway — the only code that talks to the Redmine REST API.

One method per endpoint; each builds the request, sends it through
redmine_mcp.api, and unwraps the resource envelope.
"""

from __future__ import annotations

import urllib.parse
from typing import Any

from redmine_mcp import api
from redmine_mcp._utils import _drop_none
from redmine_mcp.config import Config
from redmine_mcp.exceptions import InvalidInput
from redmine_mcp.journals import paginate_issue

_API_KEY_FIELDS = {"apikey"}


def _is_secret_field(name: str) -> bool:
    return name.lower().replace("_", "").replace("-", "") in _API_KEY_FIELDS


def strip_api_key(user: dict[str, Any], api_key: str | None = None) -> dict[str, Any]:
    """Drop the API key from a user payload, by field name and by value."""
    return {
        k: v
        for k, v in user.items()
        if not _is_secret_field(k) and not (api_key and v == api_key)
    }


class RedmineGateway:
    """Typed access to the Redmine endpoints redmine-mcp needs."""

    def __init__(self, config: Config):
        self.config = config

    # -- issues ------------------------------------------------------------

    def get_issue(
        self,
        issue_id: int,
        *,
        include_attachments: bool = False,
        include_watchers: bool = False,
        include_relations: bool = False,
        include_children: bool = False,
    ) -> dict[str, Any]:
        """Fetch one issue. Journals are always included."""
        includes = ["journals"]
        if include_attachments:
            includes.append("attachments")
        if include_watchers:
            includes.append("watchers")
        if include_relations:
            includes.append("relations")
        if include_children:
            includes.append("children")
        operation = f"fetch issue {issue_id}"
        result = api.request(
            self.config,
            f"/issues/{issue_id}.json",
            operation,
            params={"include": ",".join(includes)},
        )
        return api.expect_key(result, "issue", operation)

    def update_issue(self, issue_id: int, fields: dict[str, Any]) -> dict[str, Any]:
        """PUT the sparse field set, then refetch.

        Redmine answers the PUT with an empty body, so the post-update state
        comes from a second GET, windowed with the default journal pagination.

        Returns:
            {"issue": ..., "journalPagination": ...}
        """
        api.request(
            self.config,
            f"/issues/{issue_id}.json",
            f"update issue {issue_id}",
            method="PUT",
            data={"issue": fields},
        )
        return paginate_issue(self.get_issue(issue_id))

    # -- time tracking -----------------------------------------------------

    def create_time_entry(self, data: dict[str, Any]) -> dict[str, Any]:
        """POST a time entry. data needs issue_id and a positive hours value."""
        hours = data.get("hours")
        if isinstance(hours, bool) or not isinstance(hours, (int, float)) or not hours > 0:
            raise InvalidInput(f"Invalid hours: {hours!r} (must be a positive number)")
        operation = "create time entry"
        result = api.request(
            self.config,
            "/time_entries.json",
            operation,
            method="POST",
            data={"time_entry": _drop_none(data)},
        )
        return api.expect_key(result, "time_entry", operation)

    def list_time_entry_activities(self) -> list[dict[str, Any]]:
        operation = "fetch time entry activities"
        result = api.request(self.config, "/enumerations/time_entry_activities.json", operation)
        return api.expect_key(result, "time_entry_activities", operation)

    # -- reference data ----------------------------------------------------

    def list_issue_statuses(self) -> list[dict[str, Any]]:
        operation = "fetch issue statuses"
        result = api.request(self.config, "/issue_statuses.json", operation)
        return api.expect_key(result, "issue_statuses", operation)

    def list_project_members(
        self,
        project_id: str | int,
        *,
        limit: int | None = None,
        offset: int | None = None,
    ) -> dict[str, Any]:
        """Return Redmine's membership page unchanged: memberships + pagination envelope."""
        params = {}
        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["offset"] = offset
        project = urllib.parse.quote(str(project_id), safe="")
        operation = "fetch project members"
        result = api.request(
            self.config,
            f"/projects/{project}/memberships.json",
            operation,
            params=params or None,
        )
        return {
            "memberships": api.expect_key(result, "memberships", operation),
            "total_count": result.get("total_count"),
            "offset": result.get("offset"),
            "limit": result.get("limit"),
        }

    def get_current_user(self) -> dict[str, Any]:
        """Fetch the authenticated user. The API key never leaves this method."""
        operation = "fetch current user"
        result = api.request(self.config, "/users/current.json", operation)
        user = api.expect_key(result, "user", operation)
        return strip_api_key(user, self.config.api_key)
