"""Typed response definitions for Redmine payloads and RedmineClient results.

These TypedDicts document the shape of dicts passed through the client.
They are optional — runtime behavior is unchanged (plain dicts).
"""

from __future__ import annotations

from typing import TypedDict

# ---------------------------------------------------------------------------
# Shared references
# ---------------------------------------------------------------------------


class NamedRef(TypedDict):
    """{id, name} reference used for projects, trackers, statuses, users."""

    id: int
    name: str


# ---------------------------------------------------------------------------
# Issues and journals
# ---------------------------------------------------------------------------


class JournalDetail(TypedDict, total=False):
    property: str
    name: str
    old_value: str | None
    new_value: str | None


class Journal(TypedDict, total=False):
    id: int
    user: NamedRef
    notes: str
    private_notes: bool
    created_on: str
    details: list[JournalDetail]


class Attachment(TypedDict, total=False):
    id: int
    filename: str
    filesize: int
    content_type: str
    description: str
    author: NamedRef
    created_on: str


class Relation(TypedDict, total=False):
    id: int
    issue_id: int
    issue_to_id: int
    relation_type: str
    delay: int | None


class Issue(TypedDict, total=False):
    id: int
    project: NamedRef
    tracker: NamedRef
    status: NamedRef
    priority: NamedRef
    author: NamedRef
    assigned_to: NamedRef
    subject: str
    description: str
    start_date: str | None
    due_date: str | None
    done_ratio: int
    estimated_hours: float | None
    created_on: str
    updated_on: str
    journals: list[Journal]
    attachments: list[Attachment]
    watchers: list[NamedRef]
    relations: list[Relation]
    children: list[Issue]


class JournalPagination(TypedDict):
    total_count: int
    offset: int
    limit: int


class IssueResult(TypedDict):
    """Return type of RedmineClient.get_issue()."""

    issue: Issue
    journalPagination: JournalPagination


class UpdateIssueResult(IssueResult, total=False):
    """Return type of RedmineClient.update_issue().

    time_entry_error present means the issue update succeeded but logging time failed.
    """

    time_entry: TimeEntry
    time_entry_error: str


# ---------------------------------------------------------------------------
# Time tracking
# ---------------------------------------------------------------------------


class Activity(TypedDict):
    id: int
    name: str
    is_default: bool


class TimeEntry(TypedDict, total=False):
    id: int
    project: NamedRef
    issue: dict
    user: NamedRef
    activity: NamedRef
    hours: float
    comments: str
    spent_on: str
    created_on: str
    updated_on: str


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------


class IssueStatus(TypedDict):
    id: int
    name: str
    is_closed: bool


class Role(TypedDict, total=False):
    id: int
    name: str
    inherited: bool


class Membership(TypedDict, total=False):
    id: int
    project: NamedRef
    user: NamedRef
    group: NamedRef
    roles: list[Role]


class MembershipPage(TypedDict):
    """Return type of RedmineClient.list_project_members()."""

    memberships: list[Membership]
    total_count: int
    offset: int
    limit: int


class CurrentUser(TypedDict, total=False):
    """Return type of RedmineClient.whoami(). Never carries api_key."""

    id: int
    login: str
    firstname: str
    lastname: str
    mail: str
    created_on: str
    updated_on: str
    last_login_on: str
    passwd_changed_on: str
    avatar_url: str
    status: int
    custom_fields: list[dict]
