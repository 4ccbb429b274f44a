"""
Typed models for issue update payloads.
"""

from dataclasses import dataclass, fields

from redmine_mcp._utils import _drop_none, _parse_date
from redmine_mcp.exceptions import InvalidInput


@dataclass(frozen=True)
class IssueUpdate:
    """Sparse issue update: only non-None fields are sent to Redmine.

    Redmine treats an omitted field as "no change" while an explicit null may
    clear it, so absent values must never be serialized.
    assigned_to_id=0 unassigns and is a real value.
    """

    subject: str | None = None
    description: str | None = None
    status_id: int | None = None
    priority_id: int | None = None
    assigned_to_id: int | None = None
    tracker_id: int | None = None
    parent_issue_id: int | None = None
    start_date: str | None = None
    due_date: str | None = None
    done_ratio: int | None = None
    estimated_hours: float | None = None
    notes: str | None = None
    private_notes: bool | None = None

    def __post_init__(self):
        if self.start_date is not None:
            _parse_date(self.start_date, "start_date")
        if self.due_date is not None:
            _parse_date(self.due_date, "due_date")
        if self.done_ratio is not None and not 0 <= self.done_ratio <= 100:
            raise InvalidInput(f"Invalid done_ratio {self.done_ratio}. Must be between 0 and 100.")

    def to_payload(self):
        """Return the {"field": value} dict for the PUT body's "issue" envelope."""
        return _drop_none({f.name: getattr(self, f.name) for f in fields(self)})


@dataclass(frozen=True)
class TimeLog:
    """Time to log against an issue alongside an update."""

    hours: float
    activity_id: int | None = None
    comments: str | None = None
    spent_on: str | None = None

    def __post_init__(self):
        if self.spent_on is not None:
            _parse_date(self.spent_on, "spent_on")

    def to_payload(self, issue_id, activity_id=None):
        """Build the time_entry body; activity_id overrides the stored one when resolved."""
        payload = {
            "issue_id": issue_id,
            "hours": self.hours,
            "activity_id": activity_id if activity_id is not None else self.activity_id,
            "comments": self.comments,
            "spent_on": self.spent_on,
        }
        return _drop_none(payload)
