"""redmine-mcp — Redmine issue tools for AI agents over the Model Context Protocol."""

from redmine_mcp.client import RedmineClient
from redmine_mcp.config import VERSION, Config, load_config
from redmine_mcp.exceptions import (
    InvalidInput,
    NotFound,
    RedmineError,
    SetupError,
    TransportError,
    UpstreamError,
)
from redmine_mcp.models import IssueUpdate, TimeLog
from redmine_mcp.redmine import RedmineGateway
from redmine_mcp.types import (
    Activity,
    CurrentUser,
    Issue,
    IssueResult,
    IssueStatus,
    Journal,
    JournalPagination,
    MembershipPage,
    TimeEntry,
    UpdateIssueResult,
)

__all__ = [
    "VERSION",
    "Config",
    "load_config",
    "RedmineClient",
    "RedmineGateway",
    "IssueUpdate",
    "TimeLog",
    "RedmineError",
    "SetupError",
    "InvalidInput",
    "NotFound",
    "UpstreamError",
    "TransportError",
    "Activity",
    "CurrentUser",
    "Issue",
    "IssueResult",
    "IssueStatus",
    "Journal",
    "JournalPagination",
    "MembershipPage",
    "TimeEntry",
    "UpdateIssueResult",
]
