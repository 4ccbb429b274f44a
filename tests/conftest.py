"""
Shared test fixtures for redmine-mcp tests.
Isolates configuration from the real environment and mocks HTTP at urlopen.
"""

import copy
import io
import json
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from redmine_mcp.config import Config

BASE_URL = "https://test.redmine.com"
API_KEY = "test-api-key"

_ENV_KEYS = [
    "REDMINE_URL",
    "REDMINE_API_KEY",
    "REDMINE_HTTP_TIMEOUT_SECONDS",
    "REDMINE_HTTP_MAX_RESPONSE_BYTES",
    "REDMINE_HTTP_LOG",
    "REDMINE_HTTP_LOG_SAMPLE_RATE",
]

SAMPLE_ISSUE = {
    "id": 12345,
    "project": {"id": 1, "name": "Test Project"},
    "tracker": {"id": 1, "name": "Bug"},
    "status": {"id": 1, "name": "New"},
    "priority": {"id": 2, "name": "Normal"},
    "author": {"id": 1, "name": "John Doe"},
    "assigned_to": {"id": 2, "name": "Jane Smith"},
    "subject": "Test issue subject",
    "description": "This is a test issue description",
    "start_date": "2024-01-15",
    "due_date": "2024-01-30",
    "done_ratio": 50,
    "estimated_hours": 8,
    "created_on": "2024-01-15T10:00:00Z",
    "updated_on": "2024-01-20T14:30:00Z",
    "journals": [
        {
            "id": 1,
            "user": {"id": 1, "name": "John Doe"},
            "notes": "Added initial description",
            "created_on": "2024-01-15T10:30:00Z",
            "details": [],
        },
        {
            "id": 2,
            "user": {"id": 2, "name": "Jane Smith"},
            "notes": "Working on this now",
            "created_on": "2024-01-16T09:00:00Z",
            "details": [
                {"property": "attr", "name": "status_id", "old_value": "1", "new_value": "2"}
            ],
        },
    ],
}

SAMPLE_ACTIVITIES = [
    {"id": 1, "name": "Design", "is_default": False},
    {"id": 2, "name": "Development", "is_default": True},
    {"id": 3, "name": "Testing", "is_default": False},
]

SAMPLE_TIME_ENTRY = {
    "id": 100,
    "project": {"id": 1, "name": "Test Project"},
    "issue": {"id": 12345},
    "user": {"id": 1, "name": "John Doe"},
    "activity": {"id": 2, "name": "Development"},
    "hours": 1.5,
    "comments": "Worked on bug fix",
    "spent_on": "2024-01-20",
    "created_on": "2024-01-20T15:00:00Z",
    "updated_on": "2024-01-20T15:00:00Z",
}


def make_journals(count):
    """Journals 1..count with notes "Journal entry N"."""
    return [
        {
            "id": i + 1,
            "user": {"id": 1, "name": "John Doe"},
            "notes": f"Journal entry {i + 1}",
            "created_on": "2024-01-15T10:00:00Z",
            "details": [],
        }
        for i in range(count)
    ]


def issue_with_journals(count):
    issue = copy.deepcopy(SAMPLE_ISSUE)
    issue["journals"] = make_journals(count)
    return issue


def json_response(payload, status=200, content_type="application/json"):
    """Context-manager mock standing in for urlopen()'s return value."""
    cm = MagicMock()
    resp = cm.__enter__.return_value
    resp.status = status
    resp.headers.get.return_value = content_type
    if isinstance(payload, bytes):
        resp.read.return_value = payload
    else:
        resp.read.return_value = json.dumps(payload).encode("utf-8")
    return cm


def empty_response(status=204):
    return json_response(b"", status=status, content_type="")


def http_error(code, reason, body=b""):
    return urllib.error.HTTPError(BASE_URL, code, reason, {}, io.BytesIO(body))


def sent_requests(mock_urlopen):
    """urllib Request objects passed to urlopen, in call order."""
    return [c.args[0] for c in mock_urlopen.call_args_list]


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep tests from reading a real .env or REDMINE_* variables."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("REDMINE_ENV_FILE", str(tmp_path / "missing.env"))


@pytest.fixture
def cfg():
    return Config(redmine_url=BASE_URL, api_key=API_KEY)


@pytest.fixture
def mock_urlopen():
    with patch("redmine_mcp.api.urllib.request.urlopen") as m:
        yield m


@pytest.fixture
def sample_issue():
    return copy.deepcopy(SAMPLE_ISSUE)
