"""Tests for models.py and _utils.py — update payloads and input parsing."""

import pytest

from redmine_mcp._utils import _parse_date, parse_issue_id
from redmine_mcp.exceptions import InvalidInput
from redmine_mcp.models import IssueUpdate, TimeLog


class TestParseIssueId:
    def test_bare_number(self):
        assert parse_issue_id("12345") == 12345

    def test_hash_prefix(self):
        assert parse_issue_id("#12345") == 12345

    def test_int_passthrough(self):
        assert parse_issue_id(42) == 42

    def test_surrounding_whitespace(self):
        assert parse_issue_id("  #7 ") == 7

    def test_trailing_text_after_digits_ignored(self):
        assert parse_issue_id("123abc") == 123

    @pytest.mark.parametrize("bad", ["not-a-number", "", "#", "##12", "abc123", True])
    def test_invalid(self, bad):
        with pytest.raises(InvalidInput) as exc_info:
            parse_issue_id(bad)
        assert "Invalid issue ID" in str(exc_info.value)


class TestParseDate:
    def test_valid(self):
        assert _parse_date("2024-01-31") == "2024-01-31"

    @pytest.mark.parametrize("bad", ["2024-1-31", "31/01/2024", "2024-02-30", "soon"])
    def test_invalid(self, bad):
        with pytest.raises(InvalidInput) as exc_info:
            _parse_date(bad, "due_date")
        assert "due_date" in str(exc_info.value)


class TestIssueUpdate:
    def test_empty_update_has_empty_payload(self):
        assert IssueUpdate().to_payload() == {}

    def test_only_present_fields_serialized(self):
        update = IssueUpdate(subject="New", status_id=2, notes="Working on it")
        assert update.to_payload() == {"subject": "New", "status_id": 2, "notes": "Working on it"}

    def test_zero_and_false_are_real_values(self):
        update = IssueUpdate(assigned_to_id=0, done_ratio=0, private_notes=False)
        assert update.to_payload() == {
            "assigned_to_id": 0,
            "done_ratio": 0,
            "private_notes": False,
        }

    def test_empty_string_is_sent(self):
        assert IssueUpdate(description="").to_payload() == {"description": ""}

    @pytest.mark.parametrize("ratio", [-1, 101])
    def test_done_ratio_range(self, ratio):
        with pytest.raises(InvalidInput):
            IssueUpdate(done_ratio=ratio)

    def test_done_ratio_bounds_accepted(self):
        assert IssueUpdate(done_ratio=100).to_payload() == {"done_ratio": 100}

    def test_dates_validated(self):
        with pytest.raises(InvalidInput):
            IssueUpdate(start_date="15/01/2024")
        with pytest.raises(InvalidInput):
            IssueUpdate(due_date="2024-13-01")


class TestTimeLog:
    def test_payload_omits_missing_optionals(self):
        assert TimeLog(hours=1.5).to_payload(12345) == {"issue_id": 12345, "hours": 1.5}

    def test_payload_full(self):
        log = TimeLog(hours=2, activity_id=9, comments="Fix", spent_on="2024-01-20")
        assert log.to_payload(1) == {
            "issue_id": 1,
            "hours": 2,
            "activity_id": 9,
            "comments": "Fix",
            "spent_on": "2024-01-20",
        }

    def test_resolved_activity_overrides(self):
        assert TimeLog(hours=1).to_payload(1, activity_id=2)["activity_id"] == 2

    def test_spent_on_validated(self):
        with pytest.raises(InvalidInput):
            TimeLog(hours=1, spent_on="yesterday")
