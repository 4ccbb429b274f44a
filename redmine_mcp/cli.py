"""
redmine-mcp — run the MCP server, or call its tools from a shell.
"""

import argparse
import json
import sys

from redmine_mcp import config
from redmine_mcp.api import _mask_token
from redmine_mcp.client import RedmineClient
from redmine_mcp.exceptions import RedmineError
from redmine_mcp.models import IssueUpdate, TimeLog

# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _SubcommandParser(argparse.ArgumentParser):
    """Subparser that raises RedmineError instead of printing full help text."""

    def error(self, message):
        raise RedmineError(message)


def _positive_int(value):
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be a positive integer") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return parsed


def _non_negative_int(value):
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be a non-negative integer") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("must be a non-negative integer")
    return parsed


def build_parser():
    parser = _SubcommandParser(
        prog="redmine-mcp",
        description="Redmine MCP server and command-line tools",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log HTTP requests to stderr")
    parser.add_argument("--version", action="store_true", dest="show_version")
    sub = parser.add_subparsers(dest="command", parser_class=_SubcommandParser)

    sub.add_parser("serve", help="Run the MCP server on stdio (default)")
    sub.add_parser("version")
    sub.add_parser("config", help="Show the resolved connection settings")

    p = sub.add_parser("issue", help="Show an issue with a window of its journals")
    p.add_argument("issue_id")
    p.add_argument("--attachments", action="store_true")
    p.add_argument("--watchers", action="store_true")
    p.add_argument("--relations", action="store_true")
    p.add_argument("--children", action="store_true")
    p.add_argument("--journal-limit", type=_positive_int)
    p.add_argument("--journal-offset", type=_non_negative_int)

    p = sub.add_parser("update", help="Update an issue and optionally log time")
    p.add_argument("issue_id")
    p.add_argument("--subject")
    p.add_argument("--description")
    p.add_argument("--status-id", type=int)
    p.add_argument("--priority-id", type=int)
    p.add_argument("--assigned-to-id", type=int, help="0 to unassign")
    p.add_argument("--tracker-id", type=int)
    p.add_argument("--parent-issue-id", type=int)
    p.add_argument("--start-date")
    p.add_argument("--due-date")
    p.add_argument("--done-ratio", type=int)
    p.add_argument("--estimated-hours", type=float)
    p.add_argument("--notes")
    p.add_argument("--private-notes", action="store_true", default=None)
    p.add_argument("--log-hours", type=float)
    p.add_argument("--log-activity-id", type=int)
    p.add_argument("--log-comments")
    p.add_argument("--log-spent-on")

    sub.add_parser("statuses", help="List issue statuses")

    p = sub.add_parser("members", help="List project members")
    p.add_argument("project_id")
    p.add_argument("--limit", type=_positive_int)
    p.add_argument("--offset", type=_non_negative_int)

    sub.add_parser("whoami", help="Show the authenticated user")
    return parser


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _emit(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_issue(client, ns):
    _emit(
        client.get_issue(
            ns.issue_id,
            include_attachments=ns.attachments,
            include_watchers=ns.watchers,
            include_relations=ns.relations,
            include_children=ns.children,
            journal_limit=ns.journal_limit,
            journal_offset=ns.journal_offset,
        )
    )


def cmd_update(client, ns):
    update = IssueUpdate(
        subject=ns.subject,
        description=ns.description,
        status_id=ns.status_id,
        priority_id=ns.priority_id,
        assigned_to_id=ns.assigned_to_id,
        tracker_id=ns.tracker_id,
        parent_issue_id=ns.parent_issue_id,
        start_date=ns.start_date,
        due_date=ns.due_date,
        done_ratio=ns.done_ratio,
        estimated_hours=ns.estimated_hours,
        notes=ns.notes,
        private_notes=ns.private_notes,
    )
    time_log = None
    if ns.log_hours is not None:
        time_log = TimeLog(
            hours=ns.log_hours,
            activity_id=ns.log_activity_id,
            comments=ns.log_comments,
            spent_on=ns.log_spent_on,
        )
    result = client.update_issue(ns.issue_id, update, time_log)
    _emit(result)
    if "time_entry_error" in result:
        print(f"[WARN] {result['time_entry_error']}", file=sys.stderr)


def cmd_statuses(client, ns):
    _emit(client.list_issue_statuses())


def cmd_members(client, ns):
    _emit(client.list_project_members(ns.project_id, limit=ns.limit, offset=ns.offset))


def cmd_whoami(client, ns):
    _emit(client.whoami())


COMMANDS = {
    "issue": cmd_issue,
    "update": cmd_update,
    "statuses": cmd_statuses,
    "members": cmd_members,
    "whoami": cmd_whoami,
}


def _emit_error(err):
    payload = {
        "ok": False,
        "schema_version": config.CONTRACT_SCHEMA_VERSION,
        "error": {
            "type": err.error_type,
            "message": str(err),
            "exit_code": err.exit_code,
        },
    }
    print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    try:
        ns = build_parser().parse_args(argv)
        cmd = ns.command or "serve"

        if ns.show_version or cmd == "version":
            print(f"redmine-mcp {config.VERSION}")
            return 0

        cfg = config.load_config()
        if ns.verbose:
            cfg = cfg.with_http_log(True)

        if cmd == "config":
            _emit(
                {
                    "redmine_url": cfg.redmine_url,
                    "api_key": _mask_token(cfg.api_key),
                    "http_timeout_seconds": cfg.http_timeout_seconds,
                    "http_log_enabled": cfg.http_log_enabled,
                }
            )
            return 0

        if cmd == "serve":
            from redmine_mcp.mcp_server import _core, main as serve

            _core._client = RedmineClient(cfg)
            serve()
            return 0

        COMMANDS[cmd](RedmineClient(cfg), ns)
        return 0
    except RedmineError as e:
        _emit_error(e)
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
