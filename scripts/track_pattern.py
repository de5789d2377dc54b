#!/usr/bin/env python3
"""
track_pattern.py - Work through a pattern from the command line.

Starts, moves and inspects work sessions stored in the sessions database.

Usage:
  python scripts/track_pattern.py start magic_ball
  python scripts/track_pattern.py forward 1 --steps 6
  python scripts/track_pattern.py back 1
  python scripts/track_pattern.py show 1
  python scripts/track_pattern.py list
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from dotenv import load_dotenv

load_dotenv(PROJECT_ROOT / ".env")

from stitchmap.tracker import (
    GroupStatus,
    SessionError,
    SessionNotFoundError,
    SessionStore,
    WorkSessionService,
)
from stitchmap.utils import find_pattern, load_pattern

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


GROUP_INDICATORS = {
    GroupStatus.COMPLETED: "✓",
    GroupStatus.CURRENT: "→",
    GroupStatus.UPCOMING: "○",
}


# -----------------------------------------------------------------------------
# Output
# -----------------------------------------------------------------------------

def print_progress(service: WorkSessionService, session_id: int, patterns_dir: Path | None = None):
    session = service.get(session_id)
    pattern = find_pattern(session.pattern_name, patterns_dir)
    report = service.progress(session, pattern)

    print(f"Session {session.id}: {pattern.name} [{session.status.value}]")
    print(f"  {report.completed_units}/{report.total_units} stitches ({report.percentage:.1f}%)")
    if not report.is_complete:
        header = report.group_label
        if report.group_repeat_info:
            header += f" ({report.group_repeat_info})"
        print(f"  {header}")
        print(
            f"  {report.previous_abbreviation or '-'}  [{report.current_abbreviation}]  "
            f"{report.next_abbreviation or '-'}"
        )
    for group in report.groups:
        print(
            f"  {GROUP_INDICATORS[group.status]} {group.label}: "
            f"{group.completed_in_group}/{group.total_in_group}"
        )


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------

def cmd_start(service: WorkSessionService, args):
    session = service.start(load_pattern(args.pattern, args.patterns_dir))
    print_progress(service, session.id, args.patterns_dir)


def cmd_forward(service: WorkSessionService, args):
    session = service.get(args.session_id)
    pattern = find_pattern(session.pattern_name, args.patterns_dir)
    for _ in range(args.steps):
        if service.advance(session, pattern):
            break
    print_progress(service, session.id, args.patterns_dir)


def cmd_back(service: WorkSessionService, args):
    session = service.get(args.session_id)
    pattern = find_pattern(session.pattern_name, args.patterns_dir)
    for _ in range(args.steps):
        if not service.retreat(session, pattern):
            logger.info("Already at the first stitch")
            break
    print_progress(service, session.id, args.patterns_dir)


def cmd_pause(service: WorkSessionService, args):
    service.pause(service.get(args.session_id))


def cmd_resume(service: WorkSessionService, args):
    service.resume(service.get(args.session_id))


def cmd_abandon(service: WorkSessionService, args):
    service.abandon(args.session_id)


def cmd_show(service: WorkSessionService, args):
    print_progress(service, args.session_id, args.patterns_dir)


def cmd_list(service: WorkSessionService, args):
    for session in service.store.list_active():
        print(f"{session.id}\t{session.status.value}\t{session.pattern_name}")
    print(f"Completed: {service.store.count_completed()}")


# -----------------------------------------------------------------------------
# Main
# -----------------------------------------------------------------------------

def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Track stitch-by-stitch progress through a crochet pattern",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="Path to sessions database (default: ~/.stitchmap/sessions.db)"
    )
    parser.add_argument(
        "--patterns-dir",
        type=Path,
        default=None,
        help="Directory of pattern YAML files (default: patterns/)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    start = subparsers.add_parser("start", help="Start a session on a pattern")
    start.add_argument("pattern", help="Pattern name or path to a .yaml file")
    start.set_defaults(func=cmd_start)

    for name, func, help_text in (
        ("forward", cmd_forward, "Work the next stitch(es)"),
        ("back", cmd_back, "Undo the last stitch(es)"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("session_id", type=int)
        sub.add_argument("--steps", type=int, default=1, help="Number of stitches")
        sub.set_defaults(func=func)

    for name, func, help_text in (
        ("pause", cmd_pause, "Pause a session"),
        ("resume", cmd_resume, "Resume a paused session"),
        ("abandon", cmd_abandon, "Delete a session"),
        ("show", cmd_show, "Show session progress"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("session_id", type=int)
        sub.set_defaults(func=func)

    subparsers.add_parser("list", help="List sessions in progress").set_defaults(func=cmd_list)

    args = parser.parse_args(argv)

    service = WorkSessionService(SessionStore(args.db))
    try:
        args.func(service, args)
    except (SessionError, SessionNotFoundError, FileNotFoundError) as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
