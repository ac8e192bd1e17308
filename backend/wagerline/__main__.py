"""Wagerline CLI entry point."""

import argparse
import json
import logging
import sys
from uuid import UUID

from dotenv import load_dotenv

load_dotenv()

from wagerline import __version__
from wagerline.config import get_settings
from wagerline.database.session import get_db_context, init_db
from wagerline.services import DatabaseOutcomeRegistry, create_services

logger = logging.getLogger(__name__)


def _init_logfire() -> None:
    """Initialize Logfire if available, without failing commands."""
    try:
        from wagerline.observability import initialize_logfire

        initialize_logfire(get_settings())
    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")


def cmd_init_db(args: argparse.Namespace) -> int:
    """Create tables and seed the default outcome labels."""
    init_db()

    labels = args.labels or get_settings().settlement.default_outcome_labels
    with get_db_context() as db:
        added = DatabaseOutcomeRegistry().seed(db, labels)

    print(f"Database ready ({len(added)} outcome label(s) added)")
    return 0


def cmd_outcomes(args: argparse.Namespace) -> int:
    """List the outcome labels currently in the registry."""
    with get_db_context() as db:
        labels = sorted(DatabaseOutcomeRegistry().current_outcome_labels(db))

    for label in labels:
        print(label)
    return 0


def cmd_resettle(args: argparse.Namespace) -> int:
    """Settle bets left pending on completed events."""
    services = create_services()

    with get_db_context() as db:
        reports = services.settlement.resettle_completed_events(db, args.event_id)

    for report in reports:
        print(json.dumps(report.to_dict(), indent=2))

    failed = sum(len(report.failed) for report in reports)
    if failed:
        logger.warning(f"{failed} bet(s) failed to settle")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wagerline",
        description="Wagerline settlement core",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init-db", help="Create tables and seed outcomes")
    init_parser.add_argument(
        "--label",
        dest="labels",
        action="append",
        help="Outcome label to seed (repeatable, defaults to configuration)",
    )
    init_parser.set_defaults(func=cmd_init_db)

    outcomes_parser = subparsers.add_parser("outcomes", help="List outcome labels")
    outcomes_parser.set_defaults(func=cmd_outcomes)

    resettle_parser = subparsers.add_parser(
        "resettle", help="Settle pending bets on completed events"
    )
    resettle_parser.add_argument("--event-id", type=UUID, default=None)
    resettle_parser.set_defaults(func=cmd_resettle)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    _init_logfire()

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
