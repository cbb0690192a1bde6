"""Delete activity records older than the retention window."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError

from dypse_api.application.use_cases.activity import clean_old_activities
from dypse_api.config import get_settings
from dypse_api.infrastructure.database import SessionLocal, initialize_database

DEFAULT_RETENTION_DAYS = 90


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for the purge."""

    default_days = get_settings().activity_retention_days or DEFAULT_RETENTION_DAYS
    parser = argparse.ArgumentParser(
        description="Remove activity records older than the given number of days.",
    )
    parser.add_argument(
        "--days",
        type=int,
        default=default_days,
        help=(
            "Age in days after which activities are deleted "
            f"(default: ACTIVITY_RETENTION_DAYS or {DEFAULT_RETENTION_DAYS})"
        ),
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Run the purge using the provided command line arguments."""

    logging.basicConfig(level=logging.INFO)
    args = parse_args(argv)

    initialize_database()

    session = SessionLocal()
    try:
        removed = clean_old_activities(session, days=args.days)
    except ValueError as exc:
        raise SystemExit(f"Invalid retention window: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not delete old activities: {exc}") from exc
    else:
        print(f"Removed {removed} activities older than {args.days} days")
    finally:
        session.close()


if __name__ == "__main__":
    main()
