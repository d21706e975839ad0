"""
Maintenance commands for the job store.

Usage:
    talentmatch-activate-jobs [--log-level INFO]
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError

from talentmatch.config import settings
from talentmatch.db import SessionLocal, init_db
from talentmatch.logger import configure_logging, get_logger
from talentmatch.services.recommendation_service import activate_all_jobs


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Set every non-active job back to active status")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level (default: %(default)s)")
    args = parser.parse_args(argv)

    configure_logging(args.log_level, settings.log_dir)
    logger = get_logger(__name__)

    init_db()
    try:
        with SessionLocal() as db:
            updated, total_active = activate_all_jobs(db)
    except SQLAlchemyError as exc:
        logger.error(f"Error updating jobs: {exc}")
        return 1

    logger.info(f"Updated {updated} jobs to active status")
    logger.info(f"Total active jobs: {total_active}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
