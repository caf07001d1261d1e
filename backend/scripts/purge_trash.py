#!/usr/bin/env python
"""Permanently delete ciphers that have been in the trash too long.

One-shot run for hosts that schedule with cron instead of Celery Beat, e.g.:
    0 2 * * * cd /srv/vault && python backend/scripts/purge_trash.py

Usage:
    python backend/scripts/purge_trash.py [--dry-run]

Environment Variables:
    DATABASE_URL: SQLAlchemy URL of the vault database
    TRASH_AUTO_DELETE_DAYS: Retention period in days (default 30, <= 0 disables)
    LOG_LEVEL: Logging level (default INFO)
"""

import argparse
import logging
import sys
from pathlib import Path

# Add backend/src to Python path
backend_src = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(backend_src))

from vault_trash.config import get_settings
from vault_trash.database import get_db_session
from vault_trash.observability import configure_logging, set_run_id, generate_run_id
from vault_trash.trash import PurgeSettings, TrashPurgeService

logger = logging.getLogger("vault_trash.scripts.purge_trash")


def main() -> int:
    """Run the trash purge once."""
    parser = argparse.ArgumentParser(
        description="Permanently delete ciphers soft-deleted more than TRASH_AUTO_DELETE_DAYS ago"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only report how many ciphers would be deleted",
    )
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)
    set_run_id(generate_run_id())

    purge_settings = PurgeSettings.from_settings(settings)

    try:
        with get_db_session() as session:
            service = TrashPurgeService(session, purge_settings)
            if args.dry_run:
                report = service.generate_purge_report()
                print(f"Eligible for purge: {report.eligible_count}")
            else:
                result = service.run()
                print(f"Purged: {result.deleted_count}")
    except Exception:
        logger.exception("Trash purge run failed")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
