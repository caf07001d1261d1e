"""Trash purge service.

Permanently deletes ciphers that have been in the trash (soft-deleted via
deleted_at) for longer than the configured retention period.

A run is idempotent: running it again with the same or an earlier cutoff only
matches rows a previous run would already have removed.
"""

import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.cipher import Cipher
from ..observability.metrics import (
    purge_runs_total,
    ciphers_purged_total,
    purge_duration_seconds,
)
from .schemas import PurgeSettings, PurgeResult, PurgeReport

logger = logging.getLogger(__name__)


def format_timestamp(value: datetime) -> str:
    """Serialize a datetime the way vault timestamps are stored.

    Output is YYYY-MM-DDTHH:MM:SS.sssZ in UTC. Naive datetimes are taken as UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        f".{value.microsecond // 1000:03d}Z"
    )


def compute_cutoff(retention_days: int, now: Optional[datetime] = None) -> str:
    """Return the cutoff timestamp: now minus retention_days days.

    Ciphers deleted strictly before this instant are eligible for purging.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    try:
        cutoff = now - timedelta(days=retention_days)
    except OverflowError:
        # Retention longer than the calendar can express; nothing is old enough
        cutoff = datetime.min
    return format_timestamp(cutoff)


class TrashPurgeService:
    """Runs the trash purge against one database session.

    The session is owned by the caller and only used for the duration of a run.
    """

    def __init__(self, db: Session, purge_settings: PurgeSettings):
        self.db = db
        self.settings = purge_settings

    @staticmethod
    def _eligible(cutoff: str):
        return (
            Cipher.deleted_at.isnot(None),
            Cipher.deleted_at < cutoff,
        )

    def count_eligible(self, cutoff: str) -> int:
        """Count ciphers soft-deleted before cutoff."""
        count = (
            self.db.query(func.count(Cipher.id))
            .filter(*self._eligible(cutoff))
            .scalar()
        )
        return count or 0

    def delete_eligible(self, cutoff: str) -> int:
        """Delete ciphers soft-deleted before cutoff.

        Returns:
            Number of rows the DELETE statement removed
        """
        deleted = (
            self.db.query(Cipher)
            .filter(*self._eligible(cutoff))
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return max(deleted or 0, 0)

    def generate_purge_report(self, now: Optional[datetime] = None) -> PurgeReport:
        """Report how many ciphers a purge would delete, without deleting.

        When purging is disabled the store is not queried.
        """
        if not self.settings.enabled:
            return PurgeReport(retention_days=self.settings.retention_days, enabled=False)

        cutoff = compute_cutoff(self.settings.retention_days, now)
        eligible = self.count_eligible(cutoff)

        logger.info(
            f"{eligible} cipher(s) in the trash are older than {self.settings.retention_days} days",
            extra={"cutoff": cutoff, "eligible_count": eligible}
        )

        return PurgeReport(
            retention_days=self.settings.retention_days,
            enabled=True,
            cutoff=cutoff,
            eligible_count=eligible,
        )

    def run(self, now: Optional[datetime] = None) -> PurgeResult:
        """Execute one purge run.

        1. retention_days <= 0: return immediately, no database access
        2. Compute the cutoff from now and retention_days
        3. Count eligible ciphers; stop if there are none
        4. Delete them and report the rows actually removed

        Raises:
            SQLAlchemyError: Any store failure, re-raised unchanged after rollback
        """
        started_at = datetime.now(timezone.utc)
        retention_days = self.settings.retention_days

        if not self.settings.enabled:
            logger.info(
                "Auto-purge is disabled (TRASH_AUTO_DELETE_DAYS <= 0)",
                extra={"retention_days": retention_days}
            )
            purge_runs_total.labels(status="disabled").inc()
            return PurgeResult(
                retention_days=retention_days,
                enabled=False,
                started_at=started_at,
                completed_at=datetime.now(timezone.utc),
            )

        cutoff = compute_cutoff(retention_days, now)
        logger.info(
            f"Purging soft-deleted ciphers older than {retention_days} days (before {cutoff})",
            extra={"retention_days": retention_days, "cutoff": cutoff}
        )

        timer_start = time.perf_counter()
        try:
            eligible = self.count_eligible(cutoff)
            deleted = 0

            if eligible > 0:
                deleted = self.delete_eligible(cutoff)
                if deleted != eligible:
                    logger.warning(
                        f"Counted {eligible} eligible cipher(s) but the delete removed {deleted}",
                        extra={"cutoff": cutoff, "eligible_count": eligible, "deleted_count": deleted}
                    )
                logger.info(
                    f"Successfully purged {deleted} soft-deleted cipher(s)",
                    extra={"cutoff": cutoff, "deleted_count": deleted}
                )
            else:
                logger.info("No soft-deleted ciphers to purge", extra={"cutoff": cutoff})

        except Exception:
            try:
                self.db.rollback()
            except Exception:
                logger.warning("Rollback after failed trash purge also failed", exc_info=True)
            purge_runs_total.labels(status="error").inc()
            logger.error(
                "Trash purge failed",
                exc_info=True,
                extra={"retention_days": retention_days, "cutoff": cutoff}
            )
            raise

        finally:
            purge_duration_seconds.observe(time.perf_counter() - timer_start)

        purge_runs_total.labels(status="success").inc()
        ciphers_purged_total.inc(deleted)

        return PurgeResult(
            retention_days=retention_days,
            enabled=True,
            cutoff=cutoff,
            eligible_count=eligible,
            deleted_count=deleted,
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
        )


def purge_deleted_ciphers(
    db: Session,
    purge_settings: PurgeSettings,
    now: Optional[datetime] = None
) -> int:
    """Purge soft-deleted ciphers older than the configured threshold.

    This is the entry point used by the Celery task and the cron script.

    Args:
        db: Database session
        purge_settings: Retention configuration
        now: Reference time for the cutoff (defaults to current UTC time)

    Returns:
        Number of purged ciphers (0 when disabled or nothing was eligible)
    """
    return TrashPurgeService(db, purge_settings).run(now=now).deleted_count
