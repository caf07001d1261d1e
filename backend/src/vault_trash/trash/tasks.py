"""Celery tasks for the trash purge.

Tasks:
- trash.purge_deleted_ciphers: scheduled by Celery Beat (see vault_trash.worker)
"""

import logging
from typing import Dict, Any

from celery import shared_task

from ..config import get_settings
from ..database import SessionLocal
from ..observability.run_id import set_run_id, generate_run_id
from .schemas import PurgeSettings
from .service import TrashPurgeService

logger = logging.getLogger(__name__)


@shared_task(name="trash.purge_deleted_ciphers", bind=True)
def purge_deleted_ciphers_task(self) -> Dict[str, Any]:
    """Permanently delete ciphers that have been in the trash too long.

    The retention period comes from TRASH_AUTO_DELETE_DAYS, read when the task
    runs. The task is idempotent: running it twice in succession finds nothing
    more to delete the second time.

    Returns:
        Dict with run summary:
        - status: "completed" or "disabled"
        - retention_days: Retention period used
        - cutoff: Cutoff timestamp (None when disabled)
        - deleted_count: Number of ciphers permanently deleted
        - duration_seconds: Run duration

    Raises:
        Exception: Store errors are re-raised so Celery records the failure.
            Nothing is retried here; the next scheduled run tries again.
    """
    set_run_id(self.request.id or generate_run_id())
    purge_settings = PurgeSettings.from_settings(get_settings())

    db = SessionLocal()
    try:
        result = TrashPurgeService(db, purge_settings).run()
    finally:
        db.close()

    summary = {
        "status": "completed" if result.enabled else "disabled",
        "retention_days": result.retention_days,
        "cutoff": result.cutoff,
        "deleted_count": result.deleted_count,
        "duration_seconds": result.duration_seconds,
    }

    logger.info(
        "Trash purge task finished",
        extra={"task_id": self.request.id, "deleted_count": result.deleted_count}
    )

    return summary
