"""Trash purge module.

Permanently removes ciphers that have been soft-deleted for longer than
TRASH_AUTO_DELETE_DAYS. Setting it to 0 or a negative number turns the purge
off.
"""

from .schemas import PurgeSettings, PurgeResult, PurgeReport
from .service import (
    TrashPurgeService,
    compute_cutoff,
    format_timestamp,
    purge_deleted_ciphers,
)

# The Celery task is imported lazily to keep Celery out of plain library use
# Use: from vault_trash.trash.tasks import purge_deleted_ciphers_task

__all__ = [
    "PurgeSettings",
    "PurgeResult",
    "PurgeReport",
    "TrashPurgeService",
    "compute_cutoff",
    "format_timestamp",
    "purge_deleted_ciphers",
]
