"""Run ID management for log correlation.

Every purge run gets an ID so all log lines from one run can be grouped.
Inside a Celery worker the task id is used; the cron script generates one.
"""

import uuid
from contextvars import ContextVar
from typing import Optional

run_id_var: ContextVar[Optional[str]] = ContextVar("run_id", default=None)


def generate_run_id() -> str:
    """Generate a new unique run ID.

    Returns:
        str: UUID v4 run ID
    """
    return str(uuid.uuid4())


def get_run_id() -> str:
    """Get current run ID from context.

    Returns:
        str: Current run ID or "no-run-id" if not set
    """
    return run_id_var.get() or "no-run-id"


def set_run_id(run_id: Optional[str]) -> None:
    """Set run ID in current context."""
    run_id_var.set(run_id)
