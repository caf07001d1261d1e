"""Celery application and beat schedule for the trash purge.

Run a worker with the embedded scheduler:
    celery -A vault_trash.worker worker --beat --loglevel=INFO
"""

from celery import Celery
from celery.schedules import crontab
from celery.signals import setup_logging

from .config import settings
from .observability.logging_config import configure_logging


def crontab_from_expression(expression: str) -> crontab:
    """Build a Celery crontab from a standard five-field cron expression.

    Field order is minute, hour, day of month, month, day of week.

    Raises:
        ValueError: If the expression does not have exactly five fields
    """
    fields = expression.split()
    if len(fields) != 5:
        raise ValueError(f"Cron expression must have 5 fields, got {len(fields)}: '{expression}'")

    minute, hour, day_of_month, month_of_year, day_of_week = fields
    return crontab(
        minute=minute,
        hour=hour,
        day_of_month=day_of_month,
        month_of_year=month_of_year,
        day_of_week=day_of_week,
    )


celery_app = Celery(
    "vault_trash",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
    include=["vault_trash.trash.tasks"],
)

celery_app.conf.timezone = "UTC"
celery_app.conf.enable_utc = True
celery_app.conf.beat_schedule = {
    "trash-purge-daily": {
        "task": "trash.purge_deleted_ciphers",
        "schedule": crontab_from_expression(settings.TRASH_PURGE_CRON),
        "options": {
            "expires": 3600,  # Task expires after 1 hour if not picked up
        },
    },
}


@setup_logging.connect
def _configure_worker_logging(**kwargs):
    configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)
