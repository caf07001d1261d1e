"""Observability module for the trash purge.

Provides structured logging, run ID correlation and Prometheus metrics.
"""

from .logging_config import configure_logging
from .metrics import (
    purge_runs_total,
    ciphers_purged_total,
    purge_duration_seconds,
)
from .run_id import run_id_var, get_run_id, set_run_id, generate_run_id

__all__ = [
    # Logging
    "configure_logging",
    # Metrics
    "purge_runs_total",
    "ciphers_purged_total",
    "purge_duration_seconds",
    # Run ID
    "run_id_var",
    "get_run_id",
    "set_run_id",
    "generate_run_id",
]
