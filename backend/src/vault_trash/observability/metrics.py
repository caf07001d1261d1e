"""Prometheus metrics for the trash purge.

Defines operational metrics for monitoring and alerting on purge runs.
"""

from prometheus_client import Counter, Histogram

purge_runs_total = Counter(
    "vault_trash_purge_runs_total",
    "Total trash purge runs",
    ["status"]  # status: success|disabled|error
)

ciphers_purged_total = Counter(
    "vault_trash_ciphers_purged_total",
    "Total ciphers permanently deleted from the trash"
)

purge_duration_seconds = Histogram(
    "vault_trash_purge_duration_seconds",
    "Time spent on a trash purge run in seconds",
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 30.0, 120.0]
)
