"""Prometheus metrics for monitoring alert volume and evaluation cost"""

from typing import Iterable

from prometheus_client import Counter, Histogram

from cashflow_engine.domain.models import Alert

# Alert metrics
alert_counter = Counter(
    "cashflow_alerts_total",
    "Alerts emitted by evaluations",
    ["category", "severity"],
)

# Evaluation metrics
evaluation_duration_histogram = Histogram(
    "cashflow_evaluation_seconds",
    "Time to build ledger and alerts for one snapshot",
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0],
)

ledger_rows_histogram = Histogram(
    "cashflow_ledger_rows",
    "Ledger rows produced per evaluation",
    buckets=[31, 92, 366, 731, 1827],
)

# Input metrics
snapshot_rejection_counter = Counter(
    "cashflow_snapshot_rejections_total",
    "Snapshots rejected because of invalid input data",
    ["reason"],  # parse_error | invalid_transaction | invalid_collection
)


def record_evaluation(alerts: Iterable[Alert], ledger_rows: int, duration_seconds: float) -> None:
    """Record alert distribution and evaluation cost"""
    for alert in alerts:
        alert_counter.labels(category=alert.category, severity=alert.severity).inc()

    ledger_rows_histogram.observe(ledger_rows)
    evaluation_duration_histogram.observe(duration_seconds)
