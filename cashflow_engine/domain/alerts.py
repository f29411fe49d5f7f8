"""Unified alert feed - merges every detector into one ranked bundle"""

from datetime import date, datetime
from typing import Iterable, List, Sequence

from cashflow_engine.domain.models import (
    COLLECTION_SOURCES,
    DEFAULT_POLICY,
    SEVERITY_WEIGHT,
    Alert,
    AlertBundle,
    AlertCounts,
    AlertPolicy,
    CollectionItem,
    Transaction,
)
from cashflow_engine.domain.client_trend import detect_client_trend
from cashflow_engine.domain.expense_spike import detect_expense_spike
from cashflow_engine.domain.exceptions import InvalidCollectionDataError
from cashflow_engine.domain.overdue import build_overdue_alerts


def order_by_source(items: Iterable[CollectionItem]) -> List[CollectionItem]:
    """Group items tracker by tracker (lloyds, generic, access), keeping insertion order"""
    items = list(items)
    unknown = {item.source for item in items} - set(COLLECTION_SOURCES)
    if unknown:
        raise InvalidCollectionDataError(f"Unknown collection source(s): {sorted(unknown)}")
    return sorted(items, key=lambda item: COLLECTION_SOURCES.index(item.source))


def summarize_alerts(alerts: Sequence[Alert]) -> AlertCounts:
    by_severity = dict.fromkeys(("info", "warning", "high"), 0)
    for alert in alerts:
        by_severity[alert.severity] += 1

    return AlertCounts(
        total=len(alerts),
        by_severity=by_severity,
        collection=sum(1 for a in alerts if a.category == "overdue-collection"),
    )


def build_alerts(
    transactions: Iterable[Transaction],
    collection_items: Iterable[CollectionItem],
    today: date | datetime,
    policy: AlertPolicy = DEFAULT_POLICY,
) -> AlertBundle:
    """
    Main entry point: run every detector and rank the findings.

    Emission order is overdue items (tracker, then insertion order), the
    expense spike, then client trends; the severity sort is stable so that
    order survives within a severity.
    """
    items = order_by_source(collection_items)

    alerts: List[Alert] = [
        *build_overdue_alerts(items, today, policy),
        *detect_expense_spike(transactions, policy),
        *detect_client_trend(items, today, policy),
    ]
    alerts.sort(key=lambda alert: -SEVERITY_WEIGHT[alert.severity])

    return AlertBundle(alerts=tuple(alerts), counts=summarize_alerts(alerts))
