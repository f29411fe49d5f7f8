"""Unit tests for the unified alert feed"""

import pytest
from datetime import date, datetime, timedelta

from cashflow_engine.domain.alerts import build_alerts, order_by_source, summarize_alerts
from cashflow_engine.domain.exceptions import InvalidCollectionDataError
from cashflow_engine.domain.models import AlertPolicy, CollectionItem, Transaction


def _slow_client_items(today: date) -> list[CollectionItem]:
    """A client whose latest payment took 15 days against a 10-day baseline"""
    items = []
    for i, days_ago in enumerate((50, 70)):
        paid_on = today - timedelta(days=days_ago)
        items.append(
            CollectionItem(f"hist-{i}", "lloyds", f"LL-{i}", paid_on - timedelta(days=10), 100.0, True,
                           updated_at=datetime.combine(paid_on, datetime.min.time()), claimant_name="Northwind")
        )
    paid_on = today - timedelta(days=2)
    items.append(
        CollectionItem("recent", "lloyds", "LL-9", paid_on - timedelta(days=15), 100.0, True,
                       updated_at=datetime.combine(paid_on, datetime.min.time()), claimant_name="Northwind")
    )
    return items


def test_build_alerts_merges_all_detectors(sample_transactions, sample_collection_items, today):
    bundle = build_alerts(sample_transactions, sample_collection_items + _slow_client_items(today), today)

    categories = {alert.category for alert in bundle.alerts}
    assert categories == {"overdue-collection", "expense-spike", "client-trend"}


def test_build_alerts_sorted_by_severity(sample_transactions, sample_collection_items, today):
    bundle = build_alerts(sample_transactions, sample_collection_items + _slow_client_items(today), today)

    # high: lloyds overdue (95 days), expense spike (+75%)
    # warning: generic overdue (40 days), client trend (15 vs 10 days)
    assert [a.alert_id for a in bundle.alerts] == [
        "overdue-lloyds-l-1",
        "expense-2024-05",
        "overdue-generic-g-1",
        "client-trend-Northwind",
    ]


def test_build_alerts_counts(sample_transactions, sample_collection_items, today):
    bundle = build_alerts(sample_transactions, sample_collection_items + _slow_client_items(today), today)

    assert bundle.counts.total == 4
    assert bundle.counts.by_severity == {"info": 0, "warning": 2, "high": 2}
    assert bundle.counts.collection == 2


def test_build_alerts_overdue_in_source_order(today):
    """Overdue items follow lloyds, generic, access order regardless of input order"""
    demand = today - timedelta(days=45)
    items = [
        CollectionItem("a", "access", "A", demand, 1.0, False),
        CollectionItem("g1", "generic", "G1", demand, 1.0, False),
        CollectionItem("l", "lloyds", "L", demand, 1.0, False),
        CollectionItem("g2", "generic", "G2", demand, 1.0, False),
    ]

    bundle = build_alerts([], items, today)

    assert [a.alert_id for a in bundle.alerts] == [
        "overdue-lloyds-l",
        "overdue-generic-g1",
        "overdue-generic-g2",
        "overdue-access-a",
    ]


def test_build_alerts_is_idempotent(sample_transactions, sample_collection_items, today):
    items = sample_collection_items + _slow_client_items(today)

    first = build_alerts(sample_transactions, items, today)
    second = build_alerts(sample_transactions, items, today)

    assert first == second


def test_build_alerts_accepts_datetime_today(sample_transactions, sample_collection_items, today):
    evening = datetime(today.year, today.month, today.day, 21, 15)
    assert build_alerts(sample_transactions, sample_collection_items, evening) == build_alerts(
        sample_transactions, sample_collection_items, today
    )


def test_build_alerts_empty_inputs(today):
    bundle = build_alerts([], [], today)

    assert bundle.alerts == ()
    assert bundle.counts.total == 0
    assert bundle.counts.by_severity == {"info": 0, "warning": 0, "high": 0}
    assert bundle.counts.collection == 0


def test_build_alerts_respects_policy(sample_collection_items, today):
    policy = AlertPolicy(overdue_warning_days=100, overdue_high_days=200)
    assert build_alerts([], sample_collection_items, today, policy).alerts == ()


def test_build_alerts_does_not_mutate_inputs(sample_transactions, sample_collection_items, today):
    transactions = list(sample_transactions)
    items = list(sample_collection_items)

    build_alerts(transactions, items, today)

    assert transactions == sample_transactions
    assert items == sample_collection_items


def test_order_by_source_rejects_unknown_tracker(today):
    with pytest.raises(InvalidCollectionDataError):
        order_by_source([CollectionItem("x", "dropbox", "X", today, 1.0, False)])


def test_summarize_alerts_counts_only_overdue_as_collection(sample_transactions):
    alerts = build_alerts(sample_transactions, [], date(2024, 6, 15)).alerts
    counts = summarize_alerts(alerts)

    assert counts.total == 1
    assert counts.collection == 0
    assert counts.by_severity["high"] == 1


def test_build_alerts_accepts_generators(sample_transactions, today):
    """Detectors each receive the data even when given one-shot iterables"""
    transactions = (t for t in sample_transactions + [Transaction("x", date(2024, 5, 30), 1.0, "expense", "tax")])
    bundle = build_alerts(transactions, iter([]), today)

    assert [a.category for a in bundle.alerts] == ["expense-spike"]
