"""Client payment-speed degradation detection"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional, Tuple

from cashflow_engine.domain.models import (
    DEFAULT_POLICY,
    Alert,
    AlertPolicy,
    CollectionItem,
    CollectionTarget,
)
from cashflow_engine.domain.exceptions import InvalidCollectionDataError
from cashflow_engine.utils.date_utils import days_between

NO_NAME_LABEL = "No name"

# Name fields that identify the client, in priority order, per tracker
LABEL_FIELDS: Dict[str, Tuple[str, ...]] = {
    "lloyds": ("claimant_name", "insured_name"),
    "generic": ("client_name", "case_name"),
    "access": ("insured_name", "case_name"),
}


@dataclass
class _PaymentCycles:
    recent: List[Tuple[int, CollectionItem]] = field(default_factory=list)
    baseline: List[int] = field(default_factory=list)


def client_label(item: CollectionItem) -> str:
    """Display name of the client behind a collection item"""
    try:
        fields = LABEL_FIELDS[item.source]
    except KeyError as e:
        raise InvalidCollectionDataError(f"Unknown collection source: {item.source!r}") from e

    for name in fields:
        value = getattr(item, name).strip()
        if value:
            return value
    return NO_NAME_LABEL


def payment_cycle_days(item: CollectionItem) -> Optional[int]:
    """Days from demand to payment; None when unpaid, undated or non-positive"""
    if not item.is_paid or item.demand_date is None or item.updated_at is None:
        return None
    cycle = days_between(item.demand_date, item.updated_at)
    return cycle if cycle > 0 else None


def _mean(values: Iterable[int]) -> float:
    values = list(values)
    return sum(values) / len(values)


def detect_client_trend(
    collection_items: Iterable[CollectionItem],
    today: date | datetime,
    policy: AlertPolicy = DEFAULT_POLICY,
) -> List[Alert]:
    """
    Flag clients whose recent payments take materially longer than usual.

    Buckets by payment date relative to today:
    - recent: paid within client_recent_window_days (30)
    - baseline: paid client_recent_window_days+1..client_baseline_window_days (31-120)
    - older: ignored

    A client needs at least one recent and client_min_baseline_samples (2)
    baseline payments. Slowdown ratio > 1.3 is a warning, >= 1.6 is high.
    """
    grouped: Dict[str, _PaymentCycles] = {}
    for item in collection_items:
        cycle = payment_cycle_days(item)
        if cycle is None:
            continue

        days_since_paid = days_between(item.updated_at, today)
        bucket = grouped.setdefault(client_label(item), _PaymentCycles())
        if days_since_paid <= policy.client_recent_window_days:
            bucket.recent.append((cycle, item))
        elif days_since_paid <= policy.client_baseline_window_days:
            bucket.baseline.append(cycle)

    alerts = []
    for client in sorted(grouped):
        bucket = grouped[client]
        if not bucket.recent or len(bucket.baseline) < policy.client_min_baseline_samples:
            continue

        recent_avg = _mean(cycle for cycle, _ in bucket.recent)
        baseline_avg = _mean(bucket.baseline)
        if baseline_avg <= 0 or recent_avg <= baseline_avg * policy.client_slowdown_ratio:
            continue

        # Worst recent payment; first one wins ties
        _, representative = max(bucket.recent, key=lambda entry: entry[0])

        alerts.append(
            Alert(
                alert_id=f"client-trend-{client}",
                category="client-trend",
                severity="high" if recent_avg >= baseline_avg * policy.client_high_ratio else "warning",
                title="Collection cycle lengthening",
                description=(
                    f'"{client}" now pays after {round(recent_avg)} days on average, '
                    f"compared with {round(baseline_avg)} days over the previous months."
                ),
                account_number=representative.account_number,
                amount=representative.amount,
                target=CollectionTarget(source=representative.source, item_id=representative.item_id),
            )
        )
    return alerts
