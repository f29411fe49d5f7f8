"""Overdue collection scanning"""

from datetime import date, datetime
from typing import Iterable, List, Optional

from cashflow_engine.domain.models import (
    DEFAULT_POLICY,
    Alert,
    AlertPolicy,
    CollectionItem,
    CollectionTarget,
)
from cashflow_engine.utils.date_utils import days_between, to_date_key

SOURCE_LABELS = {
    "lloyds": "Lloyd's",
    "generic": "Various clients",
    "access": "Access",
}


def calculate_days_since(value: Optional[date], today: date | datetime) -> Optional[int]:
    """Whole days elapsed since value, clamped at zero; None when there is no date"""
    if value is None:
        return None
    return max(0, days_between(value, today))


def calculate_overdue_days(
    demand_date: Optional[date], is_paid: bool, today: date | datetime
) -> Optional[int]:
    """
    Age of an unpaid demand in days.

    Returns None for paid items and items without a demand date. A demand
    date in the future ages to 0.
    """
    if is_paid:
        return None
    return calculate_days_since(demand_date, today)


def overdue_severity(overdue_days: Optional[int], policy: AlertPolicy = DEFAULT_POLICY) -> Optional[str]:
    """
    Map age to alert severity.

    Bands:
    - below overdue_warning_days (30): not flagged
    - overdue_warning_days..overdue_high_days-1 (30-89): warning
    - overdue_high_days+ (90+): high
    """
    if overdue_days is None or overdue_days < policy.overdue_warning_days:
        return None
    if overdue_days >= policy.overdue_high_days:
        return "high"
    return "warning"


def format_overdue_label(overdue_days: Optional[int]) -> Optional[str]:
    return f"+{overdue_days} days" if overdue_days is not None else None


def build_overdue_alerts(
    items: Iterable[CollectionItem],
    today: date | datetime,
    policy: AlertPolicy = DEFAULT_POLICY,
) -> List[Alert]:
    """One overdue-collection alert per flagged item, in input order"""
    alerts = []
    for item in items:
        overdue_days = calculate_overdue_days(item.demand_date, item.is_paid, today)
        severity = overdue_severity(overdue_days, policy)
        if severity is None:
            continue

        source_label = SOURCE_LABELS.get(item.source, item.source)
        alerts.append(
            Alert(
                alert_id=f"overdue-{item.source}-{item.item_id}",
                category="overdue-collection",
                severity=severity,
                title=f"Overdue collection - {source_label}",
                description=f"Account {item.account_number} is {overdue_days} days overdue.",
                source_label=source_label,
                account_number=item.account_number,
                demand_date=to_date_key(item.demand_date),
                amount=item.amount,
                overdue_days=overdue_days,
                target=CollectionTarget(source=item.source, item_id=item.item_id),
            )
        )
    return alerts
