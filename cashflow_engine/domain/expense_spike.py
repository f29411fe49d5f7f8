"""Month-over-month expense spike detection"""

import logging
from typing import Dict, Iterable, List

from cashflow_engine.domain.models import (
    DEFAULT_POLICY,
    EXPENSE_GROUPS,
    Alert,
    AlertPolicy,
    DashboardTarget,
    FlowTarget,
    Transaction,
)
from cashflow_engine.utils.date_utils import month_key, to_date_key

logger = logging.getLogger(__name__)


def monthly_expense_totals(transactions: Iterable[Transaction]) -> Dict[str, float]:
    """Absolute expense volume per YYYY-MM, sorted by month"""
    totals: Dict[str, float] = {}
    for txn in transactions:
        if txn.group not in EXPENSE_GROUPS:
            continue
        key = month_key(txn.date)
        totals[key] = totals.get(key, 0.0) + abs(txn.amount)
    return dict(sorted(totals.items()))


def detect_expense_spike(
    transactions: Iterable[Transaction], policy: AlertPolicy = DEFAULT_POLICY
) -> List[Alert]:
    """
    Compare the latest month of expenses against the month before it.

    Thresholds (policy defaults):
    - growth <= 25%: no alert
    - 25% < growth < 40%: warning
    - growth >= 40%: high

    A previous month totalling zero has no growth rate and yields no alert.
    """
    transactions = list(transactions)
    totals = monthly_expense_totals(transactions)
    if len(totals) < 2:
        return []

    months = list(totals)
    previous_month, current_month = months[-2], months[-1]
    previous_total, current_total = totals[previous_month], totals[current_month]

    if previous_total == 0:
        logger.debug("Expense spike skipped: empty baseline month", extra={"month": previous_month})
        return []

    growth = (current_total - previous_total) / previous_total
    if growth <= policy.expense_spike_growth:
        return []

    # Largest movement of the latest month; first one wins ties
    anchor = None
    for txn in transactions:
        if txn.group not in EXPENSE_GROUPS or month_key(txn.date) != current_month:
            continue
        if anchor is None or abs(txn.amount) > abs(anchor.amount):
            anchor = txn

    if anchor is not None:
        target = FlowTarget(
            date=to_date_key(anchor.date),
            transaction_ids=(anchor.transaction_id,),
            group=anchor.group,
        )
    else:
        target = DashboardTarget(section="insights")

    return [
        Alert(
            alert_id=f"expense-{current_month}",
            category="expense-spike",
            severity="high" if growth >= policy.expense_spike_high_growth else "warning",
            title="Expense spike",
            description=(
                f"Expenses for {current_month} rose {round(growth * 100)}% "
                f"compared with {previous_month}."
            ),
            amount=current_total,
            target=target,
        )
    ]
