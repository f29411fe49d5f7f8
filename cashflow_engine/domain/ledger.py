"""Daily cashflow ledger - gap-filled rows with per-group sums and running balance"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Sequence

from cashflow_engine.domain.models import (
    BANK_ADJUSTMENT,
    EXPENSE_GROUPS,
    INCOME_GROUPS,
    TRANSACTION_GROUPS,
    LedgerRow,
    Transaction,
)
from cashflow_engine.domain.exceptions import InvalidTransactionDataError
from cashflow_engine.utils.date_utils import generate_date_range

logger = logging.getLogger(__name__)


def signed_amount(transaction: Transaction) -> float:
    """
    Contribution of a transaction to its day's net total.

    Income groups add their magnitude, expense groups subtract it, bank
    adjustments keep the sign they were recorded with.
    """
    if transaction.group == BANK_ADJUSTMENT:
        return transaction.amount
    if transaction.group in INCOME_GROUPS:
        return abs(transaction.amount)
    if transaction.group in EXPENSE_GROUPS:
        return -abs(transaction.amount)
    raise InvalidTransactionDataError(
        f"Unknown group {transaction.group!r} on transaction {transaction.transaction_id}"
    )


def build_ledger(
    transactions: Iterable[Transaction],
    opening_balance: float,
    window_start: date,
    window_end: date,
) -> List[LedgerRow]:
    """
    Build one row per calendar day with a running balance.

    Requirements:
    - Span covers the window and every transaction date (out-of-window
      transactions widen the span instead of being dropped)
    - Same-day transactions accumulate per group
    - balance[i] = balance[i-1] + daily_total[i], seeded with opening_balance

    Raises:
        ValueError: window_start is after window_end
        InvalidTransactionDataError: a transaction carries an unknown group
    """
    if window_start > window_end:
        raise ValueError(f"Window start {window_start} is after window end {window_end}")

    transactions = list(transactions)
    start_date = min([window_start] + [t.date for t in transactions])
    end_date = max([window_end] + [t.date for t in transactions])

    # Zeroed accumulators for every day in the span
    sums: Dict[date, Dict[str, float]] = {
        day: dict.fromkeys(TRANSACTION_GROUPS, 0.0) for day in generate_date_range(start_date, end_date)
    }
    pending: Dict[date, float] = dict.fromkeys(sums, 0.0)
    ids: Dict[date, List[str]] = {day: [] for day in sums}

    for txn in transactions:
        if txn.group not in TRANSACTION_GROUPS:
            raise InvalidTransactionDataError(
                f"Unknown group {txn.group!r} on transaction {txn.transaction_id}"
            )
        amount = txn.amount if txn.group == BANK_ADJUSTMENT else abs(txn.amount)
        sums[txn.date][txn.group] += amount
        ids[txn.date].append(txn.transaction_id)
        if txn.status == "pending":
            pending[txn.date] += signed_amount(txn)

    rows = []
    balance = opening_balance
    for day, groups in sums.items():
        daily_total = (
            sum(groups[g] for g in INCOME_GROUPS)
            - sum(groups[g] for g in EXPENSE_GROUPS)
            + groups[BANK_ADJUSTMENT]
        )
        balance += daily_total
        rows.append(
            LedgerRow(
                date=day,
                daily_total=daily_total,
                balance=balance,
                pending_total=pending[day],
                transaction_ids=tuple(ids[day]),
                **groups,
            )
        )

    logger.debug(
        "Ledger built",
        extra={"rows": len(rows), "transactions": len(transactions), "closing_balance": balance},
    )
    return rows


def slice_ledger(rows: Sequence[LedgerRow], start: date, end: date) -> List[LedgerRow]:
    """Rows of a viewing window, keeping balances carried from the full ledger"""
    return [row for row in rows if start <= row.date <= end]


def calculate_current_balance(transactions: Iterable[Transaction], opening_balance: float) -> float:
    """Opening balance plus every completed transaction (pending ones are not yet cash)"""
    return opening_balance + sum(
        signed_amount(t) for t in transactions if t.status == "completed"
    )
