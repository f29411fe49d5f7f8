"""Snapshot evaluation - ledger and alert feed for one set of tracker data"""

import logging
import time
import uuid
from datetime import date, datetime
from typing import Optional

from cashflow_engine.config import settings
from cashflow_engine.domain.alerts import build_alerts
from cashflow_engine.domain.exceptions import (
    InvalidCollectionDataError,
    InvalidTransactionDataError,
    ParseError,
)
from cashflow_engine.domain.ledger import build_ledger, calculate_current_balance, slice_ledger
from cashflow_engine.domain.models import AlertPolicy, CashflowReport
from cashflow_engine.infrastructure.observability.logging import log_evaluation
from cashflow_engine.infrastructure.observability.metrics import (
    record_evaluation,
    snapshot_rejection_counter,
)
from cashflow_engine.infrastructure.records import SnapshotRecord, parse_snapshot
from cashflow_engine.utils.date_utils import as_calendar_date

logger = logging.getLogger(__name__)


def evaluate_snapshot(
    snapshot: SnapshotRecord | dict,
    today: date | datetime,
    window_start: date,
    window_end: date,
    policy: Optional[AlertPolicy] = None,
) -> CashflowReport:
    """
    Build the daily ledger and the alert feed for a snapshot.

    Flow:
    1. Validate plain data and convert it to domain objects
    2. Build the gap-filled ledger seeded with the snapshot's opening balance
    3. Run the alert detectors against `today`
    4. Record metrics and a structured log line

    Domain errors are logged, counted and re-raised.
    """
    start_time = time.time()
    evaluation_id = str(uuid.uuid4())
    policy = policy or settings.alert_policy()

    try:
        record = snapshot if isinstance(snapshot, SnapshotRecord) else parse_snapshot(snapshot)
        transactions = record.domain_transactions()
        collection_items = record.domain_collection_items()
    except ParseError as e:
        snapshot_rejection_counter.labels(reason="parse_error").inc()
        logger.warning(f"Malformed date in snapshot: {e}", extra={"evaluation_id": evaluation_id})
        raise
    except InvalidTransactionDataError as e:
        snapshot_rejection_counter.labels(reason="invalid_transaction").inc()
        logger.warning(f"Invalid transaction data: {e}", extra={"evaluation_id": evaluation_id})
        raise
    except InvalidCollectionDataError as e:
        snapshot_rejection_counter.labels(reason="invalid_collection").inc()
        logger.warning(f"Invalid collection data: {e}", extra={"evaluation_id": evaluation_id})
        raise

    ledger = build_ledger(transactions, record.initial_balance, window_start, window_end)
    bundle = build_alerts(transactions, collection_items, as_calendar_date(today), policy)

    report = CashflowReport(
        ledger=tuple(ledger),
        alerts=bundle,
        current_balance=calculate_current_balance(transactions, record.initial_balance),
        opening_balance=record.initial_balance,
        window_start=window_start,
        window_end=window_end,
        rows_in_window=tuple(slice_ledger(ledger, window_start, window_end)),
    )

    duration = time.time() - start_time
    record_evaluation(bundle.alerts, len(ledger), duration)
    log_evaluation(
        evaluation_id,
        len(ledger),
        bundle.counts.total,
        bundle.counts.by_severity,
        bundle.counts.collection,
        duration * 1000,
    )
    return report
