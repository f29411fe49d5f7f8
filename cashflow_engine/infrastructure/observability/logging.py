"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from cashflow_engine.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str | None = None) -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level or settings.log_level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_evaluation(
    evaluation_id: str,
    ledger_rows: int,
    alert_total: int,
    by_severity: Dict[str, int],
    collection_alerts: int,
    duration_ms: float,
) -> None:
    """Log structured evaluation outcome for analysis"""
    logging.getLogger("cashflow_engine.evaluation").info(
        "Evaluation completed",
        extra={
            "evaluation_id": evaluation_id,
            "step": "evaluation_complete",
            "ledger_rows": ledger_rows,
            "alert_total": alert_total,
            "alerts_high": by_severity.get("high", 0),
            "alerts_warning": by_severity.get("warning", 0),
            "alerts_info": by_severity.get("info", 0),
            "collection_alerts": collection_alerts,
            "duration_ms": duration_ms,
        },
    )
