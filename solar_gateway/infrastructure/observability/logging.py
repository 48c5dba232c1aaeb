"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime
from typing import Any, Dict
from pythonjsonlogger import jsonlogger


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.utcnow().isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = "solar-gateway"


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_payment(
    email: str,
    contract_id: str,
    month: int,
    amount: float,
    investor_count: int,
) -> None:
    """Log structured payment outcome for reconciliation"""
    logging.info(
        "Payment applied",
        extra={
            "email": email,
            "contract_id": contract_id,
            "step": "payment_applied",
            "month": month,
            "amount": amount,
            "investor_count": investor_count,
        },
    )


def log_payment_run(month: int, paid: int, not_due: int, failed: int) -> None:
    """Log the summary of a payment run across all contracts"""
    logging.info(
        "Payment run completed",
        extra={
            "step": "payment_run_complete",
            "month": month,
            "paid": paid,
            "not_due": not_due,
            "failed": failed,
        },
    )
