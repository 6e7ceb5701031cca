"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from zakat_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    logger.addHandler(handler)


def log_screening(
    request_id: str,
    address: str,
    chain_id: int,
    liable: bool,
    zakat_due: float,
    duration_ms: float,
) -> None:
    """Log structured screening outcome"""
    logging.info(
        "Zakat screening completed",
        extra={
            "request_id": request_id,
            "address": address,
            "chain_id": chain_id,
            "step": "screening_complete",
            "outcome": "liable" if liable else "exempt",
            "zakat_due_usd": round(zakat_due, 2),
            "duration_ms": duration_ms,
        },
    )
