"""Structured JSON logging and the audit log sink."""

import logging
import logging.handlers
import queue
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO, Tuple

from pythonjsonlogger import jsonlogger

from portfolio_checker.models.check_result import CheckResult


# Run ID for correlation across log entries of one invocation
RUN_ID = str(uuid.uuid4())

AUDIT_LOGGER_NAME = "portfolio_checker.audit"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter that adds run_id and standardized fields."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to log record.

        Args:
            log_record: The log record to modify.
            record: The original logging.LogRecord.
            message_dict: Additional fields from the logging call.
        """
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = (
            datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        )
        log_record["run_id"] = RUN_ID
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure structured JSON logging for the application.

    Logs go to stderr; stdout is reserved for reports.

    Args:
        verbose: Log at DEBUG instead of INFO.

    Returns:
        logging.Logger: Configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    json_handler = logging.StreamHandler(sys.stderr)
    json_handler.setFormatter(CustomJsonFormatter("%(message)s"))
    logger.addHandler(json_handler)

    return logger


def _parse_syslog_address(address: str) -> Tuple[str, int] | str:
    """Turn "host:port" into a tuple, anything else is a socket path."""
    host, sep, port = address.rpartition(":")
    if sep and host and port.isdigit():
        return (host, int(port))
    return address


def setup_audit_log(
    syslog_address: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> Tuple[logging.Logger, logging.handlers.QueueListener]:
    """Configure the audit logger behind an in-memory queue.

    Audit records are queued by the checking code and written by a
    background listener thread, so a slow sink never delays a check.

    Args:
        syslog_address: Syslog socket path or "host:port"; JSON stream if None.
        stream: Stream for JSON audit records (defaults to stderr).

    Returns:
        Tuple[logging.Logger, QueueListener]: Audit logger and its started
            listener. The caller must stop the listener to flush the queue.
    """
    if syslog_address:
        target: logging.Handler = logging.handlers.SysLogHandler(
            address=_parse_syslog_address(syslog_address)
        )
    else:
        target = logging.StreamHandler(stream or sys.stderr)
    target.setFormatter(CustomJsonFormatter("%(message)s"))

    audit_queue: queue.SimpleQueue = queue.SimpleQueue()
    listener = logging.handlers.QueueListener(audit_queue, target)

    audit_logger = logging.getLogger(AUDIT_LOGGER_NAME)
    audit_logger.setLevel(logging.INFO)
    audit_logger.propagate = False
    for handler in audit_logger.handlers[:]:
        audit_logger.removeHandler(handler)
    audit_logger.addHandler(logging.handlers.QueueHandler(audit_queue))

    listener.start()
    return audit_logger, listener


def log_check_result(logger: logging.Logger, result: CheckResult, source: str) -> None:
    """Log structured per-domain check result.

    Args:
        logger: Audit logger.
        result: Classified result.
        source: Origin of the request (e.g. "cli" or an upload file name).
    """
    logger.info(
        "Domain check completed",
        extra={
            "domain": result.name,
            "query_type": result.query_type,
            "status": result.status.value,
            "error_text": result.error_text,
            "why": result.why,
            "source": source,
        },
    )


def log_batch_summary(
    logger: logging.Logger,
    total_domains: int,
    truncated: bool,
    status_counts: Dict[str, int],
    duration_sec: float,
) -> None:
    """Log batch completion summary.

    Args:
        logger: Application logger.
        total_domains: Number of domains checked.
        truncated: Whether input was cut off at the batch limit.
        status_counts: Results per lowercase status name.
        duration_sec: Total batch execution time in seconds.
    """
    logger.info(
        "Batch completed",
        extra={
            "total_domains": total_domains,
            "truncated": truncated,
            "secure": status_counts.get("secure", 0),
            "insecure": status_counts.get("insecure", 0),
            "bogus": status_counts.get("bogus", 0),
            "unset": status_counts.get("unset", 0),
            "duration_sec": duration_sec,
        },
    )
