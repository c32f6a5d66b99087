"""
Audit Logger

DESIGN DECISION: Every store operation is logged.
This provides:
1. Traceability of what was scheduled and when
2. Debugging capability when storage misbehaves
3. A session history the UI can show

The audit logger:
- Is synchronous: events are written to the local structured log,
  so logging never adds a suspension point to store operations
- Keeps a bounded in-memory history of recent events
- Supports correlation IDs to trace related events
"""

import logging
from collections import deque
from typing import Optional
from uuid import UUID, uuid4

import structlog

from scheduled_payments.models.audit import AuditEvent, AuditEventBuilder


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(log_level: str = "INFO") -> None:
    """
    Route structlog output through stdlib logging at the given level.

    structlog renders the JSON line; stdlib only needs to print it.
    """
    logging.basicConfig(format="%(message)s", level=log_level.upper())
    logging.getLogger().setLevel(log_level.upper())


class AuditLogger:
    """
    Central audit logging service.

    Logs every event to the structured local log and remembers the
    most recent ones in memory.
    """

    def __init__(self, history_size: int = 200):
        """
        Initialize audit logger.

        Args:
            history_size: How many recent events to keep in memory.
        """
        self._logger = structlog.get_logger("scheduled_payments.audit")
        self._history: deque[AuditEvent] = deque(maxlen=history_size)

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at a level matching its severity."""
        self._history.append(event)
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        elif event.severity.value == "debug":
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def recent_events(self, limit: int = 50) -> list[AuditEvent]:
        """Most recent events, newest first."""
        return list(reversed(self._history))[:limit]

    def log_collection_loaded(
        self,
        storage_key: str,
        count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a successful load."""
        self.log(AuditEventBuilder.collection_loaded(
            storage_key=storage_key,
            count=count,
            correlation_id=correlation_id,
        ))

    def log_load_failed(
        self,
        storage_key: str,
        error: Exception,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a failed load."""
        self.log(AuditEventBuilder.load_failed(
            storage_key=storage_key,
            error_type=type(error).__name__,
            error_message=str(error),
            correlation_id=correlation_id,
        ))

    def log_validation_failed(
        self,
        missing_fields: list[str],
        invalid_fields: Optional[list[str]] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a rejected draft."""
        self.log(AuditEventBuilder.validation_failed(
            missing_fields=missing_fields,
            invalid_fields=invalid_fields,
            correlation_id=correlation_id,
        ))

    def log_payment_scheduled(
        self,
        storage_key: str,
        position: int,
        title: str,
        amount: str,
        date: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a scheduled and saved payment."""
        self.log(AuditEventBuilder.payment_scheduled(
            storage_key=storage_key,
            position=position,
            title=title,
            amount=amount,
            date=date,
            correlation_id=correlation_id,
        ))

    def log_save_failed(
        self,
        storage_key: str,
        position: int,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a persistence failure after the in-memory append."""
        self.log(AuditEventBuilder.save_failed(
            storage_key=storage_key,
            position=position,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    def log_day_selected(
        self,
        day: str,
        result_count: int,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a calendar day lookup."""
        self.log(AuditEventBuilder.day_selected(
            day=day,
            result_count=result_count,
            correlation_id=correlation_id,
        ))

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an unexpected error."""
        self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., a form submit).
    """
    return uuid4()
