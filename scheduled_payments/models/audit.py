"""
Audit Models for Scheduled Payments

Every store operation is recorded as an audit event. This provides:
1. Traceability of what was scheduled and when
2. Debugging information when loading or saving fails
3. Ability to reconstruct a session from the log

DESIGN DECISION: Audit events are append-only. We never delete or modify them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """
    Types of events we audit.

    Every step of the load / schedule / review cycle has its own event type.
    """
    # Loading
    COLLECTION_LOADED = "collection_loaded"
    LOAD_FAILED = "load_failed"

    # Scheduling
    VALIDATION_FAILED = "validation_failed"
    PAYMENT_SCHEDULED = "payment_scheduled"
    SAVE_FAILED = "save_failed"

    # Review
    DAY_SELECTED = "day_selected"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every significant action creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=datetime.utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - payments have no id, so they are referenced by position
    storage_key: Optional[str] = Field(
        default=None,
        description="Storage key the collection lives under"
    )
    position: Optional[int] = Field(
        default=None,
        description="Index of the payment in the collection"
    )

    # Correlation - for tracking related events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate related events (e.g., one form submit)"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )

    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    # Error information (if applicable)
    error_type: Optional[str] = None
    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "storage_key": self.storage_key,
            "position": self.position,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_type": self.error_type,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.collection_loaded("scheduledPayments", 3)
        event = AuditEventBuilder.payment_scheduled(key, position, title, amount, date)
    """

    @staticmethod
    def collection_loaded(
        storage_key: str,
        count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        description = (
            f"Loaded {count} scheduled payments"
            if count
            else "No saved payments found, starting empty"
        )
        return AuditEvent(
            event_type=AuditEventType.COLLECTION_LOADED,
            storage_key=storage_key,
            correlation_id=correlation_id,
            description=description,
            details={
                "count": count,
            },
        )

    @staticmethod
    def load_failed(
        storage_key: str,
        error_type: str,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LOAD_FAILED,
            severity=AuditSeverity.ERROR,
            storage_key=storage_key,
            correlation_id=correlation_id,
            description=f"Failed to load scheduled payments: {error_type}",
            error_type=error_type,
            error_message=error_message,
        )

    @staticmethod
    def validation_failed(
        missing_fields: list[str],
        invalid_fields: Optional[list[str]] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        invalid_fields = invalid_fields or []
        problems = []
        if missing_fields:
            problems.append(f"missing: {', '.join(missing_fields)}")
        if invalid_fields:
            problems.append(f"invalid: {', '.join(invalid_fields)}")
        return AuditEvent(
            event_type=AuditEventType.VALIDATION_FAILED,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description=f"Draft rejected, {'; '.join(problems)}",
            details={
                "missing_fields": missing_fields,
                "invalid_fields": invalid_fields,
            },
            is_user_action=True,
        )

    @staticmethod
    def payment_scheduled(
        storage_key: str,
        position: int,
        title: str,
        amount: str,
        date: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PAYMENT_SCHEDULED,
            storage_key=storage_key,
            position=position,
            correlation_id=correlation_id,
            description=f"Payment scheduled: {title} - {amount} on {date}",
            details={
                "title": title,
                "amount": amount,
                "date": date,
            },
            is_user_action=True,
        )

    @staticmethod
    def save_failed(
        storage_key: str,
        position: int,
        error_message: str,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SAVE_FAILED,
            severity=AuditSeverity.ERROR,
            storage_key=storage_key,
            position=position,
            correlation_id=correlation_id,
            description="Payment added in memory but could not be saved",
            error_type="PersistenceError",
            error_message=error_message,
        )

    @staticmethod
    def day_selected(
        day: str,
        result_count: int,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DAY_SELECTED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Calendar day {day} selected: {result_count} payments",
            details={
                "day": day,
                "result_count": result_count,
            },
            is_user_action=True,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_type=error_type,
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )
