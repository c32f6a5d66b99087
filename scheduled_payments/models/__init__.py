"""
Data Models Package

This package contains all Pydantic models used in the Scheduled Payments system.
All data flowing through the system must conform to these schemas.
"""

from scheduled_payments.models.payment import (
    DEFAULT_CATEGORY,
    DEFAULT_FREQUENCY,
    DEFAULT_STATUS,
    REQUIRED_FIELDS,
    DateMarker,
    PaymentCategory,
    PaymentDraft,
    PaymentFrequency,
    PaymentStatus,
    ScheduledPayment,
    ValidationIssue,
    ValidationResult,
    format_payment_date,
)
from scheduled_payments.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Payment models
    "DEFAULT_CATEGORY",
    "DEFAULT_FREQUENCY",
    "DEFAULT_STATUS",
    "REQUIRED_FIELDS",
    "DateMarker",
    "PaymentCategory",
    "PaymentDraft",
    "PaymentFrequency",
    "PaymentStatus",
    "ScheduledPayment",
    "ValidationIssue",
    "ValidationResult",
    "format_payment_date",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
