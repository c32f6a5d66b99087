"""Read-only views over the payment collection."""

from scheduled_payments.projections.calendar import CalendarProjection

__all__ = ["CalendarProjection"]
