"""
Calendar Projection

Read-only views derived from a snapshot of the payment collection:
- which dates have at least one payment (for marking calendar days)
- which payments fall on a selected date

DESIGN DECISION: The projection keeps no state of its own beyond the
snapshot it was built from. It is rebuilt after every store change
instead of being updated incrementally.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Union

from scheduled_payments.models.payment import (
    DateMarker,
    ScheduledPayment,
    format_payment_date,
)


@dataclass(frozen=True)
class CalendarProjection:
    """Views over one immutable snapshot of scheduled payments."""

    payments: tuple[ScheduledPayment, ...]
    dot_color: str = "blue"

    @classmethod
    def from_payments(
        cls,
        payments: Iterable[ScheduledPayment],
        dot_color: str = "blue",
    ) -> "CalendarProjection":
        return cls(payments=tuple(payments), dot_color=dot_color)

    def history(self) -> list[ScheduledPayment]:
        """Every payment, in the order it was scheduled."""
        return list(self.payments)

    def marked_dates(self) -> dict[str, DateMarker]:
        """
        One marker per distinct payment date.

        Several payments on the same day still yield a single marker;
        the marker signals presence, not count.
        """
        marker = DateMarker(marked=True, dot_color=self.dot_color)
        return {payment.date: marker for payment in self.payments}

    def payments_on(self, day: Union[str, date]) -> list[ScheduledPayment]:
        """
        Payments due on a date, in scheduling order.

        Returns an empty list when nothing is scheduled that day.
        """
        if isinstance(day, date):
            day = format_payment_date(day)
        return [payment for payment in self.payments if payment.date == day]
