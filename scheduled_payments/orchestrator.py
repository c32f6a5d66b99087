"""
Main Orchestrator for Scheduled Payments

This module ties the components together and defines the flows the UI
calls into:
1. Startup (storage → store.load)
2. Schedule (form values → validate → append → persist → fresh views)
3. Review (calendar day → payments on that day)

DESIGN DECISION: The UI never touches storage or the collection directly.
It holds one SchedulePaymentFlow, which owns the one PaymentStore.
"""

from typing import Any, Mapping, Optional, Union
from uuid import UUID

from scheduled_payments.audit import (
    AuditLogger,
    configure_logging,
    create_correlation_id,
)
from scheduled_payments.config import get_settings
from scheduled_payments.models.payment import (
    DateMarker,
    PaymentDraft,
    ScheduledPayment,
)
from scheduled_payments.services.storage import (
    InMemoryStorage,
    KeyValueStorageInterface,
    LocalFileStorage,
)
from scheduled_payments.store import PaymentStore
from scheduled_payments.validation import DraftValidator, ValidationError


class SchedulePaymentFlow:
    """
    Orchestrates the schedule / review cycle.

    Flow:
    1. Start → Load saved payments (once)
    2. Submit → Validate and schedule a draft
    3. Render → History list and calendar markers from a fresh projection
    4. Select day → Payments due on that day
    """

    def __init__(
        self,
        store: PaymentStore,
        validator: Optional[DraftValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._store = store
        self._validator = validator or DraftValidator()
        self._audit_logger = audit_logger or AuditLogger()

    @property
    def store(self) -> PaymentStore:
        return self._store

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    async def start(self, correlation_id: Optional[UUID] = None) -> list[ScheduledPayment]:
        """
        Load saved payments if that hasn't happened yet.

        Load errors propagate: a corrupt collection must not be
        silently replaced by an empty one.
        """
        if self._store.is_loaded:
            return list(self._store.payments)
        return await self._store.load(correlation_id or create_correlation_id())

    async def submit(
        self,
        values: Union[PaymentDraft, Mapping[str, Any]],
        correlation_id: Optional[UUID] = None,
    ) -> tuple[bool, str, PaymentDraft]:
        """
        Schedule a payment from the form.

        Returns:
            (scheduled, message, next_draft)

            On success next_draft is blank (the form resets). On a
            validation failure the submitted values are handed back so
            the user can fix them.

        Raises:
            PersistenceError: If the payment couldn't be saved
        """
        correlation_id = correlation_id or create_correlation_id()

        try:
            await self._store.schedule(values, correlation_id)
        except ValidationError as e:
            if isinstance(values, PaymentDraft):
                draft = values
            else:
                try:
                    draft = self._validator.build_draft(values)
                except ValidationError:
                    draft = PaymentDraft.blank()
            return False, self._validator.get_user_friendly_summary(e.result), draft

        return True, "✅ Payment scheduled", PaymentDraft.blank()

    def history(self) -> list[ScheduledPayment]:
        """Every scheduled payment, oldest first."""
        return self._store.projection().history()

    def marked_dates(self) -> dict[str, DateMarker]:
        """Calendar markers for the current collection."""
        return self._store.projection().marked_dates()

    def select_day(
        self,
        day: str,
        correlation_id: Optional[UUID] = None,
    ) -> list[ScheduledPayment]:
        """Payments due on the selected calendar day."""
        payments = self._store.projection().payments_on(day)
        self._audit_logger.log_day_selected(
            day=str(day),
            result_count=len(payments),
            correlation_id=correlation_id,
        )
        return payments

    def report_error(
        self,
        error: Exception,
        action: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Record an error the UI caught and showed to the user."""
        self._audit_logger.log_error(
            error_type=type(error).__name__,
            error_message=str(error),
            details={"action": action},
            correlation_id=correlation_id,
        )


def create_storage(persistent: bool = True) -> KeyValueStorageInterface:
    """Local file storage, or memory when nothing should touch disk."""
    if not persistent:
        return InMemoryStorage()
    return LocalFileStorage()


def create_app_components(
    persistent: bool = True,
    storage: Optional[KeyValueStorageInterface] = None,
) -> tuple[SchedulePaymentFlow, PaymentStore]:
    """
    Factory function to create all application components.

    Args:
        persistent: Whether to keep payments in local files.
                    Set to False for a throwaway in-memory session.
        storage: Use this backend instead of building one.

    Returns:
        (schedule_flow, payment_store)
    """
    settings = get_settings()
    configure_logging(settings.app.effective_log_level)

    audit_logger = AuditLogger()
    storage = storage or create_storage(persistent)

    validator = DraftValidator()
    store = PaymentStore(
        storage=storage,
        validator=validator,
        audit_logger=audit_logger,
    )
    flow = SchedulePaymentFlow(
        store=store,
        validator=validator,
        audit_logger=audit_logger,
    )
    return flow, store
