"""
Payment Store

Owns the authoritative, ordered collection of scheduled payments.

Flow for scheduling:
1. Validate → required fields present (before anything is touched)
2. Append → record added to the in-memory collection
3. Persist → the WHOLE collection is rewritten under one storage key

DESIGN DECISION: If persisting fails after the append, we raise
PersistenceError and keep the in-memory record. Until the next successful
persist, storage is one record behind memory; a reload in that window
drops the record. This is acceptable with a single local writer.

schedule() calls are serialized with a lock so two submits can't
interleave their read-modify-write of the stored collection.
"""

import asyncio
from typing import Any, Mapping, Optional, Union
from uuid import UUID

from scheduled_payments.audit import AuditLogger
from scheduled_payments.config import get_settings
from scheduled_payments.models.payment import PaymentDraft, ScheduledPayment
from scheduled_payments.projections import CalendarProjection
from scheduled_payments.services.storage import (
    DeserializationError,
    KeyValueStorageInterface,
    PersistenceError,
    StorageError,
)
from scheduled_payments.store.codec import deserialize, serialize
from scheduled_payments.validation import DraftValidator, ValidationError


class PaymentStore:
    """
    The single owner of the payment collection.

    The collection only grows: there is no edit or delete. Readers get
    immutable snapshots via `payments` or `projection()`.
    """

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        storage_key: Optional[str] = None,
        validator: Optional[DraftValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        dot_color: Optional[str] = None,
    ):
        settings = get_settings()
        self._storage = storage
        self._key = storage_key or settings.storage.payments_key
        self._validator = validator or DraftValidator()
        self._audit_logger = audit_logger or AuditLogger()
        self._dot_color = dot_color or settings.app.marker_dot_color
        self._payments: list[ScheduledPayment] = []
        self._loaded = False
        self._lock = asyncio.Lock()

    @property
    def storage_key(self) -> str:
        return self._key

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def payments(self) -> tuple[ScheduledPayment, ...]:
        """Snapshot of the collection in scheduling order."""
        return tuple(self._payments)

    def __len__(self) -> int:
        return len(self._payments)

    def projection(self) -> CalendarProjection:
        """Calendar views over the current snapshot."""
        return CalendarProjection.from_payments(
            self._payments,
            dot_color=self._dot_color,
        )

    async def load(
        self,
        correlation_id: Optional[UUID] = None,
    ) -> list[ScheduledPayment]:
        """
        Load the collection from storage.

        Nothing stored yet is not an error: the store starts empty.

        Raises:
            PersistenceError: If storage can't be read
            DeserializationError: If stored data isn't a valid collection
        """
        try:
            data = await self._storage.get(self._key)
        except StorageError as e:
            self._audit_logger.log_load_failed(self._key, e, correlation_id)
            raise PersistenceError(f"Failed to read scheduled payments: {e}") from e

        if not data:
            payments: list[ScheduledPayment] = []
        else:
            try:
                payments = deserialize(data)
            except DeserializationError as e:
                self._audit_logger.log_load_failed(self._key, e, correlation_id)
                raise

        self._payments = payments
        self._loaded = True
        self._audit_logger.log_collection_loaded(
            self._key,
            len(payments),
            correlation_id,
        )
        return list(payments)

    async def schedule(
        self,
        draft: Union[PaymentDraft, Mapping[str, Any]],
        correlation_id: Optional[UUID] = None,
    ) -> list[ScheduledPayment]:
        """
        Validate a draft, append it and persist the whole collection.

        Args:
            draft: A PaymentDraft, or raw form values to build one from

        Returns:
            The updated collection

        Raises:
            ValidationError: If title, amount or date is empty.
                Nothing is changed.
            PersistenceError: If the write fails. The record stays
                in memory.
        """
        try:
            if not isinstance(draft, PaymentDraft):
                draft = self._validator.build_draft(draft)
            self._validator.ensure_valid(draft)
        except ValidationError as e:
            self._audit_logger.log_validation_failed(
                missing_fields=e.missing_fields,
                invalid_fields=e.invalid_fields,
                correlation_id=correlation_id,
            )
            raise

        payment = ScheduledPayment.from_draft(draft)

        async with self._lock:
            self._payments.append(payment)
            position = len(self._payments) - 1
            await self._persist(position, correlation_id)

        self._audit_logger.log_payment_scheduled(
            storage_key=self._key,
            position=position,
            title=payment.title,
            amount=payment.amount,
            date=payment.date,
            correlation_id=correlation_id,
        )
        return list(self._payments)

    async def _persist(self, position: int, correlation_id: Optional[UUID]) -> None:
        """Rewrite the full collection under the storage key."""
        data = serialize(self._payments)
        try:
            saved = await self._storage.set(self._key, data)
        except StorageError as e:
            self._audit_logger.log_save_failed(self._key, position, str(e), correlation_id)
            raise PersistenceError(f"Failed to save scheduled payments: {e}") from e

        if not saved:
            message = "Storage did not accept the write"
            self._audit_logger.log_save_failed(self._key, position, message, correlation_id)
            raise PersistenceError(message)
