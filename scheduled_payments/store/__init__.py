"""Payment store package."""

from scheduled_payments.store.codec import deserialize, serialize
from scheduled_payments.store.payment_store import PaymentStore

__all__ = ["PaymentStore", "deserialize", "serialize"]
