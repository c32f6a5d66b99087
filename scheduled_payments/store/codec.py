"""
Payment Collection Codec

The whole collection is stored as one JSON array of objects whose keys
are exactly the ScheduledPayment field names:

    [{"title": "Rent", "amount": "1200", "date": "2024-05-01",
      "category": "Rent", "frequency": "Monthly", "notes": "",
      "status": "Scheduled"}, ...]

Enum fields are stored by their labels ("Loan Payment", "One-Time", ...).
"""

from typing import Sequence

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from scheduled_payments.models.payment import ScheduledPayment
from scheduled_payments.services.storage.interface import DeserializationError


_collection_adapter = TypeAdapter(list[ScheduledPayment])


def serialize(payments: Sequence[ScheduledPayment]) -> bytes:
    """Encode a collection as UTF-8 JSON, preserving order."""
    return _collection_adapter.dump_json(list(payments))


def deserialize(data: bytes) -> list[ScheduledPayment]:
    """
    Decode a stored collection.

    Raises:
        DeserializationError: If the bytes are not a JSON array of
            payment records (bad JSON, wrong shape, unknown labels)
    """
    try:
        return _collection_adapter.validate_json(data)
    except PydanticValidationError as e:
        raise DeserializationError(
            f"Stored payments are not a valid collection "
            f"({e.error_count()} errors): {e.errors()[0]['msg']}"
        ) from e
