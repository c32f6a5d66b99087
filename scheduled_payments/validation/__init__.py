"""Draft validation package."""

from scheduled_payments.validation.validator import DraftValidator, ValidationError

__all__ = ["DraftValidator", "ValidationError"]
