"""
Draft Validation

DESIGN DECISION: Validation is presence-only.
Title, amount and date must be non-empty; nothing else is checked.
Amounts are not parsed, dates are not range-checked, and category /
frequency / notes / status are accepted as given.

IMPORTANT: Validation NEVER silently fixes issues.
A failed check is reported to the caller before anything is mutated.
"""

from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from scheduled_payments.models.payment import (
    PaymentDraft,
    ValidationIssue,
    ValidationResult,
)


class ValidationError(Exception):
    """
    A draft is missing required fields.

    Carries the full ValidationResult so callers can show every issue.
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        super().__init__(result.summary() or "Validation failed")

    @property
    def missing_fields(self) -> list[str]:
        return self.result.missing_fields

    @property
    def invalid_fields(self) -> list[str]:
        return self.result.invalid_fields


# User-facing labels for required fields
FIELD_LABELS = {
    "title": "Title",
    "amount": "Amount",
    "date": "Date",
}


class DraftValidator:
    """Checks a payment draft is complete enough to schedule."""

    def build_draft(self, values: Mapping[str, Any]) -> PaymentDraft:
        """
        Build a draft from raw form values.

        Unset category / frequency fall back to the draft defaults.

        Raises:
            ValidationError: If a value can't be used at all
                (e.g., a category label that doesn't exist)
        """
        try:
            return PaymentDraft.model_validate(dict(values))
        except PydanticValidationError as e:
            issues = [
                ValidationIssue(
                    field=".".join(str(part) for part in error["loc"]) or "draft",
                    issue_type="invalid",
                    message=error["msg"],
                )
                for error in e.errors()
            ]
            raise ValidationError(ValidationResult(is_valid=False, issues=issues)) from e

    def validate(self, draft: PaymentDraft) -> ValidationResult:
        """
        Check required fields are present.

        Returns:
            ValidationResult with one 'missing' issue per empty field
        """
        issues = [
            ValidationIssue(
                field=name,
                issue_type="missing",
                message=f"{FIELD_LABELS.get(name, name)} is required",
            )
            for name in draft.missing_fields()
        ]
        return ValidationResult(is_valid=not issues, issues=issues)

    def ensure_valid(self, draft: PaymentDraft) -> ValidationResult:
        """
        Validate and raise if the draft can't be scheduled.

        Raises:
            ValidationError: If any required field is empty
        """
        result = self.validate(draft)
        if not result.is_valid:
            raise ValidationError(result)
        return result

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """
        Message shown next to the form.

        Matches the single alert the form has always shown.
        """
        if result.is_valid:
            return "✅ Payment details look complete."
        if result.missing_fields:
            return "Title, Amount, and Date are required"
        return f"❌ {result.summary()}"
