"""
Core Data Models for Scheduled Payments

These models define the schemas for every payment flowing through the system.
They are designed to:
1. Make the form defaults explicit instead of hiding them in widget state
2. Be serializable for storage (field names are the stored schema)
3. Stay lenient - only presence of title, amount and date is ever enforced

DESIGN DECISION: Amount and date are kept as text exactly as the user entered
them. We do not parse or round amounts, and the stored date is the plain
YYYY-MM-DD string the calendar keys on.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class PaymentCategory(str, Enum):
    """
    Supported payment categories.

    The order matters: the first value is the form default.
    """
    RECHARGE = "Recharge"
    UTILITY = "Utility"
    LOAN_PAYMENT = "Loan Payment"
    SUBSCRIPTION = "Subscription"
    INSURANCE = "Insurance"
    CREDIT_PAYMENT = "Credit Payment"
    RENT = "Rent"
    INVESTMENT = "Investment"


class PaymentFrequency(str, Enum):
    """
    How often a payment repeats.

    CRITICAL: This is a label only. A "Monthly" payment is stored once
    and is never expanded into future occurrences.
    """
    ONE_TIME = "One-Time"
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"
    YEARLY = "Yearly"


class PaymentStatus(str, Enum):
    """Payment lifecycle status. Only SCHEDULED exists for now."""
    SCHEDULED = "Scheduled"


DEFAULT_CATEGORY = PaymentCategory.RECHARGE
DEFAULT_FREQUENCY = PaymentFrequency.ONE_TIME
DEFAULT_STATUS = PaymentStatus.SCHEDULED

# Fields that must be non-empty before a draft can be scheduled
REQUIRED_FIELDS = ("title", "amount", "date")


def format_payment_date(value: date) -> str:
    """
    Format a picked calendar date as the stored YYYY-MM-DD string.

    Datetimes are truncated to their date part.
    """
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


# =============================================================================
# DRAFT MODEL
# =============================================================================

class PaymentDraft(BaseModel):
    """
    A candidate payment as filled in by the user.

    All text fields default to empty so a half-filled form can still be
    represented. Whether the draft is complete is decided by the validator,
    not by this model.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(
        default="",
        description="What the payment is for"
    )
    amount: str = Field(
        default="",
        description="Amount as entered (not numerically validated)"
    )
    date: str = Field(
        default="",
        description="Due date as YYYY-MM-DD"
    )
    category: PaymentCategory = Field(
        default=DEFAULT_CATEGORY,
        description="Payment category"
    )
    frequency: PaymentFrequency = Field(
        default=DEFAULT_FREQUENCY,
        description="Repeat label"
    )
    notes: str = Field(
        default="",
        description="Free-form notes / description"
    )
    status: PaymentStatus = Field(
        default=DEFAULT_STATUS,
        description="Always Scheduled for new drafts"
    )

    @field_validator('date', mode='before')
    @classmethod
    def normalize_picked_date(cls, v: Any) -> Any:
        """Accept date objects from a date picker."""
        if isinstance(v, date):
            return format_payment_date(v)
        return v

    @field_validator('title', 'amount', 'notes', mode='before')
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        """Treat a missing form value as empty text."""
        return "" if v is None else v

    @field_validator('category', mode='before')
    @classmethod
    def default_category(cls, v: Any) -> Any:
        """An unpicked category falls back to the default."""
        return DEFAULT_CATEGORY if v is None or v == "" else v

    @field_validator('frequency', mode='before')
    @classmethod
    def default_frequency(cls, v: Any) -> Any:
        """An unpicked frequency falls back to the default."""
        return DEFAULT_FREQUENCY if v is None or v == "" else v

    @field_validator('status', mode='before')
    @classmethod
    def force_scheduled(cls, v: Any) -> PaymentStatus:
        # New drafts are always Scheduled, whatever the caller sent.
        return PaymentStatus.SCHEDULED

    @classmethod
    def blank(cls) -> "PaymentDraft":
        """A draft with every field reset to its default."""
        return cls()

    def missing_fields(self) -> list[str]:
        """Names of required fields that are still empty."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]


# =============================================================================
# SCHEDULED PAYMENT (the persisted record)
# =============================================================================

class ScheduledPayment(BaseModel):
    """
    A payment that has been scheduled and is part of the collection.

    Records have no identifier - they are referenced by position in the
    collection. Duplicates (same title and date) are allowed.

    Instances are frozen: the collection never edits a record in place.
    """
    model_config = ConfigDict(frozen=True)

    title: str = Field(..., min_length=1)
    amount: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)
    category: PaymentCategory = DEFAULT_CATEGORY
    frequency: PaymentFrequency = DEFAULT_FREQUENCY
    notes: str = ""
    status: PaymentStatus = DEFAULT_STATUS

    @classmethod
    def from_draft(cls, draft: PaymentDraft) -> "ScheduledPayment":
        """
        Build the record for a validated draft.

        Status is forced to SCHEDULED regardless of what the draft says.
        """
        return cls(
            title=draft.title,
            amount=draft.amount,
            date=draft.date,
            category=draft.category,
            frequency=draft.frequency,
            notes=draft.notes,
            status=PaymentStatus.SCHEDULED,
        )

    def to_display_dict(self, include_date: bool = True) -> dict[str, str]:
        """
        Labelled values for history / day listings.

        The day listing omits the date since it is already the heading.
        """
        display = {
            "Title": self.title,
            "Amount": self.amount,
            "Date": self.date,
            "Category": self.category.value,
            "Frequency": self.frequency.value,
            "Notes": self.notes,
            "Status": self.status.value,
        }
        if not include_date:
            del display["Date"]
        return display


# =============================================================================
# CALENDAR + VALIDATION MODELS
# =============================================================================

class DateMarker(BaseModel):
    """Calendar marker: at least one payment falls on this date."""
    model_config = ConfigDict(frozen=True)

    marked: bool = True
    dot_color: str = "blue"


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Result of validating a draft before scheduling."""

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def missing_fields(self) -> list[str]:
        """Fields reported as missing."""
        return [
            issue.field for issue in self.issues
            if issue.issue_type == "missing"
        ]

    @property
    def invalid_fields(self) -> list[str]:
        """Fields given a value outside their allowed set."""
        return [
            issue.field for issue in self.issues
            if issue.issue_type == "invalid"
        ]

    def summary(self) -> Optional[str]:
        """One-line message for the user, or None when valid."""
        if self.is_valid:
            return None
        return "; ".join(issue.message for issue in self.issues)
