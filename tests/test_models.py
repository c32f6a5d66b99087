"""
Tests for Scheduled Payments

Test strategy:
1. Unit tests for individual components (models, validator, codec)
2. Flow tests for the store and orchestrator against in-memory storage
3. No real disk access outside pytest's tmp_path
"""

import pytest
from datetime import date, datetime

from scheduled_payments.models.payment import (
    DEFAULT_CATEGORY,
    DEFAULT_FREQUENCY,
    DEFAULT_STATUS,
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


class TestPaymentDraft:
    """Tests for the form draft model."""

    def test_blank_draft_uses_explicit_defaults(self):
        """Test that a blank draft carries the default labels."""
        draft = PaymentDraft.blank()
        assert draft.title == ""
        assert draft.amount == ""
        assert draft.date == ""
        assert draft.notes == ""
        assert draft.category == DEFAULT_CATEGORY == PaymentCategory.RECHARGE
        assert draft.frequency == DEFAULT_FREQUENCY == PaymentFrequency.ONE_TIME
        assert draft.status == DEFAULT_STATUS == PaymentStatus.SCHEDULED

    def test_draft_strips_whitespace(self):
        """Test that whitespace is stripped from text fields."""
        draft = PaymentDraft(title="  Netflix  ", amount=" 499 ", date="2024-05-01")
        assert draft.title == "Netflix"
        assert draft.amount == "499"

    def test_draft_accepts_picked_date(self):
        """Test that a date object is stored as YYYY-MM-DD."""
        draft = PaymentDraft(title="Rent", amount="1200", date=date(2024, 5, 1))
        assert draft.date == "2024-05-01"

    def test_draft_accepts_picked_datetime(self):
        """Test that a datetime is truncated to its date."""
        draft = PaymentDraft(title="Rent", amount="1200", date=datetime(2024, 5, 1, 18, 30))
        assert draft.date == "2024-05-01"

    def test_draft_accepts_category_labels(self):
        """Test that categories can be given by their display label."""
        draft = PaymentDraft(category="Loan Payment", frequency="Quarterly")
        assert draft.category == PaymentCategory.LOAN_PAYMENT
        assert draft.frequency == PaymentFrequency.QUARTERLY

    def test_draft_rejects_unknown_category(self):
        """Test that a category outside the fixed set is rejected."""
        with pytest.raises(ValueError):
            PaymentDraft(category="Groceries")

    def test_none_values_become_empty(self):
        """Test that missing form values read as empty text."""
        draft = PaymentDraft(title=None, amount=None, notes=None)
        assert draft.title == ""
        assert draft.notes == ""

    def test_none_labels_use_defaults(self):
        """Test that an unpicked category or frequency falls back to the default."""
        draft = PaymentDraft(category=None, frequency=None)
        assert draft.category == DEFAULT_CATEGORY
        assert draft.frequency == DEFAULT_FREQUENCY

    def test_status_always_scheduled(self):
        """Test that a caller-supplied status never survives."""
        assert PaymentDraft(status="Paid").status == PaymentStatus.SCHEDULED
        assert PaymentDraft(status=None).status == PaymentStatus.SCHEDULED

    def test_missing_fields(self):
        """Test that required fields are reported in order."""
        assert PaymentDraft().missing_fields() == ["title", "amount", "date"]
        assert PaymentDraft(title="x", date="2024-05-01").missing_fields() == ["amount"]
        assert PaymentDraft(title="   ", amount="5", date="2024-05-01").missing_fields() == ["title"]


class TestScheduledPayment:
    """Tests for the persisted payment record."""

    def test_from_draft_copies_fields(self):
        """Test that a record mirrors the draft."""
        draft = PaymentDraft(
            title="Electricity",
            amount="850.50",
            date="2024-05-10",
            category=PaymentCategory.UTILITY,
            frequency=PaymentFrequency.MONTHLY,
            notes="BESCOM",
        )
        payment = ScheduledPayment.from_draft(draft)
        assert payment.title == "Electricity"
        assert payment.amount == "850.50"
        assert payment.date == "2024-05-10"
        assert payment.category == PaymentCategory.UTILITY
        assert payment.frequency == PaymentFrequency.MONTHLY
        assert payment.notes == "BESCOM"
        assert payment.status == PaymentStatus.SCHEDULED

    def test_amount_is_not_numerically_validated(self):
        """Test that any non-empty amount text is kept as-is."""
        payment = ScheduledPayment(title="Gift", amount="about 20", date="2024-05-01")
        assert payment.amount == "about 20"

    def test_record_is_frozen(self):
        """Test that records can't be edited in place."""
        payment = ScheduledPayment(title="Rent", amount="1200", date="2024-05-01")
        with pytest.raises(ValueError):
            payment.title = "Other"

    def test_records_compare_by_value(self):
        """Test that duplicate records are equal but distinct."""
        first = ScheduledPayment(title="Rent", amount="1200", date="2024-05-01")
        second = ScheduledPayment(title="Rent", amount="1200", date="2024-05-01")
        assert first == second
        assert first is not second

    def test_display_dict(self):
        """Test the labelled values used by the history list."""
        payment = ScheduledPayment(title="Rent", amount="1200", date="2024-05-01")
        display = payment.to_display_dict()
        assert list(display) == [
            "Title", "Amount", "Date", "Category", "Frequency", "Notes", "Status",
        ]
        assert display["Category"] == "Recharge"
        assert display["Status"] == "Scheduled"
        assert "Date" not in payment.to_display_dict(include_date=False)


class TestEnums:
    """Tests for the fixed label sets."""

    def test_category_order(self):
        """Test that categories keep their form order."""
        assert [c.value for c in PaymentCategory] == [
            "Recharge", "Utility", "Loan Payment", "Subscription",
            "Insurance", "Credit Payment", "Rent", "Investment",
        ]

    def test_frequency_order(self):
        """Test that frequencies keep their form order."""
        assert [f.value for f in PaymentFrequency] == [
            "One-Time", "Monthly", "Quarterly", "Yearly",
        ]

    def test_format_payment_date(self):
        assert format_payment_date(date(2024, 1, 9)) == "2024-01-09"


class TestValidationModels:
    """Tests for ValidationResult."""

    def test_validation_result_reports_missing_fields(self):
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(field="title", issue_type="missing", message="Title is required"),
                ValidationIssue(field="date", issue_type="missing", message="Date is required"),
            ],
        )
        assert result.has_errors is True
        assert result.missing_fields == ["title", "date"]
        assert result.summary() == "Title is required; Date is required"

    def test_valid_result_has_no_summary(self):
        result = ValidationResult(is_valid=True)
        assert result.has_errors is False
        assert result.summary() is None

    def test_date_marker_defaults(self):
        marker = DateMarker()
        assert marker.marked is True
        assert marker.dot_color == "blue"


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.COLLECTION_LOADED,
            description="Loaded",
        )
        assert event.event_type == AuditEventType.COLLECTION_LOADED
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEventBuilder.payment_scheduled(
            storage_key="scheduledPayments",
            position=2,
            title="Rent",
            amount="1200",
            date="2024-05-01",
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "payment_scheduled"
        assert log_dict["position"] == 2
        assert log_dict["details"]["title"] == "Rent"
        assert log_dict["is_user_action"] is True

    def test_builder_validation_failed(self):
        event = AuditEventBuilder.validation_failed(["title", "amount"])
        assert event.event_type == AuditEventType.VALIDATION_FAILED
        assert event.severity == AuditSeverity.WARNING
        assert event.details["missing_fields"] == ["title", "amount"]
        assert event.details["invalid_fields"] == []

    def test_builder_validation_failed_invalid_fields(self):
        event = AuditEventBuilder.validation_failed([], invalid_fields=["frequency"])
        assert event.details["invalid_fields"] == ["frequency"]
        assert event.description == "Draft rejected, invalid: frequency"

    def test_builder_system_error(self):
        event = AuditEventBuilder.system_error(
            error_type="PersistenceError",
            error_message="disk full",
            details={"action": "submit"},
        )
        assert event.event_type == AuditEventType.SYSTEM_ERROR
        assert event.severity == AuditSeverity.ERROR
        assert event.details == {"action": "submit"}

    def test_builder_load_failed(self):
        event = AuditEventBuilder.load_failed(
            storage_key="scheduledPayments",
            error_type="DeserializationError",
            error_message="bad json",
        )
        assert event.severity == AuditSeverity.ERROR
        assert event.error_type == "DeserializationError"

    def test_builder_collection_loaded_empty(self):
        event = AuditEventBuilder.collection_loaded("scheduledPayments", 0)
        assert "starting empty" in event.description


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
