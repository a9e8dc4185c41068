"""
Tests for the Debt & Expense Tracker models

Test strategy:
1. Unit tests for individual components (models, validators, engine)
2. Store and orchestrator tests against in-memory and failing backends
3. No real files outside pytest's tmp_path
"""

import math
from datetime import date
from uuid import uuid4

import pytest
from pydantic import ValidationError

from debt_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from debt_tracker.models.ledger import (
    DEFAULT_CATEGORY_COLOR,
    ExpenseDraft,
    ExpenseRecord,
    KnownCategory,
    LedgerSnapshot,
    PaymentDraft,
    PaymentRecord,
    color_for_category,
)
from debt_tracker.models.summary import ErrorKind, MutationOutcome


class TestLedgerSnapshot:
    """Tests for the persisted root model."""

    def test_default_snapshot(self):
        """Test the first-run snapshot."""
        snapshot = LedgerSnapshot.default()
        assert snapshot.salary == 18000
        assert snapshot.initial_debt == 150000
        assert snapshot.expenses == []
        assert snapshot.debt_payments == []

    def test_accepts_persisted_field_names(self):
        """Test that camelCase keys from storage populate the model."""
        snapshot = LedgerSnapshot.model_validate({
            "salary": 20000,
            "initialDebt": 5000,
            "expenses": [],
            "debtPayments": [{"id": 3, "amount": 100, "date": "2024-06-01"}],
        })
        assert snapshot.initial_debt == 5000
        assert snapshot.debt_payments[0].date == date(2024, 6, 1)

    def test_to_storage_dict_layout(self):
        """Test conversion to the persisted JSON layout."""
        snapshot = LedgerSnapshot(
            salary=18000,
            initial_debt=150000,
            expenses=[ExpenseRecord(
                id=7, category="Food", amount=12.5, date=date(2024, 6, 1), description="lunch",
            )],
        )
        data = snapshot.to_storage_dict()
        assert set(data) == {"salary", "initialDebt", "expenses", "debtPayments"}
        assert data["expenses"][0] == {
            "id": 7,
            "category": "Food",
            "amount": 12.5,
            "date": "2024-06-01",
            "description": "lunch",
        }

    def test_rejects_string_salary(self):
        """Test that numbers stored as strings are not coerced."""
        with pytest.raises(ValidationError):
            LedgerSnapshot.model_validate({
                "salary": "18000", "initialDebt": 0, "expenses": [], "debtPayments": [],
            })

    def test_rejects_boolean_debt(self):
        """Test that booleans are not numbers here."""
        with pytest.raises(ValidationError):
            LedgerSnapshot.model_validate({
                "salary": 1, "initialDebt": True, "expenses": [], "debtPayments": [],
            })

    def test_rejects_non_list_collections(self):
        """Test the collection shape check."""
        with pytest.raises(ValidationError):
            LedgerSnapshot.model_validate({
                "salary": 1, "initialDebt": 0, "expenses": {}, "debtPayments": [],
            })

    def test_rejects_negative_scalars(self):
        """Test that salary and debt cannot be negative."""
        with pytest.raises(ValidationError):
            LedgerSnapshot(salary=-1, initial_debt=0)

    def test_duplicate_ids_within_collection_rejected(self):
        """Test that ids must be unique inside one collection."""
        with pytest.raises(ValueError, match="Duplicate id 1 in expenses"):
            LedgerSnapshot(
                salary=1,
                initial_debt=0,
                expenses=[
                    ExpenseRecord(id=1, category="Food", amount=1, date=date(2024, 1, 1)),
                    ExpenseRecord(id=1, category="Travel", amount=2, date=date(2024, 1, 2)),
                ],
            )

    def test_same_id_across_collections_allowed(self):
        """Test that an expense and a payment may share an id."""
        snapshot = LedgerSnapshot(
            salary=1,
            initial_debt=0,
            expenses=[ExpenseRecord(id=1, category="Food", amount=1, date=date(2024, 1, 1))],
            debt_payments=[PaymentRecord(id=1, amount=1, date=date(2024, 1, 1))],
        )
        assert snapshot.expenses[0].id == snapshot.debt_payments[0].id


class TestRecords:
    """Tests for expense and payment records."""

    def test_expense_rejects_zero_amount(self):
        """Test that record amounts must be positive."""
        with pytest.raises(ValidationError):
            ExpenseRecord(id=1, category="Food", amount=0, date=date(2024, 1, 1))

    def test_expense_rejects_empty_category(self):
        """Test that a category label is required."""
        with pytest.raises(ValidationError):
            ExpenseRecord(id=1, category="", amount=5, date=date(2024, 1, 1))

    def test_payment_rejects_negative_amount(self):
        """Test that payment amounts must be positive."""
        with pytest.raises(ValidationError):
            PaymentRecord(id=1, amount=-10, date=date(2024, 1, 1))

    @pytest.mark.parametrize("amount", [float("inf"), float("nan")])
    def test_records_reject_non_finite_amounts(self, amount):
        """Test that infinities and NaN cannot be stored."""
        with pytest.raises(ValidationError):
            PaymentRecord(id=1, amount=amount, date=date(2024, 1, 1))
        with pytest.raises(ValidationError):
            LedgerSnapshot(salary=amount, initial_debt=0)

    def test_records_are_frozen(self):
        """Test that records cannot be edited in place."""
        record = PaymentRecord(id=1, amount=10, date=date(2024, 1, 1))
        with pytest.raises(ValidationError):
            record.amount = 20

    def test_description_is_stored_raw(self):
        """Test that markup in descriptions is kept verbatim."""
        record = ExpenseRecord(
            id=1, category="Food", amount=5, date=date(2024, 1, 1),
            description="<script>alert(1)</script>",
        )
        assert record.description == "<script>alert(1)</script>"


class TestDrafts:
    """Tests for the unvalidated form drafts."""

    def test_expense_draft_all_optional(self):
        """Test that an empty draft can be built (validation reports it)."""
        draft = ExpenseDraft()
        assert draft.category is None
        assert draft.amount is None
        assert draft.description == ""

    def test_expense_draft_strips_whitespace(self):
        """Test that whitespace is stripped from text fields."""
        draft = ExpenseDraft(category="  Food ", description="  lunch  ")
        assert draft.category == "Food"
        assert draft.description == "lunch"

    def test_payment_draft_accepts_nan(self):
        """Test that NaN passes the model and is left to validation."""
        draft = PaymentDraft(amount=float("nan"), date=date(2024, 1, 1))
        assert math.isnan(draft.amount)


class TestCategories:
    """Tests for the category palette."""

    def test_known_category_colors(self):
        """Test palette lookups for known labels."""
        assert color_for_category(KnownCategory.FOOD.value) == "#606c38"
        assert color_for_category("WiFi") == "#bc6c25"
        assert color_for_category("Others") == "#8a9a5b"

    def test_unknown_category_falls_back(self):
        """Test that free-text categories get the fallback colour."""
        assert color_for_category("Pets") == DEFAULT_CATEGORY_COLOR


class TestMutationOutcome:
    """Tests for the write result model."""

    def test_rejected_outcome(self):
        """Test the validation rejection helper."""
        outcome = MutationOutcome.rejected("Amount must be greater than 0")
        assert outcome.applied is False
        assert outcome.saved is False
        assert outcome.error_kind == ErrorKind.VALIDATION
        assert outcome.success is False

    def test_applied_but_unsaved_is_not_success(self):
        """Test that a failed save is not reported as success."""
        outcome = MutationOutcome(applied=True, saved=False, error_kind=ErrorKind.STORAGE)
        assert outcome.success is False


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_creation(self):
        """Test AuditEvent model creation."""
        event = AuditEvent(
            event_type=AuditEventType.MONTH_RESET,
            description="Month reset",
        )
        assert event.event_type == AuditEventType.MONTH_RESET
        assert event.severity == AuditSeverity.INFO

    def test_audit_event_to_log_dict(self):
        """Test conversion to log dictionary."""
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            entity_type="expense",
            entity_id=42,
            description="Expense added",
            details={"category": "Food", "amount": 500.0},
        )
        log_dict = event.to_log_dict()
        assert "event_id" in log_dict
        assert log_dict["event_type"] == "expense_added"
        assert log_dict["entity_id"] == 42
        assert log_dict["details"]["category"] == "Food"

    def test_builder_record_added(self):
        """Test AuditEventBuilder.record_added for both record kinds."""
        correlation_id = uuid4()
        expense = AuditEventBuilder.record_added("expense", 5, 500.0, correlation_id, "Food")
        payment = AuditEventBuilder.record_added("payment", 6, 2500.0, correlation_id)

        assert expense.event_type == AuditEventType.EXPENSE_ADDED
        assert expense.details == {"amount": 500.0, "category": "Food"}
        assert payment.event_type == AuditEventType.PAYMENT_ADDED
        assert payment.correlation_id == correlation_id

    def test_builder_record_rejected_is_warning(self):
        """Test that rejections are logged as warnings."""
        event = AuditEventBuilder.record_rejected("payment", "Amount must be greater than 0")
        assert event.event_type == AuditEventType.PAYMENT_REJECTED
        assert event.severity == AuditSeverity.WARNING

    def test_builder_ledger_loaded_with_warning(self):
        """Test that a fallback load becomes its own event type."""
        event = AuditEventBuilder.ledger_loaded(0, 0, warning="bad data")
        assert event.event_type == AuditEventType.LOAD_FELL_BACK_TO_DEFAULTS
        assert event.error_message == "bad data"

    def test_builder_save_failed_is_error(self):
        """Test that failed saves are logged as errors."""
        event = AuditEventBuilder.save_failed("add_expense")
        assert event.severity == AuditSeverity.ERROR
        assert event.details["operation"] == "add_expense"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
