"""
Ledger Store

DESIGN DECISION: The store is the ONLY owner of the ledger snapshot.
Every change goes through one of its mutation methods, which:
1. Validate the input (rejecting without touching the ledger)
2. Apply the change in memory
3. Try to persist the whole snapshot

If step 3 fails, the change stays applied in memory and the outcome says
it was not saved, so the user can be warned that a reload would lose it.

Loading never raises. A missing blob means a first run; an unreadable,
unparseable or wrongly-shaped blob is replaced by the default snapshot
and reported as a warning.

Mutations are synchronous and assume a single caller at a time.
"""

import json
import time
from datetime import date
from typing import Any, Callable, Optional

import structlog
from pydantic import ValidationError

from debt_tracker.config import get_settings
from debt_tracker.models.ledger import (
    ExpenseDraft,
    ExpenseRecord,
    LedgerSnapshot,
    PaymentDraft,
    PaymentRecord,
)
from debt_tracker.models.summary import ErrorKind, MutationOutcome
from debt_tracker.services.storage import (
    CorruptDataError,
    KeyValueStorage,
    StorageError,
)
from debt_tracker.validation import (
    parse_amount,
    validate_expense,
    validate_initial_debt,
    validate_payment,
    validate_salary,
)


logger = structlog.get_logger(__name__)

SAVE_FAILED_MESSAGE = "Error saving data to storage"
LOAD_INVALID_MESSAGE = "Loaded data was invalid, using default values"
LOAD_FAILED_MESSAGE = "Error loading saved data"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class LedgerStore:
    """
    Owns the canonical ledger snapshot and its persistence.

    Hand a single instance to every collaborator that needs the ledger;
    read it through `snapshot` (a copy) and change it through the
    mutation methods.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        storage_key: Optional[str] = None,
        default_salary: Optional[float] = None,
        default_initial_debt: Optional[float] = None,
        today: Callable[[], date] = date.today,
        id_clock: Callable[[], int] = _now_ms,
    ):
        """
        Initialize the store with the default snapshot. Call load() to
        pick up persisted data.

        Args:
            storage: Key-value backend the snapshot is written to
            storage_key: Key under which the snapshot lives
            default_salary: Salary of a new or cleared ledger
            default_initial_debt: Initial debt of a new or cleared ledger
            today: Returns the local date used for future-date checks
            id_clock: Returns the millisecond timestamp ids are based on
        """
        settings = get_settings()
        self._storage = storage
        self._key = storage_key or settings.storage.storage_key
        ledger_settings = settings.ledger
        self._default_salary = (
            default_salary if default_salary is not None
            else ledger_settings.default_salary
        )
        self._default_initial_debt = (
            default_initial_debt if default_initial_debt is not None
            else ledger_settings.default_initial_debt
        )
        self._today = today
        self._id_clock = id_clock
        self._snapshot = self.default_snapshot()

    @property
    def storage_key(self) -> str:
        return self._key

    @property
    def snapshot(self) -> LedgerSnapshot:
        """A deep copy of the current ledger. Changing it changes nothing here."""
        return self._snapshot.model_copy(deep=True)

    def default_snapshot(self) -> LedgerSnapshot:
        return LedgerSnapshot.default(
            salary=self._default_salary,
            initial_debt=self._default_initial_debt,
        )

    # ------------------------------------------------------------------ #
    # Serialization
    # ------------------------------------------------------------------ #
    @staticmethod
    def serialize(snapshot: LedgerSnapshot, indent: Optional[int] = None) -> str:
        return json.dumps(
            snapshot.to_storage_dict(),
            indent=indent,
            ensure_ascii=False,
            allow_nan=False,
        )

    @staticmethod
    def deserialize(blob: str) -> LedgerSnapshot:
        """
        Parse a persisted blob.

        Raises:
            CorruptDataError: If the blob is not JSON or not a ledger
        """
        try:
            payload: Any = json.loads(blob)
        except (json.JSONDecodeError, TypeError) as e:
            raise CorruptDataError(f"Saved ledger is not valid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise CorruptDataError(
                f"Saved ledger must be a JSON object, got {type(payload).__name__}"
            )

        try:
            return LedgerSnapshot.model_validate(payload)
        except ValidationError as e:
            raise CorruptDataError(
                f"Saved ledger has the wrong shape ({e.error_count()} problems)"
            ) from e

    # ------------------------------------------------------------------ #
    # Persistence
    # ------------------------------------------------------------------ #
    def load(self) -> tuple[LedgerSnapshot, Optional[str]]:
        """
        Load the persisted ledger, falling back to defaults.

        Returns:
            (snapshot, warning) where warning is None on a clean load or
            first run, and a user-facing message when defaults were used
            because the saved data could not be used.
        """
        warning = None
        try:
            blob = self._storage.get_item(self._key)
            snapshot = self.deserialize(blob) if blob is not None else self.default_snapshot()
        except CorruptDataError as e:
            logger.warning("ledger_load_corrupt", key=self._key, error=str(e))
            snapshot = self.default_snapshot()
            warning = LOAD_INVALID_MESSAGE
        except StorageError as e:
            logger.error("ledger_load_failed", key=self._key, error=str(e))
            snapshot = self.default_snapshot()
            warning = LOAD_FAILED_MESSAGE

        self._snapshot = snapshot
        return self.snapshot, warning

    def persist(self, snapshot: Optional[LedgerSnapshot] = None) -> bool:
        """
        Write a snapshot (the current one by default) to storage.

        Returns:
            True if written, False on any serialization or storage failure
        """
        snapshot = snapshot if snapshot is not None else self._snapshot
        try:
            blob = self.serialize(snapshot)
            self._storage.set_item(self._key, blob)
        except (StorageError, TypeError, ValueError) as e:
            logger.error("ledger_persist_failed", key=self._key, error=str(e))
            return False
        return True

    def export_json(self) -> str:
        """The current snapshot as pretty-printed JSON, ready to save as a file."""
        return self.serialize(self._snapshot, indent=2)

    def _saved(self, message: str, record_id: Optional[int] = None) -> MutationOutcome:
        """Persist after an applied change and describe the result."""
        if self.persist():
            return MutationOutcome(
                applied=True,
                saved=True,
                message=message,
                record_id=record_id,
            )
        return MutationOutcome(
            applied=True,
            saved=False,
            error_kind=ErrorKind.STORAGE,
            message=SAVE_FAILED_MESSAGE,
            record_id=record_id,
        )

    # ------------------------------------------------------------------ #
    # Records
    # ------------------------------------------------------------------ #
    def _next_id(self, records: list) -> int:
        """
        A millisecond timestamp, bumped past every id already in the
        collection so two records created in the same millisecond differ.
        """
        highest = max((record.id for record in records), default=0)
        return max(self._id_clock(), highest + 1)

    def add_expense(self, draft: ExpenseDraft) -> MutationOutcome:
        error = validate_expense(draft, today=self._today())
        if error:
            logger.info("expense_rejected", reason=error)
            return MutationOutcome.rejected(error)

        record = ExpenseRecord(
            id=self._next_id(self._snapshot.expenses),
            category=draft.category,
            amount=draft.amount,
            date=draft.date,
            description=draft.description,
        )
        self._snapshot.expenses.append(record)
        return self._saved("Expense added successfully!", record_id=record.id)

    def add_payment(self, draft: PaymentDraft) -> MutationOutcome:
        error = validate_payment(draft, today=self._today())
        if error:
            logger.info("payment_rejected", reason=error)
            return MutationOutcome.rejected(error)

        record = PaymentRecord(
            id=self._next_id(self._snapshot.debt_payments),
            amount=draft.amount,
            date=draft.date,
        )
        self._snapshot.debt_payments.append(record)
        return self._saved("Payment recorded successfully!", record_id=record.id)

    def delete_expense(self, expense_id: int) -> MutationOutcome:
        """Remove an expense. An unknown id changes nothing and is not an error."""
        remaining = [e for e in self._snapshot.expenses if e.id != expense_id]
        found = len(remaining) != len(self._snapshot.expenses)
        self._snapshot.expenses = remaining
        return self._saved(
            "Expense deleted successfully!" if found else "Expense was already removed",
            record_id=expense_id if found else None,
        )

    def delete_payment(self, payment_id: int) -> MutationOutcome:
        """Remove a payment. An unknown id changes nothing and is not an error."""
        remaining = [p for p in self._snapshot.debt_payments if p.id != payment_id]
        found = len(remaining) != len(self._snapshot.debt_payments)
        self._snapshot.debt_payments = remaining
        return self._saved(
            "Payment deleted successfully!" if found else "Payment was already removed",
            record_id=payment_id if found else None,
        )

    # ------------------------------------------------------------------ #
    # Bulk operations
    # ------------------------------------------------------------------ #
    def reset_month(self) -> MutationOutcome:
        """Clear expenses and payments; salary and initial debt stay."""
        self._snapshot.expenses = []
        self._snapshot.debt_payments = []
        return self._saved("Month reset successfully!")

    def clear_all(self) -> MutationOutcome:
        """Back to the default snapshot."""
        self._snapshot = self.default_snapshot()
        return self._saved("All data cleared!")

    # ------------------------------------------------------------------ #
    # Scalars
    # ------------------------------------------------------------------ #
    def set_salary(self, value: Any) -> MutationOutcome:
        error = validate_salary(value)
        if error:
            return MutationOutcome.rejected(error)
        self._snapshot.salary = parse_amount(value)
        return self._saved("Salary updated successfully!")

    def set_initial_debt(self, value: Any) -> MutationOutcome:
        error = validate_initial_debt(value)
        if error:
            return MutationOutcome.rejected(error)
        self._snapshot.initial_debt = parse_amount(value)
        return self._saved("Debt amount updated successfully!")
