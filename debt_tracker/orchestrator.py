"""
Main Orchestrator for the Debt & Expense Tracker

This module ties the components together and is the single surface the
UI talks to:
- Reads: get_snapshot(), get_aggregates(), get_export()/export_snapshot()
- Writes: the ledger mutations, each returning a MutationOutcome

DESIGN DECISION: The orchestrator enforces the boundaries:
- Only the store changes the ledger
- Only the aggregation engine derives numbers from it
- Every operation is audited
- After every applied change, fresh aggregates are pushed to listeners

Nothing in here formats for display or escapes text; that belongs to
whatever renders the aggregates.
"""

from typing import Any, Callable, Optional
from uuid import UUID

from debt_tracker.aggregation import get_aggregates
from debt_tracker.audit import AuditLogger, create_correlation_id
from debt_tracker.config import get_settings
from debt_tracker.ledger import LedgerStore
from debt_tracker.models.ledger import ExpenseDraft, LedgerSnapshot, PaymentDraft
from debt_tracker.models.summary import ErrorKind, LedgerAggregates, MutationOutcome
from debt_tracker.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
)


AggregatesListener = Callable[[LedgerAggregates], None]


class LedgerTracker:
    """
    Collaborator-facing facade over one LedgerStore.

    Flow for every write:
    1. Delegate to the store (validate → apply → persist)
    2. Audit the outcome
    3. If the ledger changed, recompute aggregates and notify listeners
    """

    def __init__(
        self,
        store: LedgerStore,
        audit_logger: Optional[AuditLogger] = None,
        recent_limit: Optional[int] = None,
    ):
        self._store = store
        self._audit_logger = audit_logger or AuditLogger()
        self._recent_limit = (
            recent_limit if recent_limit is not None
            else get_settings().ledger.recent_expenses_limit
        )
        self._listeners: list[AggregatesListener] = []

    @property
    def audit_logger(self) -> AuditLogger:
        return self._audit_logger

    # ------------------------------------------------------------------ #
    # Listener registration
    # ------------------------------------------------------------------ #
    def add_listener(self, callback: AggregatesListener) -> None:
        self._listeners.append(callback)

    def _notify(self) -> None:
        if not self._listeners:
            return
        aggregates = self.get_aggregates()
        for listener in self._listeners:
            listener(aggregates)

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #
    def load(self) -> Optional[str]:
        """
        Load persisted data into the store.

        Returns the user-facing warning if defaults had to be used.
        """
        snapshot, warning = self._store.load()
        self._audit_logger.log_ledger_loaded(
            expense_count=len(snapshot.expenses),
            payment_count=len(snapshot.debt_payments),
            warning=warning,
        )
        self._notify()
        return warning

    def get_snapshot(self) -> LedgerSnapshot:
        return self._store.snapshot

    def get_aggregates(self) -> LedgerAggregates:
        return get_aggregates(self._store.snapshot, recent_limit=self._recent_limit)

    def get_export(self) -> str:
        """
        The exact serialized ledger, pretty-printed, for a file download.

        Not audited: a UI may prepare the export on every render. Call
        record_export() once the user actually takes it.
        """
        return self._store.export_json()

    def record_export(
        self,
        exported: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        self._audit_logger.log_snapshot_exported(
            size_bytes=len(exported.encode("utf-8")),
            correlation_id=correlation_id or create_correlation_id(),
        )

    def export_snapshot(self, correlation_id: Optional[UUID] = None) -> str:
        """Export and audit in one step."""
        exported = self.get_export()
        self.record_export(exported, correlation_id)
        return exported

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #
    def _finish(
        self,
        outcome: MutationOutcome,
        operation: str,
        correlation_id: UUID,
    ) -> MutationOutcome:
        if outcome.error_kind == ErrorKind.STORAGE:
            self._audit_logger.log_save_failed(operation, correlation_id)
        if outcome.applied:
            self._notify()
        return outcome

    def add_expense(
        self,
        draft: ExpenseDraft,
        correlation_id: Optional[UUID] = None,
    ) -> MutationOutcome:
        correlation_id = correlation_id or create_correlation_id()
        outcome = self._store.add_expense(draft)

        if outcome.error_kind == ErrorKind.VALIDATION:
            self._audit_logger.log_record_rejected("expense", outcome.message, correlation_id)
        else:
            self._audit_logger.log_record_added(
                entity_type="expense",
                record_id=outcome.record_id,
                amount=draft.amount,
                correlation_id=correlation_id,
                category=draft.category,
            )
        return self._finish(outcome, "add_expense", correlation_id)

    def add_payment(
        self,
        draft: PaymentDraft,
        correlation_id: Optional[UUID] = None,
    ) -> MutationOutcome:
        correlation_id = correlation_id or create_correlation_id()
        outcome = self._store.add_payment(draft)

        if outcome.error_kind == ErrorKind.VALIDATION:
            self._audit_logger.log_record_rejected("payment", outcome.message, correlation_id)
        else:
            self._audit_logger.log_record_added(
                entity_type="payment",
                record_id=outcome.record_id,
                amount=draft.amount,
                correlation_id=correlation_id,
            )
        return self._finish(outcome, "add_payment", correlation_id)

    def delete_expense(
        self,
        expense_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> MutationOutcome:
        correlation_id = correlation_id or create_correlation_id()
        outcome = self._store.delete_expense(expense_id)
        self._audit_logger.log_record_deleted(
            entity_type="expense",
            record_id=expense_id,
            found=outcome.record_id is not None,
            correlation_id=correlation_id,
        )
        return self._finish(outcome, "delete_expense", correlation_id)

    def delete_payment(
        self,
        payment_id: int,
        correlation_id: Optional[UUID] = None,
    ) -> MutationOutcome:
        correlation_id = correlation_id or create_correlation_id()
        outcome = self._store.delete_payment(payment_id)
        self._audit_logger.log_record_deleted(
            entity_type="payment",
            record_id=payment_id,
            found=outcome.record_id is not None,
            correlation_id=correlation_id,
        )
        return self._finish(outcome, "delete_payment", correlation_id)

    def reset_month(self, correlation_id: Optional[UUID] = None) -> MutationOutcome:
        correlation_id = correlation_id or create_correlation_id()
        before = self._store.snapshot
        outcome = self._store.reset_month()
        self._audit_logger.log_month_reset(
            expenses_cleared=len(before.expenses),
            payments_cleared=len(before.debt_payments),
            correlation_id=correlation_id,
        )
        return self._finish(outcome, "reset_month", correlation_id)

    def clear_all(self, correlation_id: Optional[UUID] = None) -> MutationOutcome:
        correlation_id = correlation_id or create_correlation_id()
        outcome = self._store.clear_all()
        self._audit_logger.log_ledger_cleared(correlation_id)
        return self._finish(outcome, "clear_all", correlation_id)

    def _set_value(
        self,
        field: str,
        value: Any,
        setter: Callable[[Any], MutationOutcome],
        getter: Callable[[LedgerSnapshot], float],
        correlation_id: Optional[UUID],
    ) -> MutationOutcome:
        correlation_id = correlation_id or create_correlation_id()
        old_value = getter(self._store.snapshot)
        outcome = setter(value)

        if outcome.error_kind == ErrorKind.VALIDATION:
            self._audit_logger.log_value_rejected(field, value, outcome.message, correlation_id)
        else:
            self._audit_logger.log_value_updated(
                field=field,
                old_value=old_value,
                new_value=getter(self._store.snapshot),
                correlation_id=correlation_id,
            )
        return self._finish(outcome, f"set_{field}", correlation_id)

    def set_salary(self, value: Any, correlation_id: Optional[UUID] = None) -> MutationOutcome:
        return self._set_value(
            "salary",
            value,
            self._store.set_salary,
            lambda snapshot: snapshot.salary,
            correlation_id,
        )

    def set_initial_debt(
        self,
        value: Any,
        correlation_id: Optional[UUID] = None,
    ) -> MutationOutcome:
        return self._set_value(
            "initial_debt",
            value,
            self._store.set_initial_debt,
            lambda snapshot: snapshot.initial_debt,
            correlation_id,
        )


def create_storage(use_storage: bool = True) -> KeyValueStorage:
    """
    Build the configured storage backend.

    Args:
        use_storage: Set to False to keep everything in memory regardless
                    of configuration (tests, demos).
    """
    settings = get_settings().storage
    if not use_storage or settings.backend == "memory":
        return InMemoryStorage()
    return JsonFileStorage(settings.data_dir, settings.write_retries)


def create_app_components(
    use_storage: bool = True,
    storage: Optional[KeyValueStorage] = None,
) -> tuple[LedgerTracker, Optional[str]]:
    """
    Factory function to create and load the tracker.

    Args:
        use_storage: Whether to persist to the configured backend.
        storage: Explicit backend, overriding configuration.

    Returns:
        (tracker, load_warning)
    """
    store = LedgerStore(storage or create_storage(use_storage))
    tracker = LedgerTracker(store, AuditLogger())
    warning = tracker.load()
    return tracker, warning
