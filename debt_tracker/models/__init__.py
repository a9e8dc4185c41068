"""
Data Models Package

This package contains all Pydantic models used by the tracker.
All data flowing between the store, the aggregation engine and the
UI must conform to these schemas.
"""

from debt_tracker.models.ledger import (
    CATEGORY_COLORS,
    DEFAULT_CATEGORY_COLOR,
    ExpenseDraft,
    ExpenseRecord,
    KnownCategory,
    LedgerSnapshot,
    PaymentDraft,
    PaymentRecord,
    color_for_category,
)
from debt_tracker.models.summary import (
    BudgetSlice,
    ErrorKind,
    LedgerAggregates,
    MutationOutcome,
)
from debt_tracker.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "CATEGORY_COLORS",
    "DEFAULT_CATEGORY_COLOR",
    "ExpenseDraft",
    "ExpenseRecord",
    "KnownCategory",
    "LedgerSnapshot",
    "PaymentDraft",
    "PaymentRecord",
    "color_for_category",
    # Result models
    "BudgetSlice",
    "ErrorKind",
    "LedgerAggregates",
    "MutationOutcome",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
