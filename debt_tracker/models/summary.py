"""
Result Models for the Debt & Expense Tracker

These are the immutable structures handed to the rendering layer:
- MutationOutcome: what happened to a write (applied? saved? why not?)
- LedgerAggregates: every derived value the dashboard displays
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from debt_tracker.models.ledger import ExpenseRecord, PaymentRecord


class ErrorKind(str, Enum):
    """Kinds of non-fatal failure an operation can report."""
    VALIDATION = "validation"      # Record or value rejected, nothing changed
    STORAGE = "storage"            # Change applied in memory, save failed
    CORRUPT_DATA = "corrupt_data"  # Persisted blob unusable, defaults in use


class MutationOutcome(BaseModel):
    """
    Result of a single write operation.

    `applied` and `saved` are independent: a storage failure leaves the
    change applied in memory but not saved.
    """
    model_config = ConfigDict(frozen=True)

    applied: bool = Field(
        ...,
        description="Did the in-memory ledger change (or was the no-op accepted)?"
    )
    saved: bool = Field(
        ...,
        description="Was the ledger written to storage afterwards?"
    )
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = Field(
        default=None,
        description="Human-readable message for a notification"
    )
    record_id: Optional[int] = Field(
        default=None,
        description="Id assigned to a newly added record"
    )

    @property
    def success(self) -> bool:
        """Applied and persisted."""
        return self.applied and self.saved

    @classmethod
    def rejected(cls, message: str) -> 'MutationOutcome':
        return cls(
            applied=False,
            saved=False,
            error_kind=ErrorKind.VALIDATION,
            message=message,
        )


class BudgetSlice(BaseModel):
    """One labelled share of the salary, for proportional charts."""
    model_config = ConfigDict(frozen=True)

    label: str
    value: float = Field(ge=0)
    color: str


class LedgerAggregates(BaseModel):
    """
    Everything derived from one snapshot.

    Built fresh on every request; holds no reference back to the store.
    """
    model_config = ConfigDict(frozen=True)

    salary: float
    initial_debt: float

    total_expenses: float
    total_debt_paid: float
    remaining_debt: float = Field(ge=0)
    remaining_budget: float = Field(ge=0)
    debt_paid_percentage: float = Field(
        ge=0,
        description="Share of the initial debt repaid; may exceed 100"
    )

    category_breakdown: dict[str, float] = Field(default_factory=dict)
    category_colors: dict[str, str] = Field(default_factory=dict)
    budget_distribution: tuple[BudgetSlice, ...] = ()

    expenses_by_date: tuple[ExpenseRecord, ...] = ()
    payments_by_date: tuple[PaymentRecord, ...] = ()
    recent_expenses: tuple[ExpenseRecord, ...] = ()

    @property
    def has_expenses(self) -> bool:
        return bool(self.expenses_by_date)

    @property
    def has_payments(self) -> bool:
        return bool(self.payments_by_date)
