"""
Core Ledger Models for the Debt & Expense Tracker

These models define the schemas for everything the ledger stores:
1. The persisted root snapshot (salary, initial debt, two collections)
2. Expense and debt payment records
3. Drafts, the unvalidated candidates submitted by the UI

DESIGN DECISION: Numbers in the snapshot are strict. A persisted salary of
"18000" (string) or true (boolean) is a corrupt file, not something to coerce.
Dates stay lax so the ISO strings of the persisted layout parse.
Infinities and NaN are refused so the snapshot always serializes to plain
JSON numbers.
"""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


# =============================================================================
# CATEGORIES - Open set with a curated palette
# =============================================================================

class KnownCategory(str, Enum):
    """
    Categories offered by the expense form.

    Expenses may use any non-empty label; these are the ones that come
    with a dedicated chart colour.
    """
    FOOD = "Food"
    TRAVEL = "Travel"
    UTILITIES = "Utilities"
    WIFI = "WiFi"
    LAUNDRY = "Laundry"
    OTHERS = "Others"


CATEGORY_COLORS: dict[str, str] = {
    KnownCategory.FOOD.value: "#606c38",
    KnownCategory.TRAVEL.value: "#283618",
    KnownCategory.UTILITIES.value: "#dda15e",
    KnownCategory.WIFI.value: "#bc6c25",
    KnownCategory.LAUNDRY.value: "#a7c957",
    KnownCategory.OTHERS.value: "#8a9a5b",
}

DEFAULT_CATEGORY_COLOR = "#606c38"


def color_for_category(category: str) -> str:
    """Palette colour for a category label, falling back for unknown labels."""
    return CATEGORY_COLORS.get(category, DEFAULT_CATEGORY_COLOR)


# =============================================================================
# RECORDS
# =============================================================================

class ExpenseRecord(BaseModel):
    """
    A single recorded expense.

    Description is stored exactly as entered. Anything rendering it into
    markup must escape it first.
    """
    model_config = ConfigDict(frozen=True)

    id: int = Field(
        ...,
        strict=True,
        description="Identifier, unique within the expenses collection"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Category label"
    )
    amount: float = Field(
        ...,
        gt=0,
        strict=True,
        allow_inf_nan=False,
        description="Amount spent"
    )
    date: dt.date = Field(
        ...,
        description="Day the expense happened"
    )
    description: str = Field(
        default="",
        description="Optional free-text note"
    )


class PaymentRecord(BaseModel):
    """A single payment made against the debt."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(
        ...,
        strict=True,
        description="Identifier, unique within the debt payments collection"
    )
    amount: float = Field(
        ...,
        gt=0,
        strict=True,
        allow_inf_nan=False,
        description="Amount paid"
    )
    date: dt.date = Field(
        ...,
        description="Day the payment was made"
    )


def _ensure_unique_ids(records: list, collection: str) -> None:
    seen: set[int] = set()
    for record in records:
        if record.id in seen:
            raise ValueError(f"Duplicate id {record.id} in {collection}")
        seen.add(record.id)


class LedgerSnapshot(BaseModel):
    """
    The complete persisted ledger.

    Field aliases match the persisted JSON layout (camelCase); Python code
    uses the snake_case names.
    """
    model_config = ConfigDict(populate_by_name=True)

    salary: float = Field(
        ...,
        ge=0,
        strict=True,
        allow_inf_nan=False,
        description="Recurring income baseline"
    )
    initial_debt: float = Field(
        ...,
        ge=0,
        strict=True,
        allow_inf_nan=False,
        alias="initialDebt",
        description="Debt balance before any recorded payment"
    )
    expenses: list[ExpenseRecord] = Field(default_factory=list)
    debt_payments: list[PaymentRecord] = Field(
        default_factory=list,
        alias="debtPayments"
    )

    @model_validator(mode='after')
    def validate_unique_ids(self) -> 'LedgerSnapshot':
        """Ids only need to be unique within their own collection."""
        _ensure_unique_ids(self.expenses, "expenses")
        _ensure_unique_ids(self.debt_payments, "debtPayments")
        return self

    @classmethod
    def default(
        cls,
        salary: float = 18000.0,
        initial_debt: float = 150000.0,
    ) -> 'LedgerSnapshot':
        """A fresh ledger with no recorded expenses or payments."""
        return cls(salary=salary, initial_debt=initial_debt)

    def to_storage_dict(self) -> dict:
        """
        Convert to the persisted JSON layout.

        Dates become YYYY-MM-DD strings; field names use the aliases.
        """
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# DRAFTS - What the UI submits before validation
# =============================================================================

class ExpenseDraft(BaseModel):
    """
    An expense as typed into the form.

    Every field is optional here; missing or malformed values are reported
    by validation, not by the model.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    category: Optional[str] = None
    amount: Optional[float] = None
    date: Optional[dt.date] = None
    description: str = ""


class PaymentDraft(BaseModel):
    """A debt payment as typed into the form."""

    amount: Optional[float] = None
    date: Optional[dt.date] = None
