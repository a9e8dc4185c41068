"""
Record Validation

Pure predicates that decide whether a draft may enter the ledger.

Each validator runs its checks in a fixed order and returns the message of
the FIRST failing check, or None when the draft is acceptable:

1. Required fields present (a zero or non-finite amount counts as missing)
2. Amount greater than zero
3. Date not after today

"Today" is the local calendar date. Comparison is at day granularity, so
anything dated today is accepted regardless of the time of day.

IMPORTANT: Validation never fixes input. It reports, the caller decides.
"""

import math
from datetime import date
from numbers import Real
from typing import Any, Optional

from debt_tracker.models.ledger import ExpenseDraft, PaymentDraft


MISSING_FIELDS = "All required fields must be filled"
NON_POSITIVE_AMOUNT = "Amount must be greater than 0"
FUTURE_EXPENSE = "Expense date cannot be in the future"
FUTURE_PAYMENT = "Payment date cannot be in the future"
INVALID_SALARY = "Please enter a valid salary amount"
INVALID_DEBT = "Please enter a valid debt amount"


def _amount_missing(amount: Optional[float]) -> bool:
    return amount is None or not math.isfinite(amount) or amount == 0


def _is_future(value: date, today: Optional[date]) -> bool:
    return value > (today or date.today())


def validate_expense(
    draft: ExpenseDraft,
    today: Optional[date] = None,
) -> Optional[str]:
    """
    Check an expense draft.

    Args:
        draft: The expense as submitted by the form
        today: Reference date (defaults to the local date)

    Returns:
        A human-readable reason, or None if the expense is valid
    """
    if not draft.category or _amount_missing(draft.amount) or draft.date is None:
        return MISSING_FIELDS

    if draft.amount <= 0:
        return NON_POSITIVE_AMOUNT

    if _is_future(draft.date, today):
        return FUTURE_EXPENSE

    return None


def validate_payment(
    draft: PaymentDraft,
    today: Optional[date] = None,
) -> Optional[str]:
    """Check a debt payment draft. Same rules as expenses, minus the category."""
    if _amount_missing(draft.amount) or draft.date is None:
        return MISSING_FIELDS

    if draft.amount <= 0:
        return NON_POSITIVE_AMOUNT

    if _is_future(draft.date, today):
        return FUTURE_PAYMENT

    return None


def parse_amount(value: Any) -> Optional[float]:
    """
    Interpret user input as a finite number.

    Accepts real numbers and numeric strings. Booleans, NaN and infinities
    are not amounts.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    elif isinstance(value, Real):
        number = float(value)
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def validate_salary(value: Any) -> Optional[str]:
    """A salary must be a finite number above zero."""
    number = parse_amount(value)
    if number is None or number <= 0:
        return INVALID_SALARY
    return None


def validate_initial_debt(value: Any) -> Optional[str]:
    """An initial debt must be a finite number, zero allowed."""
    number = parse_amount(value)
    if number is None or number < 0:
        return INVALID_DEBT
    return None
