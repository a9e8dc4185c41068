"""Validation package."""

from debt_tracker.validation.validator import (
    FUTURE_EXPENSE,
    FUTURE_PAYMENT,
    INVALID_DEBT,
    INVALID_SALARY,
    MISSING_FIELDS,
    NON_POSITIVE_AMOUNT,
    parse_amount,
    validate_expense,
    validate_initial_debt,
    validate_payment,
    validate_salary,
)

__all__ = [
    "FUTURE_EXPENSE",
    "FUTURE_PAYMENT",
    "INVALID_DEBT",
    "INVALID_SALARY",
    "MISSING_FIELDS",
    "NON_POSITIVE_AMOUNT",
    "parse_amount",
    "validate_expense",
    "validate_initial_debt",
    "validate_payment",
    "validate_salary",
]
