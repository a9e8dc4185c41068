"""
Aggregation Engine

DESIGN DECISION: Every displayed number is DERIVED, never stored.
The store keeps raw records only; these functions recompute totals,
balances and breakdowns from a snapshot each time they are asked.

GUARANTEES:
- Pure: no function mutates its input or keeps state between calls
- Clamped balances: remaining debt and remaining budget never go below zero
- Order-independent sums (math.fsum is exactly rounded)
- Stable date ordering: records sharing a date keep their relative order

Work is linear in the number of records, so nothing is cached.
"""

import math
from typing import Iterable, Sequence, TypeVar

from debt_tracker.models.ledger import (
    ExpenseRecord,
    LedgerSnapshot,
    PaymentRecord,
    color_for_category,
)
from debt_tracker.models.summary import BudgetSlice, LedgerAggregates


DEFAULT_RECENT_LIMIT = 3

EXPENSES_LABEL = "Expenses"
DEBT_PAYMENT_LABEL = "Debt Payment"
REMAINING_LABEL = "Remaining"

DISTRIBUTION_COLORS = {
    EXPENSES_LABEL: "#606c38",
    DEBT_PAYMENT_LABEL: "#dda15e",
    REMAINING_LABEL: "#a7c957",
}

R = TypeVar("R", ExpenseRecord, PaymentRecord)


# =============================================================================
# TOTALS AND BALANCES
# =============================================================================

def total_expenses(snapshot: LedgerSnapshot) -> float:
    return math.fsum(expense.amount for expense in snapshot.expenses)


def total_debt_paid(snapshot: LedgerSnapshot) -> float:
    return math.fsum(payment.amount for payment in snapshot.debt_payments)


def remaining_debt(snapshot: LedgerSnapshot) -> float:
    """Initial debt minus payments, floored at zero when overpaid."""
    return max(0.0, snapshot.initial_debt - total_debt_paid(snapshot))


def remaining_budget(snapshot: LedgerSnapshot) -> float:
    """
    Salary left after expenses AND debt payments, floored at zero.

    Debt payments draw from the same pool as expenses.
    """
    return max(
        0.0,
        snapshot.salary - total_expenses(snapshot) - total_debt_paid(snapshot),
    )


def debt_paid_percentage(snapshot: LedgerSnapshot) -> float:
    """
    Share of the initial debt repaid, in percent.

    Not capped: overpaying reports more than 100. Zero when there is no debt.
    """
    if snapshot.initial_debt <= 0:
        return 0.0
    return total_debt_paid(snapshot) / snapshot.initial_debt * 100


# =============================================================================
# BREAKDOWNS
# =============================================================================

def category_breakdown(snapshot: LedgerSnapshot) -> dict[str, float]:
    """
    Total spent per category.

    Keys appear in the order each category is first seen.
    """
    amounts: dict[str, list[float]] = {}
    for expense in snapshot.expenses:
        amounts.setdefault(expense.category, []).append(expense.amount)
    return {category: math.fsum(values) for category, values in amounts.items()}


def budget_distribution(snapshot: LedgerSnapshot) -> list[BudgetSlice]:
    """
    How the salary splits into expenses, debt payment and what is left.

    Always in that order; zero-valued slices are dropped so a pie chart
    never draws an empty wedge.
    """
    slices = [
        (EXPENSES_LABEL, total_expenses(snapshot)),
        (DEBT_PAYMENT_LABEL, total_debt_paid(snapshot)),
        (REMAINING_LABEL, remaining_budget(snapshot)),
    ]
    return [
        BudgetSlice(label=label, value=value, color=DISTRIBUTION_COLORS[label])
        for label, value in slices
        if value > 0
    ]


# =============================================================================
# ORDERING
# =============================================================================

def sorted_by_date_descending(records: Iterable[R]) -> list[R]:
    """Newest first. sorted() is stable, so same-day records keep their order."""
    return sorted(records, key=lambda record: record.date, reverse=True)


def recent_expenses(
    snapshot: LedgerSnapshot,
    n: int = DEFAULT_RECENT_LIMIT,
) -> list[ExpenseRecord]:
    return sorted_by_date_descending(snapshot.expenses)[:max(0, n)]


# =============================================================================
# BUNDLE
# =============================================================================

def _colors_for(categories: Sequence[str]) -> dict[str, str]:
    return {category: color_for_category(category) for category in categories}


def get_aggregates(
    snapshot: LedgerSnapshot,
    recent_limit: int = DEFAULT_RECENT_LIMIT,
) -> LedgerAggregates:
    """
    Compute every aggregate the dashboard shows.

    Args:
        snapshot: The ledger to summarise (left untouched)
        recent_limit: How many expenses the "recent" list holds

    Returns:
        An immutable LedgerAggregates
    """
    breakdown = category_breakdown(snapshot)
    expenses_sorted = sorted_by_date_descending(snapshot.expenses)

    return LedgerAggregates(
        salary=snapshot.salary,
        initial_debt=snapshot.initial_debt,
        total_expenses=total_expenses(snapshot),
        total_debt_paid=total_debt_paid(snapshot),
        remaining_debt=remaining_debt(snapshot),
        remaining_budget=remaining_budget(snapshot),
        debt_paid_percentage=debt_paid_percentage(snapshot),
        category_breakdown=breakdown,
        category_colors=_colors_for(list(breakdown)),
        budget_distribution=tuple(budget_distribution(snapshot)),
        expenses_by_date=tuple(expenses_sorted),
        payments_by_date=tuple(sorted_by_date_descending(snapshot.debt_payments)),
        recent_expenses=tuple(expenses_sorted[:max(0, recent_limit)]),
    )
