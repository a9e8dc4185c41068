"""Aggregation engine package."""

from debt_tracker.aggregation.engine import (
    budget_distribution,
    category_breakdown,
    debt_paid_percentage,
    get_aggregates,
    recent_expenses,
    remaining_budget,
    remaining_debt,
    sorted_by_date_descending,
    total_debt_paid,
    total_expenses,
)

__all__ = [
    "budget_distribution",
    "category_breakdown",
    "debt_paid_percentage",
    "get_aggregates",
    "recent_expenses",
    "remaining_budget",
    "remaining_debt",
    "sorted_by_date_descending",
    "total_debt_paid",
    "total_expenses",
]
