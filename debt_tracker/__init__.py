"""
Debt & Expense Tracker - Source Package

A personal finance tracker: record a monthly salary, a starting debt,
expenses and debt payments, and see what is spent, what is left and how
much of the debt is paid off.

DESIGN PRINCIPLES:
1. One owner for the ledger (the store), one place for derived numbers
   (the aggregation engine)
2. Invalid input is rejected, never silently corrected
3. Nothing is fatal: bad saved data falls back to defaults, failed saves
   are reported, the app keeps running
4. Every operation is auditable
5. Storage is swappable
"""

__version__ = "1.0.0"
__author__ = "Debt & Expense Tracker Team"
