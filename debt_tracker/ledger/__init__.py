"""Ledger store package."""

from debt_tracker.ledger.store import (
    LOAD_FAILED_MESSAGE,
    LOAD_INVALID_MESSAGE,
    SAVE_FAILED_MESSAGE,
    LedgerStore,
)

__all__ = [
    "LOAD_FAILED_MESSAGE",
    "LOAD_INVALID_MESSAGE",
    "SAVE_FAILED_MESSAGE",
    "LedgerStore",
]
