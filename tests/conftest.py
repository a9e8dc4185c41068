"""Shared fixtures for the tracker tests."""

import itertools
from datetime import date

import pytest

from debt_tracker.config import get_settings
from debt_tracker.ledger import LedgerStore
from debt_tracker.models.ledger import (
    ExpenseRecord,
    LedgerSnapshot,
    PaymentRecord,
)
from debt_tracker.services.storage import InMemoryStorage, KeyValueStorage, StorageError


TODAY = date(2024, 6, 15)


class FailingStorage(KeyValueStorage):
    """Backend whose writes always fail, like a full browser storage."""

    def __init__(self, initial: dict[str, str] | None = None, fail_reads: bool = False):
        self._items = dict(initial or {})
        self._fail_reads = fail_reads
        self.write_attempts = 0

    def get_item(self, key):
        if self._fail_reads:
            raise StorageError("medium unavailable")
        return self._items.get(key)

    def set_item(self, key, value):
        self.write_attempts += 1
        raise StorageError("quota exceeded")

    def remove_item(self, key):
        raise StorageError("medium unavailable")


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached process-wide; start every test from a clean cache."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def id_clock():
    counter = itertools.count(1_718_000_000_000)
    return lambda: next(counter)


@pytest.fixture
def store(storage, id_clock) -> LedgerStore:
    return LedgerStore(
        storage,
        storage_key="debtExpenseTracker",
        default_salary=18000.0,
        default_initial_debt=150000.0,
        today=lambda: TODAY,
        id_clock=id_clock,
    )


@pytest.fixture
def scenario_snapshot() -> LedgerSnapshot:
    """18000 salary, 150000 debt, one 500 expense, one 2500 payment."""
    return LedgerSnapshot(
        salary=18000,
        initial_debt=150000,
        expenses=[
            ExpenseRecord(id=1, category="Food", amount=500, date=TODAY),
        ],
        debt_payments=[
            PaymentRecord(id=1, amount=2500, date=TODAY),
        ],
    )
