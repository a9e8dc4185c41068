"""Tests for environment-driven configuration."""

import pytest
from pydantic import ValidationError

from debt_tracker.config import (
    AppSettings,
    LedgerSettings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)
from debt_tracker.ledger import LedgerStore
from debt_tracker.services.storage import InMemoryStorage


class TestDefaults:
    """Tests for the out-of-the-box configuration."""

    def test_storage_defaults(self):
        """Test the default backend and key."""
        settings = StorageSettings()
        assert settings.backend == "file"
        assert settings.storage_key == "debtExpenseTracker"
        assert settings.write_retries == 3

    def test_ledger_defaults(self):
        """Test the first-run ledger values."""
        settings = LedgerSettings()
        assert settings.default_salary == 18000
        assert settings.default_initial_debt == 150000
        assert settings.recent_expenses_limit == 3

    def test_all_groups_valid(self):
        """Test that the defaults pass validation."""
        assert validate_all_settings() == {"storage": True, "ledger": True, "app": True}


class TestOverrides:
    """Tests for environment variable overrides."""

    def test_ledger_defaults_from_env(self, monkeypatch):
        """Test that a store picks up overridden defaults."""
        monkeypatch.setenv("TRACKER_LEDGER_DEFAULT_SALARY", "25000")
        monkeypatch.setenv("TRACKER_LEDGER_DEFAULT_INITIAL_DEBT", "0")

        store = LedgerStore(InMemoryStorage())
        snapshot, _ = store.load()
        assert snapshot.salary == 25000
        assert snapshot.initial_debt == 0

    def test_storage_key_from_env(self, monkeypatch):
        """Test that the namespaced key can be changed."""
        monkeypatch.setenv("TRACKER_STORAGE_STORAGE_KEY", "householdLedger")
        assert get_settings().storage.storage_key == "householdLedger"
        assert LedgerStore(InMemoryStorage()).storage_key == "householdLedger"

    def test_storage_key_with_separator_rejected(self, monkeypatch):
        """Test that keys which would escape the data directory are refused."""
        monkeypatch.setenv("TRACKER_STORAGE_STORAGE_KEY", "a/b")
        with pytest.raises(ValidationError):
            StorageSettings()

        results = validate_all_settings()
        assert results["storage"] is False
        assert "storage_error" in results
        assert results["ledger"] is True

    def test_unknown_backend_rejected(self, monkeypatch):
        """Test the backend whitelist."""
        monkeypatch.setenv("TRACKER_STORAGE_BACKEND", "sqlite")
        with pytest.raises(ValidationError):
            StorageSettings()

    def test_negative_default_salary_rejected(self, monkeypatch):
        """Test that default values must be non-negative."""
        monkeypatch.setenv("TRACKER_LEDGER_DEFAULT_SALARY", "-1")
        with pytest.raises(ValidationError):
            LedgerSettings()

    def test_debug_mode_from_env(self, monkeypatch):
        """Test the debug switch and environment name the UI reads."""
        monkeypatch.setenv("DEBUG_MODE", "true")
        monkeypatch.setenv("APP_ENVIRONMENT", "staging")
        app = get_settings().app
        assert app.debug_mode is True
        assert app.app_environment == "staging"


class TestQuickAddPresets:
    """Tests for the quick-add preset parsing."""

    def test_default_presets(self):
        """Test the built-in quick-add buttons."""
        presets = AppSettings().quick_add_list
        assert presets[0] == ("Food", 150.0)
        assert ("WiFi", 1299.0) in presets

    def test_malformed_entries_skipped(self):
        """Test that entries without a usable amount are ignored."""
        settings = AppSettings(quick_add_presets="Food:100, Coffee ,Travel:abc, Pets : 75")
        assert settings.quick_add_list == [("Food", 100.0), ("Pets", 75.0)]
