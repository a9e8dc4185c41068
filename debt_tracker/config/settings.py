"""
Configuration Management for the Debt & Expense Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

All configuration is centralized here so the defaults the ledger falls
back to (salary, initial debt) and the persistence location can be read
in one place and overridden per environment.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Key-value persistence configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TRACKER_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: str = Field(
        default="file",
        pattern="^(file|memory)$",
        description="Storage backend to use"
    )
    data_dir: str = Field(
        default=".tracker_data",
        description="Directory holding one JSON file per storage key"
    )
    storage_key: str = Field(
        default="debtExpenseTracker",
        min_length=1,
        description="Namespaced key the ledger snapshot is stored under"
    )
    write_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts made for a single write before giving up"
    )

    @field_validator('storage_key')
    @classmethod
    def validate_storage_key(cls, v: str) -> str:
        """Keys become file names, so path separators are not allowed."""
        if "/" in v or "\\" in v:
            raise ValueError(f"Storage key must not contain path separators: {v}")
        return v


class LedgerSettings(BaseSettings):
    """Defaults for a freshly created ledger."""

    model_config = SettingsConfigDict(
        env_prefix="TRACKER_LEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    default_salary: float = Field(
        default=18000.0,
        ge=0.0,
        description="Salary used for a new or cleared ledger"
    )
    default_initial_debt: float = Field(
        default=150000.0,
        ge=0.0,
        description="Initial debt used for a new or cleared ledger"
    )
    recent_expenses_limit: int = Field(
        default=3,
        ge=1,
        le=50,
        description="How many expenses the 'recent' view shows"
    )
    default_payment_amount: float = Field(
        default=2500.0,
        gt=0.0,
        description="Amount the payment form is pre-filled with"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Presentation
    currency_symbol: str = Field(
        default="₱",
        max_length=5,
        description="Symbol shown in front of amounts"
    )
    export_filename: str = Field(
        default="debt-expense-data.json",
        description="Suggested file name for the JSON export"
    )
    quick_add_presets: str = Field(
        default="Food:150,Travel:50,Utilities:500,WiFi:1299,Laundry:200",
        description="Comma-separated Category:amount pairs for quick-add buttons"
    )

    @property
    def quick_add_list(self) -> list[tuple[str, float]]:
        """Get quick-add presets as (category, amount) pairs."""
        presets = []
        for item in self.quick_add_presets.split(","):
            if ":" not in item:
                continue
            category, amount = item.rsplit(":", 1)
            try:
                presets.append((category.strip(), float(amount)))
            except ValueError:
                continue
        return presets


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    "<name>_error" entry for every group that failed to load.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "ledger", "app"):
        try:
            _ = getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
