"""
Configuration Management for Bookstore

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
File locations, the bootstrap account and logging options are
validated once at startup instead of being scattered as constants.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BookstoreSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from BOOKSTORE_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOOKSTORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Storage locations
    data_dir: Path = Field(
        default=Path("."),
        description="Directory holding the record files"
    )
    account_file: str = Field(
        default="accounts.dat",
        description="Account records file name"
    )
    book_file: str = Field(
        default="books.dat",
        description="Book records file name"
    )
    transaction_file: str = Field(
        default="transactions.dat",
        description="Finance ledger records file name"
    )
    log_file: str = Field(
        default="log.dat",
        description="Operation log records file name"
    )

    # Bootstrap account, created on first run if absent
    root_user_id: str = Field(
        default="root",
        min_length=1,
        max_length=30,
        pattern=r"^[A-Za-z0-9_]+$",
        description="Bootstrap account identifier"
    )
    root_password: str = Field(
        default="sjtu",
        min_length=1,
        max_length=30,
        pattern=r"^[A-Za-z0-9_]+$",
        description="Bootstrap account password"
    )
    root_username: str = Field(
        default="root",
        min_length=1,
        max_length=30,
        description="Bootstrap account display name"
    )
    root_privilege: int = Field(
        default=7,
        description="Bootstrap account privilege"
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Level for diagnostic logging on stderr"
    )
    log_json: bool = Field(
        default=True,
        description="Render diagnostic logs as JSON (False = console renderer)"
    )
    operation_log_enabled: bool = Field(
        default=True,
        description="Persist accepted operations to the operation log file"
    )

    @field_validator('root_privilege')
    @classmethod
    def validate_root_privilege(cls, v: int) -> int:
        """The bootstrap account must be able to run every command."""
        if v != 7:
            raise ValueError("Bootstrap account privilege must be 7")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the logging level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def account_path(self) -> Path:
        return self.data_dir / self.account_file

    @property
    def book_path(self) -> Path:
        return self.data_dir / self.book_file

    @property
    def transaction_path(self) -> Path:
        return self.data_dir / self.transaction_file

    @property
    def log_path(self) -> Path:
        return self.data_dir / self.log_file


@lru_cache()
def get_settings() -> BookstoreSettings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return BookstoreSettings()
