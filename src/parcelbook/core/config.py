"""Application configuration loaded from environment and config files."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class StorageConfig(BaseSettings):
    """Project persistence configuration."""

    model_config = {"env_prefix": "PARCELBOOK_STORAGE_"}

    backend: str = "memory"
    database_url: str = "sqlite+aiosqlite:///data/parcelbook.db"
    echo: bool = False


class AutosaveConfig(BaseSettings):
    """Debounced auto-save configuration."""

    model_config = {"env_prefix": "PARCELBOOK_AUTOSAVE_"}

    debounce_ms: int = 1500


class LedgerConfig(BaseSettings):
    """Ledger catalog configuration."""

    model_config = {"env_prefix": "PARCELBOOK_LEDGER_"}

    catalog_path: str | None = None


class ReportConfig(BaseSettings):
    """Report export configuration."""

    model_config = {"env_prefix": "PARCELBOOK_REPORT_"}

    # A Unicode TTF font; without it PDF text is limited to Latin-1.
    font_path: str | None = None
    title: str = "Portfolio summary"


class Settings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "PARCELBOOK_"}

    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    storage: StorageConfig = Field(default_factory=StorageConfig)
    autosave: AutosaveConfig = Field(default_factory=AutosaveConfig)
    ledger: LedgerConfig = Field(default_factory=LedgerConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
