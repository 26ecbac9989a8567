"""
Centralized configuration via Pydantic BaseSettings + python-dotenv.
All environment variables are loaded from .env (or system env) and validated.
"""

from __future__ import annotations

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application-wide settings — never hard-code values; use .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "AgentInsights"
    app_version: str = "1.0.0"
    debug: bool = True
    log_level: str = "INFO"

    # --- API Server ---
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # --- Record Source ---
    database_url: str = "sqlite+aiosqlite:///./agentinsights.db"
    max_records: int = 10_000

    # --- Reports ---
    report_window_days: int = 7
    report_page_size: int = 10
    workload_top_n: int = 8
    export_filename: str = "agents-daily-report.csv"

    # --- Analytics thresholds ---
    thresholds_file: str = "analytics_thresholds.yaml"

    @property
    def thresholds_path(self) -> Path:
        return Path(__file__).resolve().parent / self.thresholds_file


def get_settings() -> Settings:
    """Factory — allows easy overriding in tests."""
    return Settings()
