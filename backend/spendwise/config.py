"""
Application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from typing import Optional


class Settings(BaseSettings):
    """Application settings."""

    # App
    app_name: str = "Spendwise"
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./spendwise.db"

    # Analytics
    top_expenses_limit: int = 3
    trend_months: int = 6
    budget_precision: int = 2

    # Client
    api_base_url: str = "http://localhost:8000/api/v1"
    api_token: Optional[str] = None

    # Dispatcher retry (None = retry rate-limited calls forever)
    retry_backoff_seconds: float = 1.0
    max_retries: Optional[int] = None

    # Pacing, seconds between consecutive sends of the same kind
    pacing_default_interval: float = 0.0
    pacing_list_interval: float = 0.05
    pacing_stats_interval: float = 0.1
    pacing_budget_interval: float = 0.1
    pacing_mutation_interval: float = 0.05

    # Server
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    frontend_url: str = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False
    )


# Global settings instance
settings = Settings()
