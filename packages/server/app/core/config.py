"""
Application configuration loaded from environment variables.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Task board server configuration."""

    model_config = SettingsConfigDict(env_prefix="KANBAN_", env_file=".env", extra="ignore")

    # Database
    database_url: str = "sqlite+aiosqlite:///./kanban.db"
    create_tables_on_startup: bool = True  # development only; use migrations in production

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Logging
    log_level: str = "info"
    log_format: Literal["json", "text"] = "text"


@lru_cache
def get_settings() -> Settings:
    return Settings()
