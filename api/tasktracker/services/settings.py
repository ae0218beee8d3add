from __future__ import annotations

import os
from dataclasses import dataclass


def _env_str(name: str, default: str) -> str:
    val = os.getenv(name)
    if val is None or val.strip() == "":
        return default
    return val.strip()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return int(default)
    return int(raw)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y"}


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./tasktracker.db"
    timezone: str = "UTC"

    environment: str = "development"
    log_level: str = "INFO"

    db_echo: bool = False
    create_tables: bool = True

    host: str = "0.0.0.0"
    port: int = 8000

    version: str = "0.1.0"


def get_settings() -> Settings:
    return Settings(
        database_url=_env_str("TASKTRACKER_DATABASE_URL", "sqlite:///./tasktracker.db"),
        timezone=_env_str("TASKTRACKER_TIMEZONE", "UTC"),
        environment=_env_str("TASKTRACKER_ENVIRONMENT", "development"),
        log_level=_env_str("TASKTRACKER_LOG_LEVEL", "INFO"),
        db_echo=_env_bool("TASKTRACKER_DB_ECHO", False),
        create_tables=_env_bool("TASKTRACKER_CREATE_TABLES", True),
        host=_env_str("TASKTRACKER_HOST", "0.0.0.0"),
        port=_env_int("TASKTRACKER_PORT", 8000),
    )
