from __future__ import annotations

from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

ROOT = Path(__file__).resolve().parents[1]

DEFAULT_SQLITE_URL = f"sqlite+aiosqlite:///{ROOT / 'inventario.db'}"


def env_file_config(name: str) -> SettingsConfigDict:
    env_file = ROOT / "env" / name
    return SettingsConfigDict(
        env_file=str(env_file) if env_file.exists() else None,
        env_file_encoding="utf-8",
        extra="ignore",
    )


class CommonSettings(BaseSettings):
    """Fields shared by every mode. Subclasses pick the env file and defaults."""
    APP_ENV: str = "local"
    SECRET_KEY: str | None = None
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    ACCESS_TOKEN_EXPIRE_HOURS: int = 24
    BCRYPT_ROUNDS: int = 12

    # Percentage of poor+broken units above which a line item is reported as critical
    CRITICAL_THRESHOLD: float = 30.0
