from __future__ import annotations

from .base import CommonSettings, DEFAULT_SQLITE_URL, env_file_config


class LocalSettings(CommonSettings):
    DATABASE_URL: str = DEFAULT_SQLITE_URL
    APP_ENV: str = "local"
    DEBUG: bool = True
    LOG_LEVEL: str = "DEBUG"

    model_config = env_file_config(".env.local")
