from __future__ import annotations

from .base import CommonSettings, DEFAULT_SQLITE_URL, env_file_config


class DevSettings(CommonSettings):
    DATABASE_URL: str = DEFAULT_SQLITE_URL
    APP_ENV: str = "dev"
    DEBUG: bool = True

    model_config = env_file_config(".env.dev")
