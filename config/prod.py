from __future__ import annotations

from .base import CommonSettings, env_file_config


class ProdSettings(CommonSettings):
    DATABASE_URL: str | None = None
    APP_ENV: str = "production"
    DEBUG: bool = False

    model_config = env_file_config(".env.production")
