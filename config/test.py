from __future__ import annotations

from .base import CommonSettings, ROOT, env_file_config


class TestSettings(CommonSettings):
    DATABASE_URL: str = f"sqlite+aiosqlite:///{ROOT / 'test_inventario.db'}"
    APP_ENV: str = "test"
    SECRET_KEY: str | None = "test-secret-key"
    DEBUG: bool = True
    LOG_LEVEL: str = "WARNING"

    # Cheap hashes keep the suite fast
    BCRYPT_ROUNDS: int = 4

    model_config = env_file_config(".env.test")
