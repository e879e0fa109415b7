# reset_db.py
"""
Database reset utility - drops all tables and recreates them fresh.

Usage:
    python reset_db.py           # Reset only
    python reset_db.py --seed    # Reset + seed reference data
"""
import argparse
import logging

from sqlalchemy import create_engine

from config import settings
from config.database import to_sync_url
from core.log_config import configure_logging
from db_base import Base

# Import all models to register them with Base.metadata
import db_models  # noqa: F401

logger = logging.getLogger("reset_db")


def reset_database() -> None:
    """Drop all tables and recreate them."""
    sync_url = to_sync_url(settings.DATABASE_URL)
    engine = create_engine(sync_url)

    logger.info("Resetting %s", sync_url.split("@")[1] if "@" in sync_url else sync_url)
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    logger.info("Created tables: %s", ", ".join(sorted(Base.metadata.tables)))
    engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Reset the inventory database")
    parser.add_argument("--seed", action="store_true", help="Seed reference data after reset")
    args = parser.parse_args()

    configure_logging(settings.LOG_LEVEL)
    reset_database()

    if args.seed:
        import seed_database
        seed_database.main()


if __name__ == "__main__":
    main()
