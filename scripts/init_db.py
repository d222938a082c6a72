#!/usr/bin/env python3
"""
Database initialization script for the open hours backend.

This script handles:
- Checking the database connection
- Running Alembic migrations
- Optional seeding of a shop with the default week (09:00-17:00 every day)

Usage:
    python scripts/init_db.py [--seed-shop SHOP] [--check-only]
"""

import sys
import argparse
import logging
import subprocess
from pathlib import Path

# add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.core.log import configure_logging
from app.db.session import engine, session_scope
from app.services.business.hours import DayWindow, Weekday
from app.services.store.open_hours import OpenHoursStore

configure_logging()
logger = logging.getLogger(__name__)

DEFAULT_OPEN_TIME = "09:00"
DEFAULT_CLOSE_TIME = "17:00"


def check_database_connection():
    """check if db connection is working."""
    try:
        logger.info("Testing database connection...")

        with engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()

        logger.info("Database connection successful")
        return True

    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {e}")
        return False


def run_migrations():
    """run Alembic migrations to create/update schema."""
    try:
        logger.info("Running Alembic migrations...")
        result = subprocess.run(
            [sys.executable, "-m", "alembic", "upgrade", "head"],
            cwd=project_root,
            capture_output=True,
            text=True,
            check=True
        )
        logger.info("Migrations completed successfully")
        logger.debug(f"Migration output: {result.stdout}")
        return True

    except subprocess.CalledProcessError as e:
        logger.error(f"Error running migrations: {e}")
        logger.error(f"Migration error output: {e.stderr}")
        return False


def seed_shop(shop_id: str, open_time: str = DEFAULT_OPEN_TIME, close_time: str = DEFAULT_CLOSE_TIME):
    """give a shop the same window on every day of the week."""
    try:
        with session_scope() as db:
            store = OpenHoursStore(db)
            for day in Weekday:
                store.upsert(shop_id, day, DayWindow(open_time=open_time, close_time=close_time))
        logger.info(f"Seeded {shop_id}: {open_time}-{close_time} for all 7 days")
        return True

    except SQLAlchemyError as e:
        logger.error(f"Error seeding open hours for {shop_id}: {e}")
        return False


def main():
    parser = argparse.ArgumentParser(description="Initialize open hours database")
    parser.add_argument(
        "--seed-shop",
        metavar="SHOP",
        help="Seed default open hours (09:00-17:00, every day) for this shop"
    )
    parser.add_argument(
        "--check-only",
        action="store_true",
        help="Only check database connection, don't run migrations"
    )

    args = parser.parse_args()

    logger.info("Starting database initialization...")

    if not check_database_connection():
        logger.error("Database connection failed")
        return False

    if args.check_only:
        logger.info("Database check completed successfully")
        return True

    if not run_migrations():
        logger.error("Migration failed")
        return False

    if args.seed_shop and not seed_shop(args.seed_shop):
        logger.error("Data seeding failed")
        return False

    logger.info("Database initialization completed successfully!")
    return True


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
