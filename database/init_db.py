"""Initialize the scrape cache database.

Usage:
    python -m database.init_db                  # create tables
    python -m database.init_db --purge-expired  # also delete expired cache rows
"""

import argparse
import sys

from sqlalchemy import inspect

from common.logger import setup_logger
from database.connection import get_engine, check_connection
from database.models import Base

logger = setup_logger(__name__)

EXPECTED_TABLES = ['scrape_cache']


def create_tables(engine=None):
    """Create every mapped table that doesn't exist yet."""
    engine = engine or get_engine()
    try:
        Base.metadata.create_all(engine)
        logger.info("Database schema created successfully")
        return True
    except Exception as e:
        logger.error(f"Error creating schema: {e}")
        return False


def verify_tables(engine=None):
    """Verify that all expected tables exist."""
    engine = engine or get_engine()
    try:
        existing_tables = set(inspect(engine).get_table_names())
        missing_tables = set(EXPECTED_TABLES) - existing_tables

        if missing_tables:
            logger.warning(f"Missing tables: {missing_tables}")
            return False

        logger.info(f"All tables verified: {', '.join(EXPECTED_TABLES)}")
        return True

    except Exception as e:
        logger.error(f"Error verifying tables: {e}")
        return False


def init_database(purge_expired: bool = False):
    """Initialize the database and verify."""
    logger.info("Starting database initialization...")

    if not check_connection():
        logger.error("Cannot connect to database. Check DATABASE_URL in .env")
        return False

    if not create_tables():
        logger.error("Failed to create database schema")
        return False

    if not verify_tables():
        logger.error("Database verification failed")
        return False

    if purge_expired:
        from county_scrapers.common.scrape_cache import ScrapeCacheStore
        ScrapeCacheStore().purge_expired()

    logger.info("Database initialized successfully")
    return True


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Initialize the scrape cache database')
    parser.add_argument('--purge-expired', action='store_true', help='Delete expired scrape cache rows')
    args = parser.parse_args()

    success = init_database(purge_expired=args.purge_expired)
    sys.exit(0 if success else 1)
