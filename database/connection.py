"""Database connection and session management for the scrape cache."""

from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from common.config import config
from common.logger import setup_logger

logger = setup_logger(__name__)

_engine = None
_session_factory = None


def get_engine():
    """
    Return the process-wide engine, creating it on first use.

    Created lazily so that importing the scraper never requires a
    reachable database; the cache is an optional side effect.
    """
    global _engine
    if _engine is None:
        kwargs = {'pool_pre_ping': True, 'echo': False}
        if not config.DATABASE_URL.startswith('sqlite'):
            kwargs.update(pool_size=5, max_overflow=10)
        _engine = create_engine(config.DATABASE_URL, **kwargs)
    return _engine


def get_session_factory():
    """Return the sessionmaker bound to the default engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _session_factory


@contextmanager
def get_session(session_factory=None):
    """
    Provide a transactional scope for database operations.

    Usage:
        with get_session() as session:
            entry = session.get(ScrapeCacheEntry, cache_id)
            ...
    """
    factory = session_factory or get_session_factory()
    session = factory()
    try:
        yield session
        session.commit()
    except Exception as e:
        session.rollback()
        logger.error(f"Database error: {e}")
        raise
    finally:
        session.close()


def check_connection():
    """Test database connection."""
    try:
        with get_engine().connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database connection successful")
        return True
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False
