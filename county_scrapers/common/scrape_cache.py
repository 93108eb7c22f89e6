"""
Short-lived cache of scrape results (scrape_cache table).

A preview scrape is written here so the property can later be created
without scraping again. Entries live 24 hours by default. A row whose
expires_at has passed is treated as absent even if it hasn't been purged.

The cache is optional: every database failure is logged and swallowed so
it can never change the scrape result handed back to the caller.
"""

import logging
import secrets
import time
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from common.config import config
from database.connection import get_session
from database.models import ScrapeCacheEntry
from county_scrapers.common.models import ExtractionResult


logger = logging.getLogger(__name__)


def new_cache_id() -> str:
    """cache_<epoch-ms>_<random>."""
    return f"cache_{int(time.time() * 1000)}_{secrets.token_hex(5)}"


def entry_to_dict(entry: ScrapeCacheEntry) -> dict:
    """Row -> plain dict. Bathrooms come back from DECIMAL as a float."""
    bathrooms = entry.bathrooms
    if isinstance(bathrooms, Decimal):
        bathrooms = float(bathrooms)
    return {
        'id': entry.id,
        'address': entry.address,
        'county': entry.county,
        'bedrooms': entry.bedrooms,
        'bathrooms': bathrooms,
        'sqft': entry.sqft,
        'homestead_exemption': entry.homestead,
        'parcel_number': entry.parcel_number,
        'qpublic_url': entry.qpublic_url,
        'assessment_pdf_url': entry.assessment_pdf_url,
        'property_tax': entry.property_tax,
        'tax_record_url': entry.tax_record_url,
        'created_at': entry.created_at,
        'expires_at': entry.expires_at,
    }


class ScrapeCacheStore:
    """Insert / read / consume / purge for scrape_cache."""

    def __init__(self, session_factory=None, ttl: timedelta = None):
        self.session_factory = session_factory
        self.ttl = ttl or timedelta(hours=config.SCRAPE_CACHE_TTL_HOURS)

    def write(self, result: ExtractionResult, cache_id: str = None, now: datetime = None) -> Optional[str]:
        """
        Cache a scrape result.

        Returns:
            The cache id, or None if the write failed
        """
        cache_id = cache_id or new_cache_id()
        now = now or datetime.now()

        entry = ScrapeCacheEntry(
            id=cache_id,
            address=result.address,
            county=result.county,
            bedrooms=result.bedrooms,
            bathrooms=result.bathrooms,
            sqft=result.sqft,
            homestead=result.homestead_exemption,
            parcel_number=result.parcel_number,
            qpublic_url=result.qpublic_url,
            assessment_pdf_url=result.assessment_pdf_url,
            property_tax=result.property_tax,
            tax_record_url=result.tax_record_url,
            created_at=now,
            expires_at=now + self.ttl,
        )

        try:
            with get_session(self.session_factory) as session:
                session.add(entry)
        except SQLAlchemyError as e:
            logger.warning(f"Scrape cache write failed for {result.address}: {e}")
            return None

        logger.debug(f"Cached scrape result {cache_id} for {result.address}")
        return cache_id

    def read(self, cache_id: str, now: datetime = None) -> Optional[dict]:
        """Cached result for ``cache_id``; None if missing, expired or unreadable."""
        if not cache_id:
            return None
        now = now or datetime.now()

        try:
            with get_session(self.session_factory) as session:
                entry = session.execute(
                    select(ScrapeCacheEntry).where(
                        ScrapeCacheEntry.id == cache_id,
                        ScrapeCacheEntry.expires_at > now,
                    )
                ).scalar_one_or_none()
                return entry_to_dict(entry) if entry else None
        except SQLAlchemyError as e:
            logger.warning(f"Scrape cache read failed for {cache_id}: {e}")
            return None

    def consume(self, cache_id: str, now: datetime = None) -> Optional[dict]:
        """Read a live entry and delete it, so it can be promoted only once."""
        cached = self.read(cache_id, now=now)
        if cached is None:
            return None

        try:
            with get_session(self.session_factory) as session:
                deleted = session.execute(
                    delete(ScrapeCacheEntry).where(ScrapeCacheEntry.id == cache_id)
                ).rowcount
        except SQLAlchemyError as e:
            logger.warning(f"Scrape cache delete failed for {cache_id}: {e}")
            return cached

        if not deleted:
            # Another caller consumed it between our read and delete
            logger.info(f"Scrape cache entry {cache_id} already consumed")
            return None
        return cached

    def purge_expired(self, now: datetime = None) -> int:
        """Delete expired rows. Returns the number removed."""
        now = now or datetime.now()
        try:
            with get_session(self.session_factory) as session:
                removed = session.execute(
                    delete(ScrapeCacheEntry).where(ScrapeCacheEntry.expires_at <= now)
                ).rowcount
        except SQLAlchemyError as e:
            logger.warning(f"Scrape cache purge failed: {e}")
            return 0

        logger.info(f"Purged {removed} expired scrape cache entries")
        return removed
