"""
Preview a property before it is saved.

Geocodes a full address, scrapes its county portal and parks the result in
the scrape cache. The caller gets the result plus a cacheId that can be
claimed once when the property is actually created.
"""

import logging
from typing import Optional

from county_scrapers.common.address_parser import parse_address_for_scraping
from county_scrapers.common.scrape_cache import ScrapeCacheStore, new_cache_id
from county_scrapers.scraper import scrape_property


logger = logging.getLogger(__name__)


def scrape_preview(full_address: str, api_key: str = None, store: ScrapeCacheStore = None, **scrape_kwargs) -> Optional[dict]:
    """
    Geocode, scrape and cache one address.

    Args:
        full_address: Address as entered by the user
        api_key: Google Maps API key (defaults to config)
        store: Cache store (defaults to the configured database)
        **scrape_kwargs: Passed through to scrape_property

    Returns:
        Result dict (see ExtractionResult.to_dict) with a 'cacheId' key,
        or None if the county portal gave no result

    Raises:
        UnsupportedCountyError: If the address is outside supported counties
        GeocodingError: If the address can't be geocoded
    """
    parsed = parse_address_for_scraping(full_address, api_key)
    result = scrape_property(parsed['street_address'], parsed['county'], **scrape_kwargs)
    if result is None:
        return None

    store = store or ScrapeCacheStore()
    cache_id = new_cache_id()
    if store.write(result, cache_id=cache_id) is None:
        # The id is still returned; claiming it later just finds nothing
        logger.warning(f"Preview for {result.address} not cached")

    preview = result.to_dict()
    preview['cacheId'] = cache_id
    return preview


def claim_cached_result(cache_id: str, store: ScrapeCacheStore = None) -> Optional[dict]:
    """
    Take a cached preview for promotion into a saved property.

    Returns the cached fields and removes the entry, or None if it is
    missing or expired.
    """
    store = store or ScrapeCacheStore()
    cached = store.consume(cache_id)
    if cached is None:
        logger.info(f"No live scrape cache entry for {cache_id}")
    return cached
