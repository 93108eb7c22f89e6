"""
County adapter registry.

Maps a normalized county key to the adapter describing its qPublic search
page and tax bill strategy. The supported counties are exactly the keys of
COUNTY_ADAPTERS; adding a county means adding a subpackage with its
config and one row here.
"""

import logging

from county_scrapers.common.errors import UnsupportedCountyError
from county_scrapers.common.models import CountyAdapterConfig
from county_scrapers.cobb import ADAPTER as COBB
from county_scrapers.fulton import ADAPTER as FULTON
from county_scrapers.gwinnett import ADAPTER as GWINNETT

logger = logging.getLogger(__name__)

COUNTY_ADAPTERS = {
    adapter.county_key: adapter
    for adapter in (FULTON, GWINNETT, COBB)
}

SUPPORTED_COUNTIES = tuple(COUNTY_ADAPTERS)


def normalize_county_key(county: str) -> str:
    """'Gwinnett County ' -> 'gwinnett'."""
    if not county:
        return ''
    key = county.strip().lower()
    if key.endswith(' county'):
        key = key[:-len(' county')].strip()
    return key


def resolve_county(county: str) -> CountyAdapterConfig:
    """
    Look up the adapter for a county.

    Args:
        county: County key, e.g. 'fulton' (case-insensitive)

    Returns:
        CountyAdapterConfig for the county

    Raises:
        UnsupportedCountyError: If the county has no adapter
    """
    key = normalize_county_key(county)
    adapter = COUNTY_ADAPTERS.get(key)
    if adapter is None:
        logger.warning(f"Unsupported county: {county!r}")
        raise UnsupportedCountyError(county, SUPPORTED_COUNTIES)
    return adapter


def is_supported(county: str) -> bool:
    return normalize_county_key(county) in COUNTY_ADAPTERS
