"""Address normalization for county searches.

Uses the Google Maps Geocoding API to:
1. Detect which county an address is in
2. Build a clean street address for the qPublic search box
"""

import logging
import re
from typing import Optional

import requests

from common.config import config
from county_scrapers.common.errors import GeocodingError, UnsupportedCountyError
from county_scrapers.router import SUPPORTED_COUNTIES, is_supported, normalize_county_key


logger = logging.getLogger(__name__)

GEOCODE_URL = 'https://maps.googleapis.com/maps/api/geocode/json'
REQUEST_TIMEOUT = 15

# qPublic searches fail when a trailing direction is included
# ("2517 Weycroft Cir NE" must be typed as "2517 Weycroft Cir")
CARDINAL_SUFFIX_PATTERN = re.compile(r'\s+(N|S|E|W|NE|NW|SE|SW)$', re.IGNORECASE)


def _component(components: list, component_type: str, name: str = 'long_name') -> Optional[str]:
    for component in components:
        if component_type in component.get('types', []):
            return component.get(name)
    return None


def strip_cardinal_suffix(street_address: str) -> str:
    """Remove a trailing N/S/E/W/NE/NW/SE/SW from a street address."""
    return CARDINAL_SUFFIX_PATTERN.sub('', street_address.strip())


def build_street_address(components: list) -> str:
    """
    Street number plus abbreviated route, without trailing direction.

    The route's short_name is used so "Weycroft Circle Northeast" comes
    back as "Weycroft Cir NE".
    """
    street_number = _component(components, 'street_number') or ''
    route = _component(components, 'route', 'short_name') or ''
    return strip_cardinal_suffix(f"{street_number} {route}")


def extract_county(components: list) -> Optional[str]:
    """'Gwinnett County' -> 'gwinnett'."""
    county = _component(components, 'administrative_area_level_2')
    if not county:
        return None
    return normalize_county_key(county)


def parse_address(full_address: str, api_key: str = None) -> dict:
    """
    Geocode a full address.

    Args:
        full_address: Address like "2517 Weycroft Cir NE, Dacula, GA 30019, USA"
        api_key: Google Maps API key (defaults to config.GOOGLE_MAPS_API_KEY)

    Returns:
        {
            'street_address': '2517 Weycroft Cir',
            'county': 'gwinnett' or None,
            'is_supported': True,
            'raw': first geocoding result,
        }

    Raises:
        ValueError: If no API key is available
        GeocodingError: If the API call fails or finds nothing
    """
    api_key = api_key or config.GOOGLE_MAPS_API_KEY
    if not api_key:
        raise ValueError('Google Maps API key is required')

    try:
        response = requests.get(
            GEOCODE_URL,
            params={'address': full_address, 'key': api_key},
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        raise GeocodingError(f"Geocoding request failed: {e}") from e

    status = data.get('status')
    results = data.get('results') or []
    if status != 'OK' or not results:
        detail = data.get('error_message') or 'No results found'
        raise GeocodingError(f"Geocoding failed: {status} - {detail}")

    result = results[0]
    components = result.get('address_components', [])
    county = extract_county(components)
    street_address = build_street_address(components)

    logger.debug(f"Geocoded '{full_address}' -> '{street_address}' ({county})")

    return {
        'street_address': street_address,
        'county': county,
        'is_supported': bool(county) and is_supported(county),
        'raw': result,
    }


def parse_address_for_scraping(full_address: str, api_key: str = None) -> dict:
    """
    Geocode an address and return only what the scraper needs.

    Returns:
        {'street_address': ..., 'county': ...}

    Raises:
        UnsupportedCountyError: If the address is outside the supported counties
    """
    parsed = parse_address(full_address, api_key)

    if not parsed['is_supported']:
        logger.info(f"Address '{full_address}' is in unsupported county {parsed['county']!r}")
        raise UnsupportedCountyError(parsed['county'], SUPPORTED_COUNTIES)

    return {
        'street_address': parsed['street_address'],
        'county': parsed['county'],
    }
