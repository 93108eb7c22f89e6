#!/usr/bin/env python3
"""Scrape one property from its county qPublic portal and print the result.

Usage:
    python scripts/scrape_property.py "6607 ARIA BLVD" fulton
    python scripts/scrape_property.py "2517 Weycroft Cir NE, Dacula, GA 30019, USA" --geocode
    python scripts/scrape_property.py "443 VININGS VINTAGE CIR" cobb --headed --tax-year 2025
    python scripts/scrape_property.py "..." --geocode --cache   # also write to scrape_cache
"""

import argparse
import json
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from common.config import config
from common.logger import setup_logger
from county_scrapers.common.errors import GeocodingError, UnsupportedCountyError
from county_scrapers.router import SUPPORTED_COUNTIES
from county_scrapers.scraper import scrape_property
from county_scrapers.preview import scrape_preview

logger = setup_logger('county_scrapers')


def main(argv=None):
    parser = argparse.ArgumentParser(description='Scrape Georgia county property details')
    parser.add_argument('address', help='Street address, or a full address with --geocode')
    parser.add_argument('county', nargs='?', default='fulton',
                        help=f"County key ({', '.join(SUPPORTED_COUNTIES)}); ignored with --geocode")
    parser.add_argument('--geocode', action='store_true',
                        help='Resolve county and street address with Google Maps first')
    parser.add_argument('--cache', action='store_true',
                        help='Write the result to scrape_cache (requires --geocode)')
    parser.add_argument('--headed', action='store_true', help='Show the browser window')
    parser.add_argument('--tax-year', type=int, default=None, help='Tax year (default: TAX_YEAR)')
    args = parser.parse_args(argv)

    scrape_kwargs = {'headless': False if args.headed else None, 'tax_year': args.tax_year}

    try:
        if args.geocode:
            if args.cache:
                # Needs both the geocoding key and the cache database
                config.validate()
                output = scrape_preview(args.address, **scrape_kwargs)
            else:
                from county_scrapers.common.address_parser import parse_address_for_scraping
                parsed = parse_address_for_scraping(args.address)
                logger.info(f"Geocoded to {parsed['street_address']} ({parsed['county']})")
                result = scrape_property(parsed['street_address'], parsed['county'], **scrape_kwargs)
                output = result.to_dict() if result else None
        else:
            result = scrape_property(args.address, args.county, **scrape_kwargs)
            output = result.to_dict() if result else None
    except (UnsupportedCountyError, GeocodingError, ValueError) as e:
        logger.error(str(e))
        return 2

    if output is None:
        logger.error("No result: the county search page could not be completed")
        return 1

    print(json.dumps(output, indent=2))
    return 0


if __name__ == '__main__':
    sys.exit(main())
