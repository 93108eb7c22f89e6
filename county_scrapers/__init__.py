"""
Georgia county property scrapers.

Submodules:
- common: Shared session, navigation, extraction and PDF utilities
- router: County adapter registry
- scraper: scrape_property entry point
- preview: Geocode + scrape + cache for property previews
- fulton: Fulton County (tax from the Tax Commissioner site)
- gwinnett: Gwinnett County (tax from the bill PDF)
- cobb: Cobb County (tax and homestead from the assessment notice PDF)
"""

from county_scrapers.router import SUPPORTED_COUNTIES, resolve_county
from county_scrapers.scraper import scrape_property

__all__ = ['scrape_property', 'resolve_county', 'SUPPORTED_COUNTIES']
