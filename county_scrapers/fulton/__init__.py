"""Fulton County adapter: qPublic search, tax amount from the Tax Commissioner site."""

from county_scrapers.common.models import CountyAdapterConfig, TaxBillSettings, TaxBillStrategy
from county_scrapers.fulton.config import (
    COUNTY_KEY,
    DISPLAY_NAME,
    SEARCH_URL,
    ADDRESS_INPUT,
    SEARCH_BUTTON,
    PARCEL_SELECTORS,
    TAX_PAGE_LOADED_MARKER,
    TAX_AMOUNT_PATTERNS,
)
from county_scrapers.fulton.url_builder import build_tax_detail_url

ADAPTER = CountyAdapterConfig(
    county_key=COUNTY_KEY,
    display_name=DISPLAY_NAME,
    search_url=SEARCH_URL,
    address_input_selector=ADDRESS_INPUT,
    search_button_selector=SEARCH_BUTTON,
    tax_bill_strategy=TaxBillStrategy.SECONDARY_PAGE_POLL,
    tax_bill=TaxBillSettings(
        url_builder=build_tax_detail_url,
        loaded_marker=TAX_PAGE_LOADED_MARKER,
        amount_patterns=TAX_AMOUNT_PATTERNS,
    ),
    parcel_selectors=PARCEL_SELECTORS,
)

__all__ = ['ADAPTER']
