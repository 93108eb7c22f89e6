"""Gwinnett County adapter: qPublic search, tax amount from the bill PDF."""

from county_scrapers.common.models import CountyAdapterConfig, TaxBillSettings, TaxBillStrategy
from county_scrapers.gwinnett.config import (
    COUNTY_KEY,
    DISPLAY_NAME,
    SEARCH_URL,
    ADDRESS_INPUT,
    SEARCH_BUTTON,
    PARCEL_SELECTORS,
    TAX_AMOUNT_PATTERNS,
)
from county_scrapers.gwinnett.url_builder import build_tax_bill_pdf_url

ADAPTER = CountyAdapterConfig(
    county_key=COUNTY_KEY,
    display_name=DISPLAY_NAME,
    search_url=SEARCH_URL,
    address_input_selector=ADDRESS_INPUT,
    search_button_selector=SEARCH_BUTTON,
    tax_bill_strategy=TaxBillStrategy.DIRECT_PDF,
    tax_bill=TaxBillSettings(
        url_builder=build_tax_bill_pdf_url,
        amount_patterns=TAX_AMOUNT_PATTERNS,
    ),
    parcel_selectors=PARCEL_SELECTORS,
)

__all__ = ['ADAPTER']
