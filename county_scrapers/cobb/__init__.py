"""Cobb County adapter: qPublic search, tax and homestead from the assessment notice PDF."""

from county_scrapers.common.models import CountyAdapterConfig, TaxBillSettings, TaxBillStrategy
from county_scrapers.cobb.config import (
    COUNTY_KEY,
    DISPLAY_NAME,
    SEARCH_URL,
    ADDRESS_INPUT,
    SEARCH_BUTTON,
    PARCEL_SELECTORS,
    TAX_AMOUNT_PATTERNS,
    HOMESTEAD_PATTERNS,
)

ADAPTER = CountyAdapterConfig(
    county_key=COUNTY_KEY,
    display_name=DISPLAY_NAME,
    search_url=SEARCH_URL,
    address_input_selector=ADDRESS_INPUT,
    search_button_selector=SEARCH_BUTTON,
    tax_bill_strategy=TaxBillStrategy.PDF_FROM_ASSESSMENT_LINK,
    tax_bill=TaxBillSettings(
        amount_patterns=TAX_AMOUNT_PATTERNS,
        homestead_patterns=HOMESTEAD_PATTERNS,
    ),
    parcel_selectors=PARCEL_SELECTORS,
)

__all__ = ['ADAPTER']
