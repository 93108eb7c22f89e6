"""
Scrape one property from its county qPublic portal.

Flow for a request (street address + county key):

    registry -> browser session -> search states -> page fields and parcel
    -> assessment notice -> tax bill -> ExtractionResult

Only failing to reach the results page gives back None. Anything that goes
wrong after that costs just the affected field.
"""

import json
import logging
from typing import Optional

from playwright.sync_api import Error as PlaywrightError

from common.config import config
from county_scrapers.common.assessment_locator import locate_assessment_pdf
from county_scrapers.common.errors import BrowserLaunchError, NavigationTimeoutError
from county_scrapers.common.field_extractors import extract_fields, extract_parcel_number
from county_scrapers.common.models import ExtractionResult, ScrapeRequest
from county_scrapers.common.navigator import SearchNavigator
from county_scrapers.common.pdf_text import PdfTextExtractor, PdfplumberTextExtractor
from county_scrapers.common.session import open_scrape_session
from county_scrapers.common.tax_bill import resolve_tax_bill
from county_scrapers.router import resolve_county


logger = logging.getLogger(__name__)


def scrape_property(
    address: str,
    county: str = 'fulton',
    pdf_extractor: Optional[PdfTextExtractor] = None,
    headless: Optional[bool] = None,
    tax_year: Optional[int] = None,
) -> Optional[ExtractionResult]:
    """
    Scrape property characteristics for a street address.

    Args:
        address: Street address as typed into qPublic (e.g. "6607 ARIA BLVD")
        county: County key (fulton, gwinnett, cobb)
        pdf_extractor: PDF text extractor, defaults to pdfplumber
        headless: Override config.HEADLESS
        tax_year: Override config.TAX_YEAR

    Returns:
        ExtractionResult, or None if the results page was never reached

    Raises:
        UnsupportedCountyError: If the county has no adapter (before any
            browser is started)
    """
    adapter = resolve_county(county)
    request = ScrapeRequest(street_address=address, county_key=adapter.county_key)
    pdf_extractor = pdf_extractor or PdfplumberTextExtractor()
    tax_year = tax_year or config.TAX_YEAR

    logger.info(f"Scraping {request.street_address} ({adapter.display_name})")

    result = None
    try:
        with open_scrape_session(adapter, headless=headless) as session:
            navigator = SearchNavigator(session)
            try:
                results_page = navigator.run_search(request.street_address)
            except PlaywrightError as e:
                raise NavigationTimeoutError(navigator.state, str(e)) from e

            result = _collect_result(navigator, request, results_page, pdf_extractor, tax_year)
            navigator.finish()
    except (BrowserLaunchError, NavigationTimeoutError) as e:
        logger.error(f"Scrape failed for {request.street_address} ({adapter.county_key}): {e}")
        return None
    except PlaywrightError as e:
        if result is None:
            logger.error(f"Browser error for {request.street_address} ({adapter.county_key}): {e}")
            return None
        # Results page was reached; only closing the browser failed
        logger.warning(f"Browser cleanup failed for {request.street_address} ({adapter.county_key}): {e}")

    logger.info(json.dumps(result.to_dict(), indent=2))
    return result


def _collect_result(navigator, request, results_page, pdf_extractor, tax_year) -> ExtractionResult:
    """Everything after the results page; each stage degrades to None on its own."""
    adapter = navigator.session.adapter
    fields = extract_fields(results_page.text)
    parcel_number = extract_parcel_number(
        results_page.text,
        navigator.read_dom_values(adapter.parcel_selectors),
    )
    if parcel_number is None:
        logger.info(f"No parcel number found for {request.street_address}")

    try:
        assessment_pdf_url = locate_assessment_pdf(navigator, tax_year)
    except PlaywrightError as e:
        logger.warning(f"Assessment notice lookup failed: {e}")
        assessment_pdf_url = None

    tax_bill = resolve_tax_bill(
        navigator,
        parcel_number=parcel_number,
        assessment_pdf_url=assessment_pdf_url,
        homestead=fields.homestead_exemption,
        pdf_extractor=pdf_extractor,
        tax_year=tax_year,
    )

    homestead = fields.homestead_exemption
    if homestead is None:
        homestead = tax_bill.homestead_exemption

    return ExtractionResult(
        address=request.street_address,
        county=adapter.county_key,
        bedrooms=fields.bedrooms,
        bathrooms=fields.bathrooms,
        sqft=fields.sqft,
        homestead_exemption=homestead,
        parcel_number=parcel_number,
        qpublic_url=results_page.url,
        assessment_pdf_url=assessment_pdf_url,
        property_tax=tax_bill.property_tax,
        tax_record_url=tax_bill.tax_record_url,
    )
