"""
Current-year tax amount resolution.

Each county adapter names one strategy; the strategy is picked once from
TAX_BILL_RESOLVERS and never re-checked during the scrape:

- secondary-page-poll: open the county tax site for the parcel and poll
  until its data has rendered (Fulton)
- direct-pdf: download the tax bill PDF for the parcel (Gwinnett)
- pdf-from-assessment-link: read the assessment notice PDF that was
  already located, which also carries homestead status (Cobb)

Nothing here raises. Any failure is logged and leaves the tax amount
unknown so the rest of the result still goes back to the caller.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from playwright.sync_api import Error as PlaywrightError

from county_scrapers.common.errors import PdfFetchError, PdfParseError
from county_scrapers.common.models import TaxBillOutcome, TaxBillStrategy
from county_scrapers.common.navigator import ScrapeState, SearchNavigator
from county_scrapers.common.pdf_text import PdfTextExtractor, fetch_pdf


logger = logging.getLogger(__name__)

TAX_PAGE_TIMEOUT_MS = 60000
POLL_INTERVAL_MS = 3000
MAX_POLLS = 15  # ~45 seconds


def extract_tax_amount(text: str, patterns: Sequence[str], tax_year: Optional[int] = None) -> Optional[str]:
    """
    First amount captured by ``patterns``, in order.

    A literal ``{year}`` in a pattern is replaced with ``tax_year``. The
    display string is returned untouched ("15,262.32"); converting to a
    number is left to whoever persists it.
    """
    if not text:
        return None
    for pattern in patterns:
        if tax_year is not None:
            pattern = pattern.replace('{year}', str(tax_year))
        match = re.search(pattern, text, re.IGNORECASE | re.MULTILINE)
        if match:
            return match.group(1)
    return None


def extract_pdf_homestead(text: str, patterns: Sequence[str]) -> Optional[bool]:
    """YES/NO homestead token from a notice PDF; None if absent."""
    if not text:
        return None
    for pattern in patterns:
        match = re.search(pattern, text, re.IGNORECASE | re.MULTILINE)
        if match:
            return match.group(1).strip().upper() in ('YES', 'Y')
    return None


class TaxBillResolver(ABC):
    """Recovers the tax amount for one county strategy."""

    strategy: TaxBillStrategy = None

    @abstractmethod
    def resolve(
        self,
        navigator: SearchNavigator,
        parcel_number: Optional[str],
        assessment_pdf_url: Optional[str],
        homestead: Optional[bool],
        pdf_extractor: PdfTextExtractor,
        tax_year: int,
    ) -> TaxBillOutcome:
        """
        Resolve the tax amount.

        Args:
            navigator: Navigator for the current scrape (results page reached)
            parcel_number: Parcel number as scraped, spacing intact
            assessment_pdf_url: Notice URL from the assessment locator
            homestead: Homestead status already read from the page
            pdf_extractor: Extractor for downloaded PDFs
            tax_year: Tax year to look up

        Returns:
            TaxBillOutcome; fields are None when unknown
        """

    def _read_pdf(self, url: str, pdf_extractor: PdfTextExtractor) -> Optional[str]:
        try:
            return pdf_extractor.extract_text(fetch_pdf(url))
        except (PdfFetchError, PdfParseError) as e:
            logger.warning(f"Tax document unavailable ({self.strategy.value}): {e}")
            return None


class NoTaxBillResolver(TaxBillResolver):
    strategy = TaxBillStrategy.NONE

    def resolve(self, navigator, parcel_number, assessment_pdf_url, homestead, pdf_extractor, tax_year):
        return TaxBillOutcome()


class SecondaryPagePollResolver(TaxBillResolver):
    """Open the county tax site and wait for its client-side data."""

    strategy = TaxBillStrategy.SECONDARY_PAGE_POLL

    def resolve(self, navigator, parcel_number, assessment_pdf_url, homestead, pdf_extractor, tax_year):
        settings = navigator.session.adapter.tax_bill
        if not parcel_number or not settings.url_builder:
            logger.info("No parcel number, skipping tax page lookup")
            return TaxBillOutcome()

        url = settings.url_builder(parcel_number, tax_year)
        navigator.skip_to(ScrapeState.NAVIGATE_TO_TAX_PAGE)
        logger.debug(f"Opening tax page: {url}")

        try:
            text = self._poll_tax_page(navigator, url, settings.loaded_marker)
        except PlaywrightError as e:
            logger.warning(f"Tax page failed for parcel {parcel_number}: {e}")
            return TaxBillOutcome(tax_record_url=url)

        amount = extract_tax_amount(text, settings.amount_patterns, tax_year)
        if amount is None:
            logger.info(f"No {tax_year} tax amount on tax page for parcel {parcel_number}")
        return TaxBillOutcome(property_tax=amount, tax_record_url=url)

    def _poll_tax_page(self, navigator: SearchNavigator, url: str, marker: Optional[str]) -> str:
        session = navigator.session
        session.page.goto(url, wait_until='domcontentloaded', timeout=TAX_PAGE_TIMEOUT_MS)

        text = ''
        for attempt in range(MAX_POLLS):
            session.settle(POLL_INTERVAL_MS)
            text = session.body_text()
            if not marker or marker in text:
                logger.debug(f"Tax page loaded after {attempt + 1} poll(s)")
                return text

        # Partial page text is still worth scanning
        logger.warning(f"Tax page marker '{marker}' never appeared, using partial text")
        return text


class DirectPdfResolver(TaxBillResolver):
    """Download the tax bill PDF built from the parcel number."""

    strategy = TaxBillStrategy.DIRECT_PDF

    def resolve(self, navigator, parcel_number, assessment_pdf_url, homestead, pdf_extractor, tax_year):
        settings = navigator.session.adapter.tax_bill
        if not parcel_number or not settings.url_builder:
            logger.info("No parcel number, skipping tax bill PDF")
            return TaxBillOutcome()

        url = settings.url_builder(parcel_number, tax_year)
        text = self._read_pdf(url, pdf_extractor)
        if text is None:
            return TaxBillOutcome(tax_record_url=url)

        amount = extract_tax_amount(text, settings.amount_patterns, tax_year)
        if amount is None:
            logger.info(f"No tax amount in tax bill PDF for parcel {parcel_number}")
        return TaxBillOutcome(property_tax=amount, tax_record_url=url)


class AssessmentPdfResolver(TaxBillResolver):
    """Read tax (and homestead, if still unknown) from the assessment notice."""

    strategy = TaxBillStrategy.PDF_FROM_ASSESSMENT_LINK

    def resolve(self, navigator, parcel_number, assessment_pdf_url, homestead, pdf_extractor, tax_year):
        if not assessment_pdf_url:
            logger.info("No assessment notice URL, skipping tax lookup")
            return TaxBillOutcome()

        settings = navigator.session.adapter.tax_bill
        text = self._read_pdf(assessment_pdf_url, pdf_extractor)
        if text is None:
            return TaxBillOutcome(tax_record_url=assessment_pdf_url)

        amount = extract_tax_amount(text, settings.amount_patterns, tax_year)
        pdf_homestead = None
        if homestead is None:
            pdf_homestead = extract_pdf_homestead(text, settings.homestead_patterns)
            logger.debug(f"Homestead from notice PDF: {pdf_homestead}")

        return TaxBillOutcome(
            property_tax=amount,
            tax_record_url=assessment_pdf_url,
            homestead_exemption=pdf_homestead,
        )


TAX_BILL_RESOLVERS = {
    resolver.strategy: resolver
    for resolver in (
        NoTaxBillResolver(),
        SecondaryPagePollResolver(),
        DirectPdfResolver(),
        AssessmentPdfResolver(),
    )
}


def get_tax_bill_resolver(strategy: TaxBillStrategy) -> TaxBillResolver:
    return TAX_BILL_RESOLVERS[strategy]


def resolve_tax_bill(
    navigator: SearchNavigator,
    parcel_number: Optional[str],
    assessment_pdf_url: Optional[str],
    homestead: Optional[bool],
    pdf_extractor: PdfTextExtractor,
    tax_year: int,
) -> TaxBillOutcome:
    """Run the resolver for the navigator's county. Browser errors leave the tax unknown."""
    resolver = get_tax_bill_resolver(navigator.session.adapter.tax_bill_strategy)
    try:
        return resolver.resolve(
            navigator,
            parcel_number=parcel_number,
            assessment_pdf_url=assessment_pdf_url,
            homestead=homestead,
            pdf_extractor=pdf_extractor,
            tax_year=tax_year,
        )
    except PlaywrightError as e:
        logger.warning(f"Tax bill lookup failed ({resolver.strategy.value}): {e}")
        return TaxBillOutcome()
