"""Tests for tax amount resolution."""

from unittest import mock

import pytest
from playwright.sync_api import Error as PlaywrightError

from conftest import FakePdfTextExtractor, make_page, make_session
from county_scrapers.common.errors import PdfFetchError
from county_scrapers.common.models import TaxBillOutcome, TaxBillStrategy
from county_scrapers.common.navigator import ScrapeState, SearchNavigator
from county_scrapers.common.tax_bill import (
    MAX_POLLS,
    TAX_BILL_RESOLVERS,
    AssessmentPdfResolver,
    DirectPdfResolver,
    SecondaryPagePollResolver,
    extract_pdf_homestead,
    extract_tax_amount,
    get_tax_bill_resolver,
    resolve_tax_bill,
)
from county_scrapers.cobb import ADAPTER as COBB
from county_scrapers.cobb.config import HOMESTEAD_PATTERNS as COBB_HOMESTEAD
from county_scrapers.cobb.config import TAX_AMOUNT_PATTERNS as COBB_TAX
from county_scrapers.fulton import ADAPTER as FULTON
from county_scrapers.fulton.config import TAX_AMOUNT_PATTERNS as FULTON_TAX
from county_scrapers.gwinnett import ADAPTER as GWINNETT
from county_scrapers.gwinnett.config import TAX_AMOUNT_PATTERNS as GWINNETT_TAX


FULTON_TAX_PAGE = """Property Tax Details
Tax Year\tStatus\tAmount
2025\tPaid\t$15,262.32
2024\tPaid\t$14,880.10
Payment History
"""

COBB_NOTICE = """ANNUAL ASSESSMENT NOTICE 2025
Homestead YES
Estimated Annual Tax $1,175.65
"""

GWINNETT_BILL = """2025 PROPERTY TAX BILL
Parcel R7058 149
Total Due: $4,911.54
"""


def navigator_at_results(adapter, body_texts=('results',)):
    navigator = SearchNavigator(make_session(adapter, make_page(list(body_texts))))
    navigator.run_search('123 MAIN ST')
    return navigator


class TestExtractTaxAmount:
    """Tests for amount pattern matching."""

    def test_fulton_current_year_row(self):
        assert extract_tax_amount(FULTON_TAX_PAGE, FULTON_TAX, 2025) == '15,262.32'

    def test_year_substitution_selects_row(self):
        assert extract_tax_amount(FULTON_TAX_PAGE, FULTON_TAX, 2024) == '14,880.10'

    def test_display_string_unchanged(self):
        assert extract_tax_amount(COBB_NOTICE, COBB_TAX, 2025) == '1,175.65'

    def test_gwinnett_total_due(self):
        assert extract_tax_amount(GWINNETT_BILL, GWINNETT_TAX, 2025) == '4,911.54'

    def test_no_match(self):
        assert extract_tax_amount('nothing to see', GWINNETT_TAX, 2025) is None

    def test_empty_text(self):
        assert extract_tax_amount('', GWINNETT_TAX) is None


class TestExtractPdfHomestead:
    def test_yes(self):
        assert extract_pdf_homestead(COBB_NOTICE, COBB_HOMESTEAD) is True

    def test_no(self):
        assert extract_pdf_homestead("Homestead Exemption\tNO", COBB_HOMESTEAD) is False

    def test_absent(self):
        assert extract_pdf_homestead("Fair Market Value 300,000", COBB_HOMESTEAD) is None


class TestResolverTable:
    def test_every_strategy_has_a_resolver(self):
        assert set(TAX_BILL_RESOLVERS) == set(TaxBillStrategy)

    def test_none_strategy(self):
        outcome = get_tax_bill_resolver(TaxBillStrategy.NONE).resolve(None, 'X', None, None, None, 2025)
        assert outcome == TaxBillOutcome()


class TestSecondaryPagePollResolver:
    """Tests for the Fulton tax page strategy."""

    def test_reads_amount_after_marker(self):
        navigator = navigator_at_results(FULTON, ['results', 'Loading...', FULTON_TAX_PAGE])

        outcome = SecondaryPagePollResolver().resolve(
            navigator, '17 0034  LL3967', None, None, FakePdfTextExtractor(), 2025)

        assert outcome.property_tax == '15,262.32'
        assert outcome.tax_record_url.endswith('parcelId=17%200034%20%20LL3967&taxYear=2025')
        assert navigator.state is ScrapeState.NAVIGATE_TO_TAX_PAGE
        navigator.session.page.goto.assert_called_with(outcome.tax_record_url, wait_until='domcontentloaded', timeout=mock.ANY)

    def test_marker_never_appears_uses_partial_text(self):
        partial = '2025\tDue\t$1,000.00'
        navigator = navigator_at_results(FULTON, ['results'] + [partial] * MAX_POLLS)

        outcome = SecondaryPagePollResolver().resolve(navigator, '14 0001', None, None, FakePdfTextExtractor(), 2025)

        assert outcome.property_tax == '1,000.00'

    def test_no_parcel(self):
        navigator = navigator_at_results(FULTON)
        outcome = SecondaryPagePollResolver().resolve(navigator, None, None, None, FakePdfTextExtractor(), 2025)
        assert outcome == TaxBillOutcome()
        assert navigator.state is ScrapeState.EXTRACT

    def test_page_error_keeps_url(self):
        navigator = navigator_at_results(FULTON)
        navigator.session.page.goto.side_effect = PlaywrightError('Timeout 60000ms exceeded')

        outcome = SecondaryPagePollResolver().resolve(navigator, '14 0001', None, None, FakePdfTextExtractor(), 2025)

        assert outcome.property_tax is None
        assert 'parcelId=14%200001' in outcome.tax_record_url


class TestDirectPdfResolver:
    """Tests for the Gwinnett tax bill PDF strategy."""

    @mock.patch('county_scrapers.common.tax_bill.fetch_pdf')
    def test_reads_total_due(self, mock_fetch):
        mock_fetch.return_value = b'%PDF-1.4 bill'
        extractor = FakePdfTextExtractor(GWINNETT_BILL)
        navigator = navigator_at_results(GWINNETT)

        outcome = DirectPdfResolver().resolve(navigator, 'R7058 149', None, None, extractor, 2025)

        assert outcome.property_tax == '4,911.54'
        assert outcome.tax_record_url == 'https://www.gwinnetttaxcommissioner.com/PropTaxBills/2025/R7058%20149.pdf'
        mock_fetch.assert_called_once_with(outcome.tax_record_url)
        assert extractor.calls == [b'%PDF-1.4 bill']

    @mock.patch('county_scrapers.common.tax_bill.fetch_pdf')
    def test_fetch_failure_leaves_tax_unknown(self, mock_fetch):
        mock_fetch.side_effect = PdfFetchError('404 Not Found')
        navigator = navigator_at_results(GWINNETT)

        outcome = DirectPdfResolver().resolve(navigator, 'R7058 149', None, None, FakePdfTextExtractor(), 2025)

        assert outcome.property_tax is None
        assert outcome.tax_record_url.endswith('R7058%20149.pdf')

    @mock.patch('county_scrapers.common.tax_bill.fetch_pdf')
    def test_no_parcel_skips_download(self, mock_fetch):
        navigator = navigator_at_results(GWINNETT)
        outcome = DirectPdfResolver().resolve(navigator, None, None, None, FakePdfTextExtractor(), 2025)
        assert outcome == TaxBillOutcome()
        mock_fetch.assert_not_called()


class TestAssessmentPdfResolver:
    """Tests for the Cobb assessment notice strategy."""

    NOTICE_URL = 'https://www.cobbassessor.org/notices/2025%20notice.pdf'

    @mock.patch('county_scrapers.common.tax_bill.fetch_pdf')
    def test_tax_and_homestead_from_notice(self, mock_fetch):
        mock_fetch.return_value = b'%PDF-1.7'
        navigator = navigator_at_results(COBB)

        outcome = AssessmentPdfResolver().resolve(
            navigator, '18018300540', self.NOTICE_URL, None, FakePdfTextExtractor(COBB_NOTICE), 2025)

        assert outcome.property_tax == '1,175.65'
        assert outcome.homestead_exemption is True
        assert outcome.tax_record_url == self.NOTICE_URL

    @mock.patch('county_scrapers.common.tax_bill.fetch_pdf')
    def test_page_homestead_not_overridden(self, mock_fetch):
        mock_fetch.return_value = b'%PDF-1.7'
        navigator = navigator_at_results(COBB)

        outcome = AssessmentPdfResolver().resolve(
            navigator, '18018300540', self.NOTICE_URL, False, FakePdfTextExtractor(COBB_NOTICE), 2025)

        assert outcome.homestead_exemption is None

    @mock.patch('county_scrapers.common.tax_bill.fetch_pdf')
    def test_no_notice_url(self, mock_fetch):
        navigator = navigator_at_results(COBB)
        outcome = AssessmentPdfResolver().resolve(navigator, '18018300540', None, None, FakePdfTextExtractor(), 2025)
        assert outcome == TaxBillOutcome()
        mock_fetch.assert_not_called()


@pytest.mark.parametrize('strategy,resolver_type', [
    (TaxBillStrategy.SECONDARY_PAGE_POLL, SecondaryPagePollResolver),
    (TaxBillStrategy.DIRECT_PDF, DirectPdfResolver),
    (TaxBillStrategy.PDF_FROM_ASSESSMENT_LINK, AssessmentPdfResolver),
])
def test_get_tax_bill_resolver(strategy, resolver_type):
    assert isinstance(get_tax_bill_resolver(strategy), resolver_type)


class TestResolveTaxBill:
    """Tests for resolve_tax_bill() dispatch."""

    @mock.patch('county_scrapers.common.tax_bill.fetch_pdf')
    def test_dispatches_on_county_strategy(self, mock_fetch):
        mock_fetch.return_value = b'%PDF-1.4'
        navigator = navigator_at_results(GWINNETT)

        outcome = resolve_tax_bill(navigator, 'R7058 149', None, None, FakePdfTextExtractor(GWINNETT_BILL), 2025)

        assert outcome.property_tax == '4,911.54'

    @mock.patch.object(DirectPdfResolver, 'resolve', side_effect=PlaywrightError('Target closed'))
    def test_browser_error_leaves_tax_unknown(self, mock_resolve):
        navigator = navigator_at_results(GWINNETT)

        outcome = resolve_tax_bill(navigator, 'R7058 149', None, None, FakePdfTextExtractor(), 2025)

        assert outcome == TaxBillOutcome()
