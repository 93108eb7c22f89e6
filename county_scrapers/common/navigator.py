"""
State machine that drives a qPublic search from the landing page to the
property results page.

States and the transitions allowed between them:

    INIT -> NAVIGATE_TO_SEARCH -> [DISMISS_TERMS_MODAL] -> FILL_ADDRESS
         -> SUBMIT -> WAIT_FOR_RESULTS -> EXTRACT
         -> [NAVIGATE_TO_ASSESSMENT_DOC] -> [NAVIGATE_TO_TAX_PAGE] -> DONE

Everything up to WAIT_FOR_RESULTS is fatal on failure and raises
NavigationTimeoutError. The optional tail states are entered by the
assessment locator and tax resolver; a failure there only costs a field.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from playwright.sync_api import TimeoutError as PlaywrightTimeout, Error as PlaywrightError

from county_scrapers.common.errors import InvalidTransitionError, NavigationTimeoutError
from county_scrapers.common.session import ScrapeSession


logger = logging.getLogger(__name__)


class ScrapeState(Enum):
    INIT = 'init'
    NAVIGATE_TO_SEARCH = 'navigate-to-search'
    DISMISS_TERMS_MODAL = 'dismiss-terms-modal'
    FILL_ADDRESS = 'fill-address'
    SUBMIT = 'submit'
    WAIT_FOR_RESULTS = 'wait-for-results'
    EXTRACT = 'extract'
    NAVIGATE_TO_ASSESSMENT_DOC = 'navigate-to-assessment-doc'
    NAVIGATE_TO_TAX_PAGE = 'navigate-to-tax-page'
    DONE = 'done'


TRANSITIONS = {
    ScrapeState.INIT: {ScrapeState.NAVIGATE_TO_SEARCH},
    ScrapeState.NAVIGATE_TO_SEARCH: {ScrapeState.DISMISS_TERMS_MODAL, ScrapeState.FILL_ADDRESS},
    ScrapeState.DISMISS_TERMS_MODAL: {ScrapeState.FILL_ADDRESS},
    ScrapeState.FILL_ADDRESS: {ScrapeState.SUBMIT},
    ScrapeState.SUBMIT: {ScrapeState.WAIT_FOR_RESULTS},
    ScrapeState.WAIT_FOR_RESULTS: {ScrapeState.EXTRACT},
    ScrapeState.EXTRACT: {
        ScrapeState.NAVIGATE_TO_ASSESSMENT_DOC,
        ScrapeState.NAVIGATE_TO_TAX_PAGE,
        ScrapeState.DONE,
    },
    ScrapeState.NAVIGATE_TO_ASSESSMENT_DOC: {ScrapeState.NAVIGATE_TO_TAX_PAGE, ScrapeState.DONE},
    ScrapeState.NAVIGATE_TO_TAX_PAGE: {ScrapeState.DONE},
    ScrapeState.DONE: set(),
}

# Timeouts (ms)
SEARCH_PAGE_TIMEOUT_MS = 30000
SEARCH_PAGE_SETTLE_MS = 2000
MODAL_TIMEOUT_MS = 5000
MODAL_SETTLE_MS = 2000
ADDRESS_INPUT_TIMEOUT_MS = 10000
RESULTS_TIMEOUT_MS = 60000
RESULTS_SETTLE_MS = 3000

TERMS_MODAL_SELECTOR = '.modal'
TERMS_ACCEPT_SELECTOR = '.modal a.btn-primary[data-dismiss="modal"]'


@dataclass(frozen=True)
class ResultsPage:
    """Snapshot of the results page taken in the EXTRACT state."""

    text: str
    url: str


class SearchNavigator:
    """Walks one ScrapeSession through the search states."""

    def __init__(self, session: ScrapeSession):
        self.session = session
        self.state = ScrapeState.INIT
        self.history: List[ScrapeState] = [ScrapeState.INIT]

    @property
    def page(self):
        return self.session.page

    def advance(self, target: ScrapeState) -> None:
        """Move to ``target``, refusing transitions the table doesn't allow."""
        if target not in TRANSITIONS[self.state]:
            raise InvalidTransitionError(f"{self.state.value} -> {target.value} is not allowed")
        logger.debug(f"[{self.session.adapter.county_key}] {self.state.value} -> {target.value}")
        self.state = target
        self.history.append(target)

    def skip_to(self, target: ScrapeState) -> bool:
        """Advance if the transition is allowed; used by the optional tail states."""
        if target in TRANSITIONS[self.state]:
            self.advance(target)
            return True
        return False

    def run_search(self, street_address: str) -> ResultsPage:
        """
        Run every state up to EXTRACT.

        Args:
            street_address: Address typed into the county search box

        Returns:
            ResultsPage with the visible text and URL of the results page

        Raises:
            NavigationTimeoutError: If the results page is never reached
        """
        self._navigate_to_search()
        self._dismiss_terms_modal()
        self._fill_address(street_address)
        self._submit()
        self._wait_for_results()
        return self._extract()

    def finish(self) -> None:
        if self.state is not ScrapeState.DONE:
            self.advance(ScrapeState.DONE)

    def _fatal(self, error: Exception) -> NavigationTimeoutError:
        return NavigationTimeoutError(self.state, str(error))

    def _navigate_to_search(self) -> None:
        self.advance(ScrapeState.NAVIGATE_TO_SEARCH)
        adapter = self.session.adapter
        logger.debug(f"Navigating to {adapter.search_url}")
        try:
            self.page.goto(adapter.search_url, wait_until='domcontentloaded', timeout=SEARCH_PAGE_TIMEOUT_MS)
        except PlaywrightError as e:
            raise self._fatal(e) from e
        self.session.settle(SEARCH_PAGE_SETTLE_MS)

    def _dismiss_terms_modal(self) -> None:
        """Accept the terms dialog if it is showing; it is gone once accepted."""
        try:
            self.page.wait_for_selector(TERMS_MODAL_SELECTOR, timeout=MODAL_TIMEOUT_MS)
        except PlaywrightTimeout:
            logger.debug("No terms modal shown")
            return

        self.advance(ScrapeState.DISMISS_TERMS_MODAL)
        try:
            self.page.click(TERMS_ACCEPT_SELECTOR, timeout=MODAL_TIMEOUT_MS)
            self.session.settle(MODAL_SETTLE_MS)
        except PlaywrightError as e:
            logger.debug(f"Terms modal could not be dismissed: {e}")

    def _fill_address(self, street_address: str) -> None:
        self.advance(ScrapeState.FILL_ADDRESS)
        selector = self.session.adapter.address_input_selector
        try:
            self.page.wait_for_selector(selector, timeout=ADDRESS_INPUT_TIMEOUT_MS)
            self.page.fill(selector, street_address)
        except PlaywrightError as e:
            raise self._fatal(e) from e

    def _submit(self) -> None:
        self.advance(ScrapeState.SUBMIT)
        try:
            self.page.click(self.session.adapter.search_button_selector)
        except PlaywrightError as e:
            raise self._fatal(e) from e

    def _wait_for_results(self) -> None:
        self.advance(ScrapeState.WAIT_FOR_RESULTS)
        try:
            self.page.wait_for_load_state('domcontentloaded', timeout=RESULTS_TIMEOUT_MS)
        except PlaywrightError as e:
            raise self._fatal(e) from e
        self.session.settle(RESULTS_SETTLE_MS)

    def _extract(self) -> ResultsPage:
        self.advance(ScrapeState.EXTRACT)
        try:
            text = self.session.body_text()
        except PlaywrightError as e:
            raise self._fatal(e) from e
        return ResultsPage(text=text, url=self.page.url)

    def read_dom_values(self, selectors) -> List[Optional[str]]:
        """Text content of the first element for each selector (None when absent)."""
        values = []
        for selector in selectors:
            try:
                element = self.page.query_selector(selector)
                values.append(element.text_content() if element else None)
            except PlaywrightError as e:
                logger.debug(f"Selector {selector} failed: {e}")
                values.append(None)
        return values
