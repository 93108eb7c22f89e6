"""
Browser session management for county portal scrapes.

Every scrape gets its own browser, context and page. Nothing is shared
between scrapes and everything is closed on the way out, whichever step
failed.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from playwright.sync_api import (
    sync_playwright,
    BrowserContext,
    Page,
    Error as PlaywrightError,
)

from common.config import config
from county_scrapers.common.errors import BrowserLaunchError
from county_scrapers.common.models import CountyAdapterConfig


logger = logging.getLogger(__name__)

USER_AGENT = (
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)
VIEWPORT = {'width': 1280, 'height': 720}
LAUNCH_ARGS = ['--disable-blink-features=AutomationControlled']

# qPublic blocks sessions that report navigator.webdriver = true
WEBDRIVER_MASK_SCRIPT = (
    "Object.defineProperty(navigator, 'webdriver', { get: () => undefined });"
)

DEFAULT_TIMEOUT_MS = 30000


@dataclass
class ScrapeSession:
    """The county adapter plus the live Playwright handles for one scrape."""

    adapter: CountyAdapterConfig
    page: Page
    context: BrowserContext

    def settle(self, ms: int) -> None:
        """Fixed delay for pages that keep rendering after load events."""
        self.page.wait_for_timeout(ms)

    def body_text(self) -> str:
        """Visible text of the current page."""
        return self.page.evaluate('() => document.body.innerText') or ''


@contextmanager
def open_scrape_session(adapter: CountyAdapterConfig, headless: Optional[bool] = None) -> Iterator[ScrapeSession]:
    """
    Launch an isolated browser session for one county scrape.

    Args:
        adapter: County the session will drive
        headless: Override config.HEADLESS

    Yields:
        ScrapeSession with a masked page ready to navigate

    Raises:
        BrowserLaunchError: If the browser, context or page can't be created
    """
    if headless is None:
        headless = config.HEADLESS

    with sync_playwright() as p:
        try:
            browser = p.chromium.launch(headless=headless, args=LAUNCH_ARGS)
        except PlaywrightError as e:
            raise BrowserLaunchError(f"Could not launch Chromium: {e}") from e

        try:
            try:
                context = browser.new_context(user_agent=USER_AGENT, viewport=VIEWPORT)
                page = context.new_page()
                page.set_default_timeout(DEFAULT_TIMEOUT_MS)
                page.add_init_script(WEBDRIVER_MASK_SCRIPT)
            except PlaywrightError as e:
                raise BrowserLaunchError(f"Could not open browser context: {e}") from e

            logger.debug(f"Opened browser session for {adapter.display_name}")
            try:
                yield ScrapeSession(adapter=adapter, page=page, context=context)
            finally:
                context.close()
        finally:
            browser.close()
            logger.debug(f"Closed browser session for {adapter.display_name}")
