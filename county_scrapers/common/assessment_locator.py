"""
Locate the assessment notice PDF for the current tax year.

Counties publish the notice three different ways, tried in this order:

1. Direct link (Gwinnett): an anchor whose href contains "assessmentnotice"
   and the year.
2. PDF button (Cobb): an input whose value mentions the year, "Notice" and
   "PDF"; the URL is the window.open('...') argument in its onclick.
3. Assessment Notices page (Fulton): follow the "Assessment Notices" link,
   expand the accordion of the same name, then look for the button again.

A missing element moves on to the next strategy. If nothing is found the
notice URL is simply unknown.
"""

import logging
import re
from typing import Optional
from urllib.parse import urljoin

from playwright.sync_api import Error as PlaywrightError

from county_scrapers.common.navigator import ScrapeState, SearchNavigator


logger = logging.getLogger(__name__)

WINDOW_OPEN_PATTERN = re.compile(r"window\.open\('([^']+)'")

ASSESSMENT_NOTICES_LINK = 'a:has-text("Assessment Notices")'
ASSESSMENT_NOTICES_HEADER = 'text=Assessment Notices'
NOTICES_PAGE_SETTLE_MS = 3000
ACCORDION_SETTLE_MS = 2000


def encode_spaces(url: Optional[str]) -> Optional[str]:
    """Percent-encode literal spaces; notice filenames often contain them."""
    if url is None:
        return None
    return url.replace(' ', '%20')


def extract_window_open_url(onclick: Optional[str]) -> Optional[str]:
    """
    Pull the URL out of an onclick like "window.open('https://.../x.pdf');".

    Returns None when there is no single-quoted window.open call.
    """
    if not onclick:
        return None
    match = WINDOW_OPEN_PATTERN.search(onclick)
    return match.group(1) if match else None


def direct_link_selector(year: int) -> str:
    return f'a[href*="assessmentnotice"][href*="{year}"]'


def notice_button_selector(year: int) -> str:
    return f'input[value*="{year}"][value*="Notice"][value*="PDF"]'


def _absolute(page_url: str, url: str) -> str:
    return encode_spaces(urljoin(page_url, url))


def find_direct_link(page, year: int) -> Optional[str]:
    """Strategy 1: anchor href."""
    link = page.query_selector(direct_link_selector(year))
    if not link:
        return None
    href = link.get_attribute('href')
    if not href:
        return None
    return _absolute(page.url, href)


def find_notice_button(page, year: int) -> Optional[str]:
    """Strategy 2: input button with a window.open onclick."""
    button = page.query_selector(notice_button_selector(year))
    if not button:
        return None
    url = extract_window_open_url(button.get_attribute('onclick'))
    if not url:
        logger.debug("Notice button has no window.open URL")
        return None
    return _absolute(page.url, url)


def find_via_notices_page(navigator: SearchNavigator, year: int) -> Optional[str]:
    """Strategy 3: open the Assessment Notices section, then look for the button."""
    session = navigator.session
    page = session.page

    link = page.query_selector(ASSESSMENT_NOTICES_LINK)
    if not link:
        return None

    navigator.skip_to(ScrapeState.NAVIGATE_TO_ASSESSMENT_DOC)
    link.click()
    session.settle(NOTICES_PAGE_SETTLE_MS)

    header = page.query_selector(ASSESSMENT_NOTICES_HEADER)
    if header:
        header.click()
        session.settle(ACCORDION_SETTLE_MS)

    return find_notice_button(page, year)


def locate_assessment_pdf(navigator: SearchNavigator, year: int) -> Optional[str]:
    """
    Find the assessment notice PDF URL for ``year``.

    Args:
        navigator: Navigator positioned on the results page
        year: Tax year of the notice

    Returns:
        Absolute URL with spaces encoded, or None
    """
    page = navigator.session.page
    strategies = (
        ('direct link', lambda: find_direct_link(page, year)),
        ('notice button', lambda: find_notice_button(page, year)),
        ('assessment notices page', lambda: find_via_notices_page(navigator, year)),
    )

    for name, strategy in strategies:
        try:
            url = strategy()
        except PlaywrightError as e:
            logger.debug(f"Assessment notice strategy '{name}' failed: {e}")
            continue
        if url:
            logger.info(f"Found {year} assessment notice via {name}: {url}")
            return url

    logger.info(f"No {year} assessment notice found")
    return None
