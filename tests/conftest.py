"""Shared fixtures for the county scraper tests."""

import io
from unittest import mock

import pytest
from playwright.sync_api import TimeoutError as PlaywrightTimeout
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from county_scrapers.common.pdf_text import PdfTextExtractor
from county_scrapers.common.session import ScrapeSession
from database.models import Base


class FakePdfTextExtractor(PdfTextExtractor):
    """Returns canned text and records what it was asked to parse."""

    def __init__(self, text=''):
        self.text = text
        self.calls = []

    def extract_text(self, data):
        self.calls.append(data)
        return self.text


def make_element(text=None, attributes=None):
    """Mock ElementHandle with text_content() and get_attribute()."""
    attributes = attributes or {}
    element = mock.MagicMock()
    element.text_content.return_value = text
    element.get_attribute.side_effect = lambda name: attributes.get(name)
    return element


def make_page(body_texts=(), elements=None, url='https://qpublic.schneidercorp.com/Application.aspx?PageID=1', modal=False):
    """
    Mock Playwright page.

    Args:
        body_texts: Successive document.body.innerText values
        elements: selector -> element for query_selector (others give None)
        url: page.url
        modal: Whether the terms modal is shown
    """
    elements = elements or {}
    page = mock.MagicMock()
    page.url = url
    page.evaluate.side_effect = list(body_texts)
    page.query_selector.side_effect = lambda selector: elements.get(selector)

    def wait_for_selector(selector, timeout=None):
        if selector == '.modal' and not modal:
            raise PlaywrightTimeout('Timeout 5000ms exceeded.')
        return mock.MagicMock()

    page.wait_for_selector.side_effect = wait_for_selector
    return page


def make_session(adapter, page):
    return ScrapeSession(adapter=adapter, page=page, context=mock.MagicMock())


@pytest.fixture
def fake_pdf_extractor():
    return FakePdfTextExtractor()


@pytest.fixture
def session_factory():
    """Session factory for an in-memory SQLite scrape_cache."""
    engine = create_engine(
        'sqlite://',
        connect_args={'check_same_thread': False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


def make_notice_pdf(rows):
    """Two-column PDF: each (label, value) row drawn at the same height."""
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=letter)
    y = 700
    for label, value in rows:
        pdf.drawString(72, y, label)
        pdf.drawString(320, y, value)
        y -= 20
    pdf.save()
    return buffer.getvalue()
