"""PDF download and text extraction for tax bills and assessment notices.

Text is extracted in two tiers:
1. Direct text extraction with pdfplumber (county PDFs are text-based)
2. Tesseract OCR when the direct pass yields almost nothing (scanned notices)

Scanning the text for amounts is left to the caller.
"""

import io
import logging
from abc import ABC, abstractmethod

import pdfplumber
import pytesseract
import requests
from pdf2image import convert_from_bytes

from common.config import config
from county_scrapers.common.errors import PdfFetchError, PdfParseError
from county_scrapers.common.session import USER_AGENT


logger = logging.getLogger(__name__)

# Direct extraction shorter than this is treated as a scanned document
MIN_DIRECT_TEXT_CHARS = 100
OCR_DPI = 200


class PdfTextExtractor(ABC):
    """Turns PDF bytes into plain text."""

    @abstractmethod
    def extract_text(self, data: bytes) -> str:
        """
        Extract text from a PDF.

        Args:
            data: Raw PDF bytes

        Returns:
            Extracted text (may be empty)

        Raises:
            PdfParseError: If the bytes can't be parsed as a PDF
        """


class PdfplumberTextExtractor(PdfTextExtractor):
    """pdfplumber text extraction with an optional Tesseract fallback."""

    def __init__(self, ocr_fallback: bool = None):
        self.ocr_fallback = config.OCR_FALLBACK if ocr_fallback is None else ocr_fallback

    def extract_text(self, data: bytes) -> str:
        if not data:
            raise PdfParseError("Empty PDF body")

        text = self._extract_text_direct(data)

        if len(text.strip()) >= MIN_DIRECT_TEXT_CHARS or not self.ocr_fallback:
            logger.debug(f"Extracted {len(text)} chars via direct extraction")
            return text

        logger.debug("Direct extraction yielded little text, trying OCR...")
        ocr_text = self._extract_text_ocr(data)
        if ocr_text:
            logger.debug(f"Extracted {len(ocr_text)} chars via OCR")
            return ocr_text
        return text

    def _extract_text_direct(self, data: bytes) -> str:
        # The with-block closes the document (and its file handles) even
        # when a page fails to parse.
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = [page.extract_text() or '' for page in pdf.pages]
        except Exception as e:
            raise PdfParseError(f"Could not parse PDF: {e}") from e
        return '\n'.join(pages)

    def _extract_text_ocr(self, data: bytes) -> str:
        try:
            images = convert_from_bytes(data, dpi=OCR_DPI)
        except Exception as e:
            logger.warning(f"Could not rasterize PDF for OCR: {e}")
            return ''

        all_text = []
        try:
            for i, image in enumerate(images):
                logger.debug(f"  OCR processing page {i + 1}/{len(images)}")
                text = pytesseract.image_to_string(image)
                if text:
                    all_text.append(text)
        except Exception as e:
            logger.warning(f"OCR failed: {e}")
        finally:
            for image in images:
                image.close()

        return '\n\n'.join(all_text)


def fetch_pdf(url: str, timeout: int = None) -> bytes:
    """
    Download a PDF. Single attempt; callers degrade on failure.

    Args:
        url: PDF URL
        timeout: Seconds, defaults to config.PDF_FETCH_TIMEOUT

    Returns:
        Raw PDF bytes

    Raises:
        PdfFetchError: On network/HTTP errors or a non-PDF response body
    """
    timeout = timeout or config.PDF_FETCH_TIMEOUT
    logger.debug(f"Fetching PDF: {url}")

    try:
        response = requests.get(url, timeout=timeout, headers={'User-Agent': USER_AGENT})
        response.raise_for_status()
    except requests.RequestException as e:
        raise PdfFetchError(f"Could not fetch {url}: {e}") from e

    data = response.content
    if b'%PDF' not in data[:1024]:
        content_type = response.headers.get('Content-Type', 'unknown')
        raise PdfFetchError(f"Response from {url} is not a PDF (Content-Type: {content_type})")

    return data
