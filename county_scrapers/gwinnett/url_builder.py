"""URL construction for Gwinnett County tax bills."""

from typing import Optional
from urllib.parse import quote

from county_scrapers.gwinnett.config import TAX_BILL_PDF_URL_TEMPLATE


def build_tax_bill_pdf_url(parcel_number: str, year: int) -> Optional[str]:
    """
    Build the tax bill PDF URL for a parcel.

    Args:
        parcel_number: Parcel number like "R7058 149" (space kept, encoded)
        year: Tax year

    Returns:
        Full URL or None if no parcel number
    """
    if not parcel_number:
        return None
    return TAX_BILL_PDF_URL_TEMPLATE.format(parcel=quote(parcel_number, safe=''), year=year)
