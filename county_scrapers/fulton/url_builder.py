"""URL construction for Fulton County tax lookups."""

from typing import Optional
from urllib.parse import quote

from county_scrapers.fulton.config import TAX_DETAIL_URL_TEMPLATE


def build_tax_detail_url(parcel_number: str, year: int) -> Optional[str]:
    """
    Build the Tax Commissioner parcel page URL.

    The parcel number is used exactly as scraped. Fulton parcels carry
    meaningful double spaces ("17 0034  LL3967"), and each space is
    percent-encoded rather than collapsed.

    Args:
        parcel_number: Parcel number from the qPublic summary
        year: Tax year

    Returns:
        Full URL or None if no parcel number
    """
    if not parcel_number:
        return None
    return TAX_DETAIL_URL_TEMPLATE.format(parcel=quote(parcel_number, safe=''), year=year)
