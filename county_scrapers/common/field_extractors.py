"""
Ordered fallback extraction of property fields from qPublic page text.

Each field has a chain of strategies. The chain is evaluated top to bottom
and the first strategy whose pattern matches wins; later strategies are not
tried. The order is a tie-break policy (for example, the combined
"Full Bath/Half Bath 3/1" layout beats a bare "Bath 3"), so do not reorder
entries without checking every county layout.

A strategy that does not match is the normal "field not on this layout"
case and yields None rather than an error.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, Tuple

from county_scrapers.common.models import PageFields


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldStrategy:
    """One (pattern, extractor) pair in a field chain."""

    name: str
    pattern: re.Pattern
    extractor: Callable[[re.Match, str], object]

    def apply(self, text: str) -> Tuple[bool, object]:
        """(matched, value); value may be None even when the pattern matched."""
        match = self.pattern.search(text)
        if not match:
            return False, None
        return True, self.extractor(match, text)


def run_chain(chain: Sequence[FieldStrategy], text: str, field: str = None):
    """
    Return the value of the first strategy in ``chain`` that matches.

    Args:
        chain: Ordered strategies
        text: Page (or PDF) text to scan
        field: Field name, for debug logging only

    Returns:
        Value of the first matching strategy (None if it could not be
        parsed), or None when no strategy matched
    """
    if not text:
        return None

    for strategy in chain:
        matched, value = strategy.apply(text)
        if matched:
            # A match ends the chain even if its value could not be parsed
            logger.debug(f"{field or 'field'}: matched '{strategy.name}' -> {value!r}")
            return value

    return None


def parse_int(value: str) -> Optional[int]:
    """Parse '4,118' style numbers, stripping every thousands separator."""
    if value is None:
        return None
    try:
        return int(value.replace(',', ''))
    except ValueError:
        return None


def _first_group_int(match: re.Match, text: str) -> Optional[int]:
    return parse_int(match.group(1))


def _full_half(match: re.Match, text: str) -> float:
    return int(match.group(1)) + int(match.group(2)) * 0.5


def _separate_full_half(match: re.Match, text: str) -> float:
    full_baths = int(match.group(1))
    half_match = HALF_BATHROOMS_PATTERN.search(text)
    half_baths = int(half_match.group(1)) if half_match else 0
    return full_baths + half_baths * 0.5


def _simple_bath(match: re.Match, text: str) -> float:
    return float(match.group(1))


def _yes_no(match: re.Match, text: str) -> bool:
    return match.group(1).lower() in ('yes', 'y')


BEDROOM_CHAIN = (
    FieldStrategy('bedrooms', re.compile(r'Bedroom[s]?\s*[:\s]*(\d+)', re.IGNORECASE), _first_group_int),
)

# Read alongside "Bathrooms N"; that pattern skips the "Bathrooms" in "Half Bathrooms".
HALF_BATHROOMS_PATTERN = re.compile(r'\bHalf\s*Bathrooms\s*[:\s]*(\d+)', re.IGNORECASE)

BATHROOM_CHAIN = (
    # Fulton: "Full Bath/Half Bath\t3/1"
    FieldStrategy(
        'full/half combined',
        re.compile(r'Full\s*Bath/Half\s*Bath\s*\n?\s*(\d+)/(\d+)', re.IGNORECASE),
        _full_half,
    ),
    # Cobb: "Bathrooms 2" plus an optional "Half Bathrooms 1"
    FieldStrategy(
        'separate full and half',
        re.compile(r'(?<!Half\s)\bBathrooms\s*[:\s]*(\d+)', re.IGNORECASE),
        _separate_full_half,
    ),
    FieldStrategy('full bath', re.compile(r'Full\s*Bath[s]?\s*[:\s]*(\d+)', re.IGNORECASE), _simple_bath),
    FieldStrategy('bath', re.compile(r'Bath[s]?\s*[:\s]*(\d+)', re.IGNORECASE), _simple_bath),
)

SQFT_CHAIN = (
    FieldStrategy('res sq ft', re.compile(r'Res\s*Sq\s*Ft\s*\n?\s*([\d,]+)', re.IGNORECASE), _first_group_int),
    FieldStrategy('gross sqft', re.compile(r'GrossSqft\s*\n?\s*([\d,]+)', re.IGNORECASE), _first_group_int),
    FieldStrategy(
        'heated area',
        re.compile(r'Heated\s*(?:Sq\s*Ft|Area)\s*[:\s]*([\d,]+)', re.IGNORECASE),
        _first_group_int,
    ),
)

HOMESTEAD_CHAIN = (
    FieldStrategy(
        'homestead exemption yes/no',
        re.compile(r'Homestead\s*Exemption\s*\n?\s*(Yes|No)\b', re.IGNORECASE),
        _yes_no,
    ),
    FieldStrategy('homestead y/n', re.compile(r'Homestead\s*\n?\s*(Y|N)\b', re.IGNORECASE), _yes_no),
)

# Captures from the first non-blank character to the last one on the line;
# the spacing in between is kept exactly ("17 0034  LL3967").
PARCEL_VALUE_PATTERN = re.compile(r'(\S(?:[^\n\t]*\S)?)')
PARCEL_TEXT_PATTERN = re.compile(
    r'Parcel\s*(?:Number|ID)\s*[:\t ]*\n?[ \t]*(\S(?:[^\n\t]*\S)?)',
    re.IGNORECASE,
)


def extract_bedrooms(text: str) -> Optional[int]:
    return run_chain(BEDROOM_CHAIN, text, 'bedrooms')


def extract_bathrooms(text: str) -> Optional[float]:
    """Full baths plus half of the half baths, e.g. "3/1" -> 3.5."""
    return run_chain(BATHROOM_CHAIN, text, 'bathrooms')


def extract_sqft(text: str) -> Optional[int]:
    return run_chain(SQFT_CHAIN, text, 'sqft')


def extract_homestead(text: str) -> Optional[bool]:
    """True/False when the page states it; None when it is not shown."""
    return run_chain(HOMESTEAD_CHAIN, text, 'homestead')


def clean_parcel_value(raw: Optional[str]) -> Optional[str]:
    """Drop surrounding blanks from a label's text without touching inner spacing."""
    if not raw:
        return None
    match = PARCEL_VALUE_PATTERN.search(raw)
    return match.group(1) if match else None


def extract_parcel_number(text: str, dom_values: Iterable[Optional[str]] = ()) -> Optional[str]:
    """
    Find the parcel number.

    Text read from dedicated parcel labels (``dom_values``, in selector
    order) wins over the page-text pattern because innerText may collapse
    the repeated spaces some counties use.
    """
    for raw in dom_values:
        value = clean_parcel_value(raw)
        if value:
            return value

    if not text:
        return None
    match = PARCEL_TEXT_PATTERN.search(text)
    return match.group(1) if match else None


def extract_fields(text: str) -> PageFields:
    """Run every page-text chain and collect the results."""
    return PageFields(
        bedrooms=extract_bedrooms(text),
        bathrooms=extract_bathrooms(text),
        sqft=extract_sqft(text),
        homestead_exemption=extract_homestead(text),
    )
