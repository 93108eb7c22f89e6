"""Value objects shared by the county scrapers."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple


class TaxBillStrategy(Enum):
    """How a county exposes its current-year tax amount."""

    SECONDARY_PAGE_POLL = 'secondary-page-poll'
    DIRECT_PDF = 'direct-pdf'
    PDF_FROM_ASSESSMENT_LINK = 'pdf-from-assessment-link'
    NONE = 'none'


@dataclass(frozen=True)
class TaxBillSettings:
    """County-specific inputs for the tax bill resolver."""

    url_builder: Optional[Callable[[str, int], Optional[str]]] = None
    loaded_marker: Optional[str] = None
    amount_patterns: Tuple[str, ...] = ()
    homestead_patterns: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CountyAdapterConfig:
    """Everything the engine needs to know about one county portal."""

    county_key: str
    display_name: str
    search_url: str
    address_input_selector: str
    search_button_selector: str
    tax_bill_strategy: TaxBillStrategy = TaxBillStrategy.NONE
    tax_bill: TaxBillSettings = field(default_factory=TaxBillSettings)
    parcel_selectors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ScrapeRequest:
    street_address: str
    county_key: str


@dataclass(frozen=True)
class PageFields:
    """Fields read from the results page text."""

    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    sqft: Optional[int] = None
    homestead_exemption: Optional[bool] = None


@dataclass(frozen=True)
class TaxBillOutcome:
    """What the tax bill resolver recovered; every field may be unknown."""

    property_tax: Optional[str] = None
    tax_record_url: Optional[str] = None
    homestead_exemption: Optional[bool] = None


@dataclass(frozen=True)
class ExtractionResult:
    """
    Final output of one scrape.

    Only ``address`` and ``county`` are guaranteed. ``homestead_exemption``
    of None means the county did not expose it, not that there is none.
    ``parcel_number`` keeps the portal's spacing exactly, and
    ``property_tax`` stays the display string ("15,262.32").
    """

    address: str
    county: str
    bedrooms: Optional[int] = None
    bathrooms: Optional[float] = None
    sqft: Optional[int] = None
    homestead_exemption: Optional[bool] = None
    parcel_number: Optional[str] = None
    qpublic_url: Optional[str] = None
    assessment_pdf_url: Optional[str] = None
    property_tax: Optional[str] = None
    tax_record_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to the JSON shape consumed by callers."""
        return {
            'address': self.address,
            'county': self.county,
            'bedrooms': self.bedrooms,
            'bathrooms': self.bathrooms,
            'sqft': self.sqft,
            'homesteadExemption': self.homestead_exemption,
            'parcelNumber': self.parcel_number,
            'qpublicUrl': self.qpublic_url,
            'assessmentPdfUrl': self.assessment_pdf_url,
            'propertyTax': self.property_tax,
            'taxRecordUrl': self.tax_record_url,
        }
