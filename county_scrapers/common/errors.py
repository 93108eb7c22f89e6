"""Exceptions raised by the county scrapers."""


class ScraperError(Exception):
    """Base class for scraper failures."""


class UnsupportedCountyError(ScraperError):
    """County key is not in the adapter registry."""

    def __init__(self, county, supported=()):
        self.county = county
        self.supported = tuple(supported)
        message = f"Unsupported county: {county or 'unknown'}"
        if self.supported:
            message += f". Supported: {', '.join(self.supported)}"
        super().__init__(message)


class BrowserLaunchError(ScraperError):
    """Browser, context or page could not be created."""


class NavigationTimeoutError(ScraperError):
    """The search results page was never reached."""

    def __init__(self, state, message):
        self.state = state
        super().__init__(f"{state.value}: {message}")


class InvalidTransitionError(ScraperError):
    """Navigator was asked to move between states that are not connected."""


class PdfFetchError(ScraperError):
    """PDF could not be downloaded."""


class PdfParseError(ScraperError):
    """PDF bytes could not be turned into text."""


class GeocodingError(ScraperError):
    """Geocoding API returned no usable result."""
