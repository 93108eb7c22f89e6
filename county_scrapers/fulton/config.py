"""Fulton County qPublic and Tax Commissioner configuration."""

COUNTY_KEY = 'fulton'
DISPLAY_NAME = 'Fulton County'

# qPublic (Schneider) address search
SEARCH_URL = (
    'https://qpublic.schneidercorp.com/Application.aspx'
    '?AppID=936&LayerID=18251&PageTypeID=2&PageID=8154'
)
ADDRESS_INPUT = '#ctlBodyPane_ctl01_ctl01_txtAddress'
SEARCH_BUTTON = '#ctlBodyPane_ctl01_ctl01_btnSearch'

# Parcel label on the property summary (text content keeps double spaces)
PARCEL_SELECTORS = (
    '[id$="_lblParcelID"]',
    '[id$="_lblParcelNumber"]',
)

# Tax Commissioner parcel page, rendered client-side after load
TAX_DETAIL_URL_TEMPLATE = (
    'https://fultoncountytaxes.org/property-taxes/parcel'
    '?parcelId={parcel}&taxYear={year}'
)
TAX_PAGE_LOADED_MARKER = 'Payment History'

# {year} is filled in with the tax year before matching
TAX_AMOUNT_PATTERNS = (
    r'^[ \t]*{year}\b[^\n]*?\$?[ \t]*([\d,]+\.\d{2})',
    r'Total\s+(?:Billed|Paid)\s*[:\t ]*\$?\s*([\d,]+\.\d{2})',
)
