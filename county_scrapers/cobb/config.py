"""Cobb County qPublic and assessment notice configuration."""

COUNTY_KEY = 'cobb'
DISPLAY_NAME = 'Cobb County'

# qPublic (Schneider) address search
SEARCH_URL = (
    'https://qpublic.schneidercorp.com/Application.aspx'
    '?AppID=1051&LayerID=23951&PageTypeID=2&PageID=9967'
)
ADDRESS_INPUT = '#ctlBodyPane_ctl01_ctl01_txtAddress'
SEARCH_BUTTON = '#ctlBodyPane_ctl01_ctl01_btnSearch'

PARCEL_SELECTORS = (
    '[id$="_lblParcelID"]',
    '[id$="_lblParcelNumber"]',
)

# Cobb has no separate tax bill lookup; the assessment notice PDF carries
# the estimated tax and the homestead flag.
TAX_AMOUNT_PATTERNS = (
    r'Estimated\s+(?:Annual\s+)?Tax[^\n]*?\$?\s*([\d,]+\.\d{2})',
    r'Total\s+Tax(?:es)?\s*[:\t ]*\$?\s*([\d,]+\.\d{2})',
)

# The notice prints homestead as a YES/NO cell in the same row as its label.
# Extracted text separates the cells with spaces (pdfplumber) or a tab.
HOMESTEAD_PATTERNS = (
    r'Homestead[^\n]*?[\t ]+(YES|NO)\b',
    r'Homestead\s+Exemption\s*[:\t ]+(YES|NO)\b',
)
