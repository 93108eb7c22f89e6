"""Gwinnett County qPublic and tax bill configuration."""

COUNTY_KEY = 'gwinnett'
DISPLAY_NAME = 'Gwinnett County'

# qPublic (Schneider) address search
SEARCH_URL = (
    'https://qpublic.schneidercorp.com/Application.aspx'
    '?AppID=1282&LayerID=43872&PageTypeID=2&PageID=16058'
)
ADDRESS_INPUT = '#ctlBodyPane_ctl02_ctl01_txtAddress'
SEARCH_BUTTON = '#ctlBodyPane_ctl02_ctl01_btnSearch'

PARCEL_SELECTORS = (
    '[id$="_lblParcelID"]',
    '[id$="_lblParcelNumber"]',
)

# Tax Commissioner publishes one bill PDF per parcel and year.
# Gwinnett parcels contain a space ("R7058 149"), encoded as %20.
TAX_BILL_PDF_URL_TEMPLATE = (
    'https://www.gwinnetttaxcommissioner.com/PropTaxBills/{year}/{parcel}.pdf'
)

TAX_AMOUNT_PATTERNS = (
    r'Total\s+Due\s*[:\t ]*\$?\s*([\d,]+\.\d{2})',
    r'Net\s+Tax\s*[:\t ]*\$?\s*([\d,]+\.\d{2})',
    r'Total\s+Tax(?:es)?\s*[:\t ]*\$?\s*([\d,]+\.\d{2})',
)
