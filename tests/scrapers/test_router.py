"""Tests for the county adapter registry."""

import pytest

from county_scrapers.common.errors import UnsupportedCountyError
from county_scrapers.common.models import TaxBillStrategy
from county_scrapers.router import (
    COUNTY_ADAPTERS,
    SUPPORTED_COUNTIES,
    is_supported,
    normalize_county_key,
    resolve_county,
)


class TestResolveCounty:
    """Tests for resolve_county()."""

    def test_supported_counties(self):
        assert set(SUPPORTED_COUNTIES) == {'fulton', 'gwinnett', 'cobb'}

    @pytest.mark.parametrize('county', ['fulton', 'Fulton', ' FULTON ', 'Fulton County'])
    def test_resolves_case_insensitive(self, county):
        assert resolve_county(county).county_key == 'fulton'

    def test_strategies(self):
        assert resolve_county('fulton').tax_bill_strategy is TaxBillStrategy.SECONDARY_PAGE_POLL
        assert resolve_county('gwinnett').tax_bill_strategy is TaxBillStrategy.DIRECT_PDF
        assert resolve_county('cobb').tax_bill_strategy is TaxBillStrategy.PDF_FROM_ASSESSMENT_LINK

    def test_unsupported_county_raises(self):
        with pytest.raises(UnsupportedCountyError) as exc_info:
            resolve_county('dekalb')
        assert exc_info.value.county == 'dekalb'
        assert 'fulton' in str(exc_info.value)

    def test_empty_county_raises(self):
        with pytest.raises(UnsupportedCountyError):
            resolve_county('')

    def test_adapters_are_complete(self):
        for key, adapter in COUNTY_ADAPTERS.items():
            assert adapter.county_key == key
            assert adapter.search_url.startswith('https://')
            assert adapter.address_input_selector
            assert adapter.search_button_selector
            assert adapter.parcel_selectors


class TestNormalizeCountyKey:
    def test_drops_county_suffix(self):
        assert normalize_county_key('Gwinnett County ') == 'gwinnett'

    def test_none(self):
        assert normalize_county_key(None) == ''

    def test_is_supported(self):
        assert is_supported('Cobb County') is True
        assert is_supported('Dekalb') is False
