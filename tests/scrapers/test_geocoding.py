"""Tests for geocoding-based address normalization."""

from unittest import mock

import pytest
import requests

from county_scrapers.common.address_parser import (
    build_street_address,
    parse_address,
    parse_address_for_scraping,
    strip_cardinal_suffix,
)
from county_scrapers.common.errors import GeocodingError, UnsupportedCountyError


def geocode_response(county_long_name, street_number='2517', route=('Weycroft Circle Northeast', 'Weycroft Cir NE')):
    return {
        'status': 'OK',
        'results': [{
            'formatted_address': '2517 Weycroft Cir NE, Dacula, GA 30019, USA',
            'address_components': [
                {'long_name': street_number, 'short_name': street_number, 'types': ['street_number']},
                {'long_name': route[0], 'short_name': route[1], 'types': ['route']},
                {'long_name': 'Dacula', 'short_name': 'Dacula', 'types': ['locality', 'political']},
                {'long_name': county_long_name, 'short_name': county_long_name,
                 'types': ['administrative_area_level_2', 'political']},
                {'long_name': 'Georgia', 'short_name': 'GA', 'types': ['administrative_area_level_1', 'political']},
            ],
        }],
    }


@pytest.fixture
def mock_get():
    with mock.patch('county_scrapers.common.address_parser.requests.get') as patched:
        yield patched


class TestStripCardinalSuffix:
    @pytest.mark.parametrize('address,expected', [
        ('2517 Weycroft Cir NE', '2517 Weycroft Cir'),
        ('6607 Aria Blvd', '6607 Aria Blvd'),
        ('100 Peachtree St SW ', '100 Peachtree St'),
        ('12 North Ave', '12 North Ave'),
    ])
    def test_strip(self, address, expected):
        assert strip_cardinal_suffix(address) == expected


class TestParseAddress:
    """Tests for parse_address()."""

    def test_gwinnett_address(self, mock_get):
        mock_get.return_value.json.return_value = geocode_response('Gwinnett County')

        parsed = parse_address('2517 Weycroft Cir NE, Dacula, GA 30019, USA', api_key='test-key')

        assert parsed['street_address'] == '2517 Weycroft Cir'
        assert parsed['county'] == 'gwinnett'
        assert parsed['is_supported'] is True
        assert mock_get.call_args.kwargs['params']['key'] == 'test-key'

    def test_unsupported_county_flagged(self, mock_get):
        mock_get.return_value.json.return_value = geocode_response('DeKalb County')

        parsed = parse_address('123 Main St, Decatur, GA', api_key='test-key')

        assert parsed['county'] == 'dekalb'
        assert parsed['is_supported'] is False

    def test_zero_results(self, mock_get):
        mock_get.return_value.json.return_value = {'status': 'ZERO_RESULTS', 'results': []}

        with pytest.raises(GeocodingError):
            parse_address('nowhere', api_key='test-key')

    def test_request_failure(self, mock_get):
        mock_get.side_effect = requests.Timeout('timed out')

        with pytest.raises(GeocodingError):
            parse_address('2517 Weycroft Cir NE', api_key='test-key')

    def test_missing_api_key(self, mock_get):
        with mock.patch('county_scrapers.common.address_parser.config') as mock_config:
            mock_config.GOOGLE_MAPS_API_KEY = None
            with pytest.raises(ValueError):
                parse_address('2517 Weycroft Cir NE')
        mock_get.assert_not_called()


class TestParseAddressForScraping:
    def test_returns_street_and_county(self, mock_get):
        mock_get.return_value.json.return_value = geocode_response('Gwinnett County')

        assert parse_address_for_scraping('2517 Weycroft Cir NE, Dacula, GA', api_key='k') == {
            'street_address': '2517 Weycroft Cir',
            'county': 'gwinnett',
        }

    def test_unsupported_county_raises(self, mock_get):
        mock_get.return_value.json.return_value = geocode_response('DeKalb County')

        with pytest.raises(UnsupportedCountyError) as exc_info:
            parse_address_for_scraping('123 Main St, Decatur, GA', api_key='k')
        assert exc_info.value.county == 'dekalb'


def test_build_street_address_without_number():
    components = [{'long_name': 'Aria Boulevard', 'short_name': 'Aria Blvd', 'types': ['route']}]
    assert build_street_address(components) == 'Aria Blvd'
