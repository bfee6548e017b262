"""
Price fetcher tests.
"""
from datetime import datetime, timezone as dt_timezone
from decimal import Decimal
from unittest import mock

import pytest
import requests

from modules.prices.dtos import PriceQuote
from modules.prices.exceptions import PriceFetcherError, PriceNotFoundError
from modules.prices.services import PriceFetcherService, build_sources
from modules.prices.sources import PriceSource, TileExpertPriceSource
from modules.prices.sources.tile_expert import (
    detect_currency,
    extract_price_text,
    parse_price_value,
)

PRODUCT_PAGE = """<html><body>
<h1>Marble tile</h1>
<div class="product-price">1.234,56 €</div>
</body></html>"""

PLAIN_PAGE = "<html><body><p>Now only 59.90 € per m2</p></body></html>"


def make_quote(price='10.00', **overrides):
    fields = {
        'price': Decimal(price),
        'currency': 'EUR',
        'factory': 'cobsa',
        'collection': 'manual',
        'article': 'manu7530bcbm',
        'fetched_at': datetime(2024, 5, 1, 12, 0, tzinfo=dt_timezone.utc),
        'source_url': 'https://tile.expert/fr/tile/cobsa/manual/a/manu7530bcbm',
    }
    fields.update(overrides)
    return PriceQuote(**fields)


def page_session(html='', error=None):
    session = mock.Mock(spec=requests.Session)
    session.headers = {}
    if error is not None:
        session.get.side_effect = error
    else:
        response = mock.Mock(text=html)
        response.raise_for_status.return_value = None
        session.get.return_value = response
    return session


class StaticSource(PriceSource):

    def __init__(self, name, result):
        self.name = name
        self.result = result
        self.calls = 0

    def fetch(self, factory, collection, article):
        self.calls += 1
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class TestPriceParsing:

    @pytest.mark.parametrize('text, expected', [
        ('1.234,56 €', Decimal('1234.56')),
        ('59,90', Decimal('59.90')),
        ('€ 38.85', Decimal('38.85')),
        ('$120', Decimal('120')),
        ('12.5 EUR', Decimal('12.5')),
    ])
    def test_parse_price_value(self, text, expected):
        assert parse_price_value(text) == expected

    @pytest.mark.parametrize('text', ['0', '0,00 €', 'abc', '', '-5'])
    def test_rejects_non_positive_or_garbage(self, text):
        with pytest.raises(PriceNotFoundError):
            parse_price_value(text)

    @pytest.mark.parametrize('text, expected', [
        ('12 €', 'EUR'),
        ('12 eur', 'EUR'),
        ('$12', 'USD'),
        ('£12', 'GBP'),
        ('12', None),
    ])
    def test_detect_currency(self, text, expected):
        assert detect_currency(text) == expected

    def test_extract_from_price_element(self):
        assert extract_price_text(PRODUCT_PAGE) == '1.234,56 €'

    def test_extract_from_data_attribute(self):
        html = '<span data-price="1">  42,00 € </span>'

        assert extract_price_text(html) == '42,00 €'

    def test_extract_falls_back_to_regex(self):
        assert extract_price_text(PLAIN_PAGE) == '59.90'

    def test_extract_without_price(self):
        assert extract_price_text('<html><body>Sold out</body></html>') is None


class TestTileExpertPriceSource:

    def test_fetch_parses_page(self):
        session = page_session(PRODUCT_PAGE)
        source = TileExpertPriceSource(session=session)

        quote = source.fetch('cobsa', 'manual', 'manu7530bcbm')

        session.get.assert_called_once_with(
            'https://tile.expert/fr/tile/cobsa/manual/a/manu7530bcbm',
            timeout=source.timeout,
        )
        assert quote.price == Decimal('1234.56')
        assert quote.currency == 'EUR'
        assert quote.source_url.endswith('/a/manu7530bcbm')

    def test_second_fetch_is_served_from_cache(self):
        session = page_session(PRODUCT_PAGE)
        source = TileExpertPriceSource(session=session)

        first = source.fetch('cobsa', 'manual', 'manu7530bcbm')
        second = source.fetch('cobsa', 'manual', 'manu7530bcbm')

        assert session.get.call_count == 1
        assert second == first

    def test_cache_key_is_stable(self):
        key = TileExpertPriceSource.build_cache_key('cobsa', 'manual', 'manu7530bcbm')

        assert key == TileExpertPriceSource.build_cache_key('cobsa', 'manual', 'manu7530bcbm')
        assert key.startswith('price_')
        assert key != TileExpertPriceSource.build_cache_key('cobsa', 'manual', 'other')

    def test_transport_error(self):
        session = page_session(error=requests.ConnectionError('connection refused'))
        source = TileExpertPriceSource(session=session)

        with pytest.raises(PriceFetcherError):
            source.fetch('cobsa', 'manual', 'manu7530bcbm')

    def test_http_error(self):
        session = page_session(PRODUCT_PAGE)
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError('404 Client Error')
        source = TileExpertPriceSource(session=session)

        with pytest.raises(PriceFetcherError):
            source.fetch('cobsa', 'manual', 'missing')

    def test_page_without_price(self):
        source = TileExpertPriceSource(session=page_session('<p>Sold out</p>'))

        with pytest.raises(PriceNotFoundError, match='Price not found on the page'):
            source.fetch('cobsa', 'manual', 'manu7530bcbm')

    def test_supports_only_its_name(self):
        source = TileExpertPriceSource(session=page_session())

        assert source.supports('tile.expert')
        assert not source.supports('other.shop')


class TestPriceFetcherService:

    def test_first_successful_source_wins(self):
        failing = StaticSource('tile.expert', PriceFetcherError('down', source='tile.expert'))
        working = StaticSource('tile.expert', make_quote('12.00'))
        unused = StaticSource('tile.expert', make_quote('99.00'))
        service = PriceFetcherService(sources=[failing, working, unused], default_source='tile.expert')

        quote = service.fetch_price('cobsa', 'manual', 'manu7530bcbm')

        assert quote.price == Decimal('12.00')
        assert (failing.calls, working.calls, unused.calls) == (1, 1, 0)

    def test_only_supporting_sources_are_asked(self):
        other = StaticSource('other.shop', make_quote('1.00'))
        tile = StaticSource('tile.expert', make_quote('2.00'))
        service = PriceFetcherService(sources=[other, tile], default_source='tile.expert')

        assert service.fetch_price('a', 'b', 'c').price == Decimal('2.00')
        assert service.fetch_price('a', 'b', 'c', source='other.shop').price == Decimal('1.00')
        assert service.supported_sources() == ['other.shop', 'tile.expert']

    def test_no_supporting_source(self):
        service = PriceFetcherService(sources=[StaticSource('tile.expert', make_quote())])

        with pytest.raises(PriceFetcherError, match='No price fetcher available for source: other.shop'):
            service.fetch_price('a', 'b', 'c', source='other.shop')

    def test_all_sources_failed(self):
        service = PriceFetcherService(
            sources=[StaticSource('tile.expert', PriceFetcherError('timeout', source='tile.expert'))],
            default_source='tile.expert',
        )

        with pytest.raises(PriceFetcherError, match='All price sources failed'):
            service.fetch_price('a', 'b', 'c')

    def test_price_missing_everywhere(self):
        service = PriceFetcherService(
            sources=[StaticSource('tile.expert', PriceNotFoundError())],
            default_source='tile.expert',
        )

        with pytest.raises(PriceNotFoundError):
            service.fetch_price('a', 'b', 'c')

    def test_build_sources_skips_unknown_names(self):
        sources = build_sources(['tile.expert', 'nope'])

        assert [source.name for source in sources] == ['tile.expert']


class TestPriceQuote:

    def test_dict_form(self):
        data = make_quote('38.85').to_dict()

        assert data['price'] == 38.85
        assert data['fetched_at'] == '2024-05-01T12:00:00+00:00'
        assert PriceQuote.from_dict(data) == make_quote('38.85')


@pytest.mark.django_db
class TestPriceEndpoint:
    url = '/api/price'
    params = {'factory': 'cobsa', 'collection': 'manual', 'article': 'manu7530bcbm'}

    @pytest.fixture
    def fetch_price(self):
        with mock.patch('modules.prices.views.price_fetcher_service.fetch_price') as fetch_price:
            yield fetch_price

    def test_price(self, api_client, fetch_price):
        fetch_price.return_value = make_quote('38.85')

        response = api_client.get(self.url, self.params)

        assert response.status_code == 200
        assert response.data == {
            'price': 38.85,
            'currency': 'EUR',
            'factory': 'cobsa',
            'collection': 'manual',
            'article': 'manu7530bcbm',
            'fetched_at': '2024-05-01T12:00:00+00:00',
            'source_url': 'https://tile.expert/fr/tile/cobsa/manual/a/manu7530bcbm',
        }
        fetch_price.assert_called_once_with(factory='cobsa', collection='manual', article='manu7530bcbm')

    @pytest.mark.parametrize('missing', ['factory', 'collection', 'article'])
    def test_missing_parameter(self, api_client, fetch_price, missing):
        params = {key: value for key, value in self.params.items() if key != missing}

        response = api_client.get(self.url, params)

        assert response.status_code == 400
        assert missing in response.data['details']
        fetch_price.assert_not_called()

    def test_too_long_parameter(self, api_client, fetch_price):
        response = api_client.get(self.url, {**self.params, 'factory': 'x' * 101})

        assert response.status_code == 400
        fetch_price.assert_not_called()

    def test_price_not_found(self, api_client, fetch_price):
        fetch_price.side_effect = PriceNotFoundError('Price not found on the page')

        response = api_client.get(self.url, self.params)

        assert response.status_code == 404
        assert response.data['error'] == 'Price not found'
        assert response.data['code'] == 'PRICE_NOT_FOUND'

    def test_source_unavailable(self, api_client, fetch_price):
        fetch_price.side_effect = PriceFetcherError('Failed to fetch price from external source: timeout')

        response = api_client.get(self.url, self.params)

        assert response.status_code == 503
        assert response.data['error'] == 'Service unavailable'
        assert response.data['code'] == 'PRICE_SOURCE_UNAVAILABLE'
