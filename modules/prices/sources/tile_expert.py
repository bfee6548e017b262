"""
tile.expert price scraper.

Fetches the article page, reads the price from well-known price elements
and falls back to regex matching over the raw HTML.
"""
import hashlib
import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Optional

import requests
from bs4 import BeautifulSoup
from django.conf import settings
from django.utils import timezone

from shared.infrastructure.cache.redis_cache import RedisCache

from ..dtos import PriceQuote
from ..exceptions import PriceFetcherError, PriceNotFoundError
from .base import PriceSource

logger = logging.getLogger(__name__)


# ============================================================
# Price text parsing
# ============================================================

PRICE_SELECTORS = (
    '.price',
    '.product-price',
    '.price-value',
    '[data-price]',
    '.cost',
    '.amount',
    '.price-current',
    '.current-price',
    '.price-amount',
)

PRICE_PATTERNS = tuple(re.compile(pattern, re.IGNORECASE) for pattern in (
    r'€\s*([0-9]+[,.]?[0-9]*)',
    r'EUR\s*([0-9]+[,.]?[0-9]*)',
    r'€\s*([0-9]+[,.]?[0-9]*)\s*€',
    r'([0-9]+[,.]?[0-9]*)\s*€',
    r'price[:\s]*([0-9]+[,.]?[0-9]*)',
    r'cost[:\s]*([0-9]+[,.]?[0-9]*)',
))

CURRENCY_MARKERS = (
    ('EUR', ('€', 'EUR')),
    ('USD', ('$', 'USD')),
    ('GBP', ('£', 'GBP')),
)


def extract_price_text(html: str) -> Optional[str]:
    """Text of the first matching price element, else the first regex hit in the HTML."""
    soup = BeautifulSoup(html, 'html.parser')
    for selector in PRICE_SELECTORS:
        element = soup.select_one(selector)
        if element is not None:
            return element.get_text(strip=True)

    for pattern in PRICE_PATTERNS:
        match = pattern.search(html)
        if match:
            return match.group(1)
    return None


def parse_price_value(price_text: str) -> Decimal:
    """
    Parse a scraped price into a Decimal.

    A comma marks the European format (1.234,56): dots are thousand
    separators and the comma is the decimal point.

    Raises:
        PriceNotFoundError: If the value is not a positive number.
    """
    cleaned = re.sub(r'[€$£¥]', '', price_text)
    cleaned = re.sub(r'[^\d,.\-]', '', cleaned).strip()
    if ',' in cleaned:
        cleaned = cleaned.replace('.', '').replace(',', '.')
    try:
        price = Decimal(cleaned)
    except InvalidOperation:
        raise PriceNotFoundError(f"Invalid price value: {price_text}")
    if not price.is_finite() or price <= 0:
        raise PriceNotFoundError(f"Invalid price value: {price_text}")
    return price


def detect_currency(price_text: str) -> Optional[str]:
    upper = price_text.upper()
    for code, markers in CURRENCY_MARKERS:
        if any(marker in upper for marker in markers):
            return code
    return None


# ============================================================
# Source
# ============================================================

class TileExpertPriceSource(PriceSource):
    """Price source for tile.expert article pages."""

    name = 'tile.expert'
    BASE_URL = 'https://tile.expert'
    URL_TEMPLATE = '/fr/tile/{factory}/{collection}/a/{article}'

    HEADERS = {
        'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36',
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8',
        'Accept-Language': 'en-US,en;q=0.5',
        'Accept-Encoding': 'gzip, deflate',
        'Connection': 'keep-alive',
    }

    def __init__(self, cache_ttl: int = None, timeout: int = None, session: requests.Session = None):
        self.cache_ttl = cache_ttl or settings.PRICE_CACHE_TTL
        self.timeout = timeout or settings.PRICE_FETCH_TIMEOUT
        self.cache = RedisCache(default_timeout=self.cache_ttl)
        self.session = session or requests.Session()
        self.session.headers.update(self.HEADERS)

    def build_url(self, factory: str, collection: str, article: str) -> str:
        return self.BASE_URL + self.URL_TEMPLATE.format(
            factory=factory,
            collection=collection,
            article=article,
        )

    @staticmethod
    def build_cache_key(factory: str, collection: str, article: str) -> str:
        digest = hashlib.md5(f"{factory}_{collection}_{article}".encode('utf-8')).hexdigest()
        return f"price_{digest}"

    def fetch(self, factory: str, collection: str, article: str) -> PriceQuote:
        url = self.build_url(factory, collection, article)
        cache_key = self.build_cache_key(factory, collection, article)

        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info(f"Price cache hit: {factory}/{collection}/{article}")
            return PriceQuote.from_dict(cached)

        logger.info(f"Fetching price from {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to fetch {url}: {e}")
            raise PriceFetcherError(f"Failed to fetch price from external source: {e}", source=self.name) from e

        quote = self.parse(response.text, factory, collection, article, url)
        self.cache.set(cache_key, quote.to_dict(), self.cache_ttl)
        logger.info(f"Price fetched and cached: {factory}/{collection}/{article} = {quote.price} {quote.currency}")
        return quote

    def parse(self, html: str, factory: str, collection: str, article: str, url: str) -> PriceQuote:
        price_text = extract_price_text(html)
        if not price_text:
            logger.warning(f"No price found on {url}")
            raise PriceNotFoundError('Price not found on the page')

        return PriceQuote(
            price=parse_price_value(price_text),
            currency=detect_currency(price_text) or 'EUR',
            factory=factory,
            collection=collection,
            article=article,
            fetched_at=timezone.now(),
            source_url=url,
        )
