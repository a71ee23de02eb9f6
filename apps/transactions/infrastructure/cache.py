"""
Exchange rate cache.
Keys are `<currency>::<date>`, percent-encoded so that currency names with
spaces are valid on every cache backend.
"""

from datetime import date
from decimal import Decimal
from urllib.parse import quote

from django.conf import settings
from django.core.cache import BaseCache, caches


def build_cache_key(*parts) -> str:
    return "::".join(quote(str(part), safe="-") for part in parts)


def get_exchange_rate_cache() -> BaseCache:
    return caches[settings.EXCHANGE_RATE_CACHE]


def get_cached_rate(currency: str, rate_date: date) -> Decimal | None:
    return get_exchange_rate_cache().get(build_cache_key(currency, rate_date))


def cache_rate(currency: str, rate_date: date, rate: Decimal) -> None:
    get_exchange_rate_cache().set(build_cache_key(currency, rate_date), rate)


def cache_rate_if_absent(currency: str, rate_date: date, rate: Decimal) -> bool:
    """Store `rate` unless a value is already cached. Returns True if stored."""
    return get_exchange_rate_cache().add(build_cache_key(currency, rate_date), rate)


def get_unavailable_reason(currency: str, rate_date: date) -> str | None:
    """Reason a recent lookup found no rate, or None."""
    return get_exchange_rate_cache().get(build_cache_key(currency, rate_date, "unavailable"))


def cache_rate_unavailable(currency: str, rate_date: date, reason: str) -> None:
    get_exchange_rate_cache().set(
        build_cache_key(currency, rate_date, "unavailable"),
        reason,
        timeout=settings.EXCHANGE_RATE_UNAVAILABLE_TIMEOUT,
    )
