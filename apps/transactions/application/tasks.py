"""
Celery tasks for background processing.
"""

import logging
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict

from celery import shared_task
from django.conf import settings
from django.utils import timezone

from apps.transactions.domain.exceptions import RateUnavailableError
from apps.transactions.domain.models import months_before
from apps.transactions.infrastructure.cache import cache_rate_if_absent
from apps.transactions.infrastructure.providers.registry import get_provider_instance

logger = logging.getLogger(__name__)


@shared_task(name="warm_exchange_rate_cache")
def warm_exchange_rate_cache(
    currency: str,
    transaction_date_str: str,
    record_date_str: str,
    rate_str: str,
) -> Dict:
    """
    Cache `rate` for every day from the record date through the
    transaction date. Days that already have a cached rate are left alone.

    Args:
        currency: Currency the rate applies to (e.g. "Brazil-Real")
        transaction_date_str: Last day to cache, YYYY-MM-DD
        record_date_str: Day the rate was published, YYYY-MM-DD
        rate_str: Exchange rate as a decimal string

    Returns:
        Dict with operation results
    """
    try:
        transaction_date = date.fromisoformat(transaction_date_str)
        record_date = date.fromisoformat(record_date_str)
    except ValueError as e:
        return {
            "success": False,
            "message": f"Invalid date format: {str(e)}",
            "days_cached": 0
        }

    if record_date > transaction_date:
        return {
            "success": False,
            "message": "record_date must be before or equal to transaction_date",
            "days_cached": 0
        }

    rate = Decimal(rate_str)
    logger.debug("Starting cache warming for currency '%s'", currency)

    days_cached = 0
    current_date = record_date
    while current_date <= transaction_date:
        if cache_rate_if_absent(currency, current_date, rate):
            days_cached += 1
        current_date += timedelta(days=1)

    logger.debug("Finished cache warming for currency '%s': %d day(s) cached", currency, days_cached)

    return {
        "success": True,
        "currency": currency,
        "days_cached": days_cached,
    }


@shared_task(name="check_provider_health")
def check_provider_health() -> Dict:
    """
    Probe the configured exchange rate provider with a known currency.

    Status is "healthy" when a rate comes back, "unhealthy" when the
    provider reports no rate, and "error" when it fails unexpectedly.
    """
    provider_name = settings.EXCHANGE_RATE_PROVIDER
    provider = get_provider_instance(provider_name)

    if provider is None:
        return {
            "success": False,
            "provider": provider_name,
            "message": f"Provider '{provider_name}' is not registered",
        }

    today = timezone.localdate()
    currency = settings.HEALTH_CHECK_CURRENCY

    try:
        quote = provider.get_exchange_rate_data(
            currency,
            months_before(today, settings.EXCHANGE_RATE_LOOKBACK_MONTHS),
            today,
        )
        result = {
            "status": "healthy",
            "message": f"{currency} rate {quote.rate} from {quote.record_date}",
        }
    except RateUnavailableError as e:
        result = {"status": "unhealthy", "message": str(e)}
    except Exception as e:
        logger.exception("Health check of provider '%s' failed", provider_name)
        result = {"status": "error", "message": str(e)}

    logger.info("Provider '%s' is %s", provider_name, result["status"])

    return {
        "success": True,
        "provider": provider_name,
        **result,
    }
