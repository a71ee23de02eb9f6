"""
Domain services - Core business logic.
Exchange rate lookup with caching, and the transaction conversion flow.
"""

import logging
from datetime import date
from decimal import Decimal
from uuid import UUID

from django.conf import settings
from kombu.exceptions import OperationalError

from apps.transactions.application.tasks import warm_exchange_rate_cache
from apps.transactions.domain.exceptions import ExchangeRateNotFoundError, RateUnavailableError
from apps.transactions.domain.models import ConvertedTransaction, months_before, round_amount
from apps.transactions.infrastructure.cache import (
    cache_rate,
    cache_rate_unavailable,
    get_cached_rate,
    get_unavailable_reason,
)
from apps.transactions.infrastructure.persistence.models import Transaction
from apps.transactions.infrastructure.persistence.repositories import TransactionRepository
from apps.transactions.infrastructure.providers.registry import get_configured_provider

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "United States-Dollar"


class ExchangeRateService:
    """
    Domain service that resolves the exchange rate in effect on a date.

    Lookup strategy:
    1. Blank currency means no conversion (rate 1)
    2. Return the cached rate for (currency, date) if present, or fail fast
       if a recent lookup for it found nothing
    3. Otherwise ask the provider for the latest rate published in the
       look-back window ending on the date
    4. Cache the result and warm the cache for every day the same rate
       was in effect
    5. Raise RateUnavailableError if the provider has nothing and remember
       the miss for EXCHANGE_RATE_UNAVAILABLE_TIMEOUT seconds
    """

    @staticmethod
    def get_exchange_rate(currency: str | None, transaction_date: date) -> Decimal:
        """
        Get the exchange rate for `currency` on `transaction_date`.

        Raises:
            RateUnavailableError: if no rate can be obtained

        Example:
            >>> ExchangeRateService.get_exchange_rate("Brazil-Real", date(2024, 8, 20))
            Decimal('5.434')
        """
        if not currency or not currency.strip():
            logger.warning("No currency given, no conversion applied")
            return Decimal("1")

        cached = get_cached_rate(currency, transaction_date)
        if cached is not None:
            logger.debug("Rate found in cache: %s on %s", currency, transaction_date)
            return cached

        reason = get_unavailable_reason(currency, transaction_date)
        if reason is not None:
            logger.debug("Recent lookup found no rate: %s on %s", currency, transaction_date)
            raise RateUnavailableError(currency, reason)

        date_from = months_before(transaction_date, settings.EXCHANGE_RATE_LOOKBACK_MONTHS)
        try:
            quote = get_configured_provider().get_exchange_rate_data(currency, date_from, transaction_date)
        except RateUnavailableError as e:
            cache_rate_unavailable(currency, transaction_date, e.reason)
            raise

        logger.info("Using exchange rate %s from %s for '%s'", quote.rate, quote.record_date, currency)
        cache_rate(currency, transaction_date, quote.rate)

        if quote.record_date < transaction_date:
            try:
                warm_exchange_rate_cache.delay(
                    currency,
                    transaction_date.isoformat(),
                    quote.record_date.isoformat(),
                    str(quote.rate),
                )
            except OperationalError:
                # The rate is already cached for the transaction date
                logger.warning(
                    "Could not schedule cache warming for '%s' from %s", currency, quote.record_date, exc_info=True
                )

        return quote.rate


class TransactionService:
    """Stores transactions and converts them to other currencies."""

    @staticmethod
    def store_transaction(description, transaction_date, purchase_amount) -> Transaction:
        """
        Persist a new transaction.

        Raises:
            ValidationError: if the input breaks a domain rule
        """
        logger.debug("Starting transaction store")
        transaction = TransactionRepository.create(description, transaction_date, purchase_amount)
        logger.info("Transaction %s successfully stored in database", transaction.id)
        return transaction

    @staticmethod
    def get_converted_transaction(transaction_id: UUID | str, currency: str | None) -> ConvertedTransaction:
        """
        Load a transaction and convert its purchase amount to `currency`.

        Raises:
            TransactionNotFoundError: if the transaction does not exist
            ExchangeRateNotFoundError: if no rate is available for the
                transaction date and currency
        """
        logger.debug("Starting transaction %s conversion process", transaction_id)
        transaction = TransactionRepository.get(transaction_id)

        try:
            exchange_rate = ExchangeRateService.get_exchange_rate(currency, transaction.transaction_date)
        except RateUnavailableError as e:
            logger.warning("Conversion of transaction %s failed: %s", transaction_id, e)
            raise ExchangeRateNotFoundError(currency) from e

        converted_amount = round_amount(transaction.purchase_amount * exchange_rate)

        logger.info(
            "Transaction %s successfully converted to currency %s. Final value: %s",
            transaction.id,
            currency or DEFAULT_CURRENCY,
            converted_amount,
        )

        return ConvertedTransaction(
            id=transaction.id,
            description=transaction.description,
            transaction_date=transaction.transaction_date,
            original_purchase_amount=transaction.purchase_amount,
            exchange_rate=exchange_rate,
            converted_amount=converted_amount,
        )
