"""
Mock provider for development and tests.
Generates deterministic, realistic exchange rates without network access.
"""

import logging
import random
from datetime import date
from decimal import Decimal

from apps.transactions.domain.exceptions import RateUnavailableError
from apps.transactions.domain.interfaces import BaseExchangeRateProvider
from apps.transactions.domain.models import ExchangeRateQuote

logger = logging.getLogger(__name__)


class MockProvider(BaseExchangeRateProvider):
    """
    Mock provider that derives a rate from a fixed table.
    Useful for:
    - Testing without external API calls
    - Local development and load testing without hitting the Treasury API
    """

    # Units of each currency per US Dollar (approximate real-world values)
    BASE_RATES = {
        "Brazil-Real": Decimal("5.0"),
        "Canada-Dollar": Decimal("1.35"),
        "Euro Zone-Euro": Decimal("0.92"),
        "Japan-Yen": Decimal("150.0"),
        "Mexico-Peso": Decimal("17.0"),
        "United Kingdom-Pound": Decimal("0.79"),
    }

    def get_exchange_rate_data(self, currency: str, date_from: date, date_to: date) -> ExchangeRateQuote:
        """
        Generate a mock rate for `date_to` with small variation.

        The variation is seeded by currency and date, so the same request
        always yields the same rate.
        """
        base_rate = self.BASE_RATES.get(currency)
        if base_rate is None:
            logger.warning("MockProvider: unsupported currency '%s'", currency)
            raise RateUnavailableError(currency)

        # ±2% variation, reproducible per currency and date
        rng = random.Random(f"{currency}{date_to.isoformat()}")
        variation = Decimal(str(rng.uniform(0.98, 1.02)))
        rate = (base_rate * variation).quantize(Decimal("0.001"))

        return ExchangeRateQuote(currency=currency, record_date=date_to, rate=rate)
