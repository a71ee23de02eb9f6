from abc import ABC, abstractmethod
from datetime import date

from apps.transactions.domain.models import ExchangeRateQuote


class BaseExchangeRateProvider(ABC):
    @abstractmethod
    def get_exchange_rate_data(self, currency: str, date_from: date, date_to: date) -> ExchangeRateQuote:
        """
        Return the most recent rate published for `currency` between
        `date_from` and `date_to` (inclusive).

        Raises RateUnavailableError when no rate can be obtained.
        """
