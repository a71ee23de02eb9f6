import logging
from datetime import date
from decimal import Decimal, InvalidOperation

import requests
from django.conf import settings

from apps.transactions.domain.exceptions import RateUnavailableError
from apps.transactions.domain.interfaces import BaseExchangeRateProvider
from apps.transactions.domain.models import ExchangeRateQuote

logger = logging.getLogger(__name__)

RATES_OF_EXCHANGE_PATH = "/v1/accounting/od/rates_of_exchange"


class TreasuryProvider(BaseExchangeRateProvider):
    """
    US Treasury Fiscal Data provider.
    Uses the rates_of_exchange dataset, which publishes one rate per
    currency per quarter (plus mid-quarter amendments).
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or settings.TREASURY_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.TREASURY_API_TIMEOUT

    def get_exchange_rate_data(self, currency: str, date_from: date, date_to: date) -> ExchangeRateQuote:
        """
        Fetch the latest rate for `currency` published within the window.

        Args:
            currency: Treasury country-currency description (e.g. "Brazil-Real")
            date_from: Earliest acceptable record date
            date_to: Latest acceptable record date

        Returns:
            ExchangeRateQuote for the most recent record in the window

        Raises:
            RateUnavailableError: on timeout, HTTP error, malformed payload
                or when the window holds no record
        """
        # Format: .../rates_of_exchange?fields=exchange_rate,record_date
        #   &filter=country_currency_desc:eq:Brazil-Real,record_date:gte:2024-02-20,record_date:lte:2024-08-20
        #   &sort=-record_date&page[size]=1
        params = {
            "fields": "exchange_rate,record_date",
            "filter": (
                f"country_currency_desc:eq:{currency},"
                f"record_date:gte:{date_from.isoformat()},"
                f"record_date:lte:{date_to.isoformat()}"
            ),
            "sort": "-record_date",
            "page[size]": 1,
        }

        logger.info("Calling Treasury API for currency '%s' from %s to %s", currency, date_from, date_to)

        try:
            response = requests.get(
                f"{self.base_url}{RATES_OF_EXCHANGE_PATH}",
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()

            # Response format: {"data": [{"exchange_rate": "5.434", "record_date": "2024-06-30"}], ...}
            records = data.get("data") or []
            if not records:
                logger.warning("Treasury API returned no rate for '%s' from %s to %s", currency, date_from, date_to)
                raise RateUnavailableError(currency)

            record = records[0]
            quote = ExchangeRateQuote(
                currency=currency,
                record_date=date.fromisoformat(record["record_date"]),
                rate=Decimal(str(record["exchange_rate"])),
            )

        except requests.exceptions.Timeout:
            logger.error("Timeout calling Treasury API for currency '%s'", currency)
            raise RateUnavailableError(currency, "timeout calling Treasury API")
        except requests.exceptions.HTTPError as e:
            logger.error("HTTP error from Treasury API for currency '%s': %s", currency, e)
            raise RateUnavailableError(currency, "Treasury API error")
        except requests.exceptions.RequestException as e:
            logger.error("Error calling Treasury API for currency '%s': %s", currency, e)
            raise RateUnavailableError(currency, "Treasury API unreachable")
        except (AttributeError, KeyError, TypeError, ValueError, InvalidOperation) as e:
            logger.error("Invalid response from Treasury API for currency '%s': %s", currency, e)
            raise RateUnavailableError(currency, "invalid Treasury API response")

        logger.info("Treasury API returned rate %s from %s for currency '%s'", quote.rate, quote.record_date, currency)
        return quote
