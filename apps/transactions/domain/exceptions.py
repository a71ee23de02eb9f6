"""
Domain exceptions.
The API layer maps each of them to an HTTP status.
"""


class TransactionServiceError(Exception):
    """Base class for every expected business failure."""


class ValidationError(TransactionServiceError):
    """
    Input rejected by a domain rule.

    `errors` maps the offending field to a human-readable message.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))


class TransactionNotFoundError(TransactionServiceError):

    def __init__(self, transaction_id):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction not found with id: {transaction_id}")


class RateUnavailableError(TransactionServiceError):
    """
    Raised by the exchange rate gateway when the upstream has no usable rate
    (no data for the window, unsupported currency, timeout, outage).
    """

    def __init__(self, currency: str, reason: str = "no exchange rate available"):
        self.currency = currency
        self.reason = reason
        super().__init__(f"{reason} for {currency}")


class ExchangeRateNotFoundError(TransactionServiceError):
    """Business error surfaced to clients when a conversion is impossible."""

    def __init__(self, currency: str):
        self.currency = currency
        super().__init__(f"Could not retrieve exchange rates for {currency}")
