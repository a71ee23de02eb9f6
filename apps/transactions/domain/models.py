"""
Pure domain entities (POPOs).
No dependency on Django or the ORM.
"""

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from uuid import UUID

from apps.transactions.domain.exceptions import ValidationError

DESCRIPTION_MAX_LENGTH = 50
CENTS = Decimal("0.01")
MAX_PURCHASE_AMOUNT = Decimal("99999999999999999.99")


def round_amount(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def months_before(value: date, months: int) -> date:
    """Same day `months` earlier, clamped to the end of shorter months."""
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


@dataclass(frozen=True)
class NewTransaction:
    """
    A validated transaction that has not been persisted yet.

    Use `NewTransaction.build` to parse raw input; it collects every
    violated rule and raises a single ValidationError.
    """

    description: str
    transaction_date: date
    purchase_amount: Decimal

    @classmethod
    def build(
        cls,
        description,
        transaction_date,
        purchase_amount,
        today: date | None = None,
        retention_days: int | None = None,
    ) -> "NewTransaction":
        today = today or date.today()
        errors: dict[str, str] = {}

        if description is None or not str(description).strip():
            errors["description"] = "must not be blank"
        elif len(str(description)) > DESCRIPTION_MAX_LENGTH:
            errors["description"] = f"size must be between 0 and {DESCRIPTION_MAX_LENGTH}"

        parsed_date = None
        if isinstance(transaction_date, datetime):
            parsed_date = transaction_date.date()
        elif isinstance(transaction_date, date):
            parsed_date = transaction_date
        else:
            try:
                parsed_date = date.fromisoformat(str(transaction_date))
            except (TypeError, ValueError):
                errors["transactionDate"] = "must be a valid date in YYYY-MM-DD format"

        if parsed_date is not None:
            if parsed_date > today:
                errors["transactionDate"] = "must be a date in the past or in the present"
            elif retention_days is not None and parsed_date < today - timedelta(days=retention_days):
                errors["transactionDate"] = f"must be within the last {retention_days} days"

        amount = None
        try:
            amount = round_amount(Decimal(str(purchase_amount)))
        except (InvalidOperation, ValueError):
            errors["purchaseAmount"] = "must be a number"
        if amount is not None and not amount.is_finite():
            errors["purchaseAmount"] = "must be a number"
        elif amount is not None and amount <= 0:
            errors["purchaseAmount"] = "must be greater than 0"
        elif amount is not None and amount > MAX_PURCHASE_AMOUNT:
            errors["purchaseAmount"] = "numeric value out of bounds"

        if errors:
            raise ValidationError(errors)

        return cls(
            description=str(description),
            transaction_date=parsed_date,
            purchase_amount=amount,
        )


@dataclass(frozen=True)
class ExchangeRateQuote:

    currency: str
    record_date: date
    rate: Decimal
    retrieved_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        if self.rate <= 0:
            raise ValueError(f"rate must be positive, got {self.rate}")


@dataclass(frozen=True)
class ConvertedTransaction:
    """A stored transaction enriched with its amount in another currency."""

    id: UUID
    description: str
    transaction_date: date
    original_purchase_amount: Decimal
    exchange_rate: Decimal
    converted_amount: Decimal
