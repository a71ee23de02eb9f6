import pytest
from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

from apps.transactions.domain.exceptions import ValidationError
from apps.transactions.domain.models import (
    ConvertedTransaction,
    ExchangeRateQuote,
    NewTransaction,
    months_before,
    round_amount,
)

TODAY = date(2025, 8, 23)


class TestNewTransaction:
    """Tests for NewTransaction.build validation rules."""

    def test_build_valid(self):
        tx = NewTransaction.build("New MacBook Pro", "2025-08-20", "2500.00", today=TODAY)

        assert tx.description == "New MacBook Pro"
        assert tx.transaction_date == date(2025, 8, 20)
        assert tx.purchase_amount == Decimal("2500.00")

    def test_build_accepts_date_and_decimal(self):
        tx = NewTransaction.build("Coffee", date(2025, 8, 23), Decimal("3.5"), today=TODAY)

        assert tx.transaction_date == TODAY
        assert tx.purchase_amount == Decimal("3.50")

    def test_amount_rounded_half_up_to_cents(self):
        tx = NewTransaction.build("Coffee", TODAY, "10.005", today=TODAY)

        assert tx.purchase_amount == Decimal("10.01")

    @pytest.mark.parametrize("amount", ["0", "-1", "-0.01", "0.004"])
    def test_non_positive_amount_rejected(self, amount):
        with pytest.raises(ValidationError) as exc_info:
            NewTransaction.build("Coffee", TODAY, amount, today=TODAY)

        assert exc_info.value.errors == {"purchaseAmount": "must be greater than 0"}

    @pytest.mark.parametrize("amount", ["abc", None, "NaN", "Infinity"])
    def test_non_numeric_amount_rejected(self, amount):
        with pytest.raises(ValidationError) as exc_info:
            NewTransaction.build("Coffee", TODAY, amount, today=TODAY)

        assert exc_info.value.errors["purchaseAmount"] == "must be a number"

    def test_future_date_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            NewTransaction.build("Coffee", TODAY + timedelta(days=1), "10", today=TODAY)

        assert exc_info.value.errors == {
            "transactionDate": "must be a date in the past or in the present"
        }

    @pytest.mark.parametrize("value", ["2025-02-30", "20-08-2025", "yesterday", None])
    def test_malformed_date_rejected(self, value):
        with pytest.raises(ValidationError) as exc_info:
            NewTransaction.build("Coffee", value, "10", today=TODAY)

        assert "transactionDate" in exc_info.value.errors

    def test_retention_window(self):
        old_date = TODAY - timedelta(days=366)

        with pytest.raises(ValidationError) as exc_info:
            NewTransaction.build("Coffee", old_date, "10", today=TODAY, retention_days=365)

        assert exc_info.value.errors == {"transactionDate": "must be within the last 365 days"}

    def test_no_retention_window_by_default(self):
        tx = NewTransaction.build("Coffee", date(2001, 1, 1), "10", today=TODAY)

        assert tx.transaction_date == date(2001, 1, 1)

    def test_description_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            NewTransaction.build("a" * 51, TODAY, "10", today=TODAY)

        assert exc_info.value.errors == {"description": "size must be between 0 and 50"}

    def test_description_blank(self):
        with pytest.raises(ValidationError) as exc_info:
            NewTransaction.build("   ", TODAY, "10", today=TODAY)

        assert exc_info.value.errors == {"description": "must not be blank"}

    def test_all_errors_reported_together(self):
        with pytest.raises(ValidationError) as exc_info:
            NewTransaction.build("a" * 51, TODAY + timedelta(days=1), "0", today=TODAY)

        assert set(exc_info.value.errors) == {"description", "transactionDate", "purchaseAmount"}


class TestHelpers:

    def test_round_amount(self):
        assert round_amount(Decimal("550.005")) == Decimal("550.01")
        assert round_amount(Decimal("550.004")) == Decimal("550.00")

    @pytest.mark.parametrize("value, months, expected", [
        (date(2024, 8, 20), 6, date(2024, 2, 20)),
        (date(2024, 1, 15), 6, date(2023, 7, 15)),
        (date(2024, 8, 31), 6, date(2024, 2, 29)),
        (date(2023, 8, 31), 6, date(2023, 2, 28)),
        (date(2024, 3, 10), 0, date(2024, 3, 10)),
    ])
    def test_months_before(self, value, months, expected):
        assert months_before(value, months) == expected


class TestExchangeRateQuote:

    def test_quote_fields(self):
        quote = ExchangeRateQuote(currency="Brazil-Real", record_date=date(2024, 6, 30), rate=Decimal("5.434"))

        assert quote.currency == "Brazil-Real"
        assert quote.rate == Decimal("5.434")
        assert quote.retrieved_at is not None

    def test_non_positive_rate_rejected(self):
        with pytest.raises(ValueError):
            ExchangeRateQuote(currency="Brazil-Real", record_date=date(2024, 6, 30), rate=Decimal("0"))


def test_converted_transaction_is_immutable():
    converted = ConvertedTransaction(
        id=uuid4(),
        description="Test Purchase",
        transaction_date=date(2024, 8, 20),
        original_purchase_amount=Decimal("100.00"),
        exchange_rate=Decimal("5.5"),
        converted_amount=Decimal("550.00"),
    )

    with pytest.raises(Exception):
        converted.converted_amount = Decimal("0")
