"""
Serializers for the transaction API.
Request serializers only check structure (presence, types, formats);
business rules are enforced by the domain.
"""

from django.core.validators import RegexValidator
from rest_framework import serializers

CURRENCY_PATTERN = r'^[^<>"]+-[^<>"]+$'
INVALID_CURRENCY_MESSAGE = "Currency format is invalid or contains prohibited characters."


class CreateTransactionRequestSerializer(serializers.Serializer):
    description = serializers.CharField(
        allow_blank=True,
        trim_whitespace=False,
        help_text="Brief description of the transaction, max 50 characters.",
    )
    transactionDate = serializers.DateField(
        input_formats=["%Y-%m-%d"],
        help_text="Date of the transaction in YYYY-MM-DD format.",
    )
    purchaseAmount = serializers.DecimalField(
        max_digits=None,
        decimal_places=None,
        help_text="Total purchase amount in USD, must be a positive value.",
    )


class CreateTransactionResponseSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True, help_text="Unique identifier of the transaction (UUID)")


class CurrencyQuerySerializer(serializers.Serializer):
    currency = serializers.CharField(
        required=False,
        allow_blank=True,
        validators=[RegexValidator(CURRENCY_PATTERN, message=INVALID_CURRENCY_MESSAGE)],
        help_text="Target currency (e.g. Brazil-Real); when absent no conversion is made.",
    )


class ConvertedTransactionResponseSerializer(serializers.Serializer):
    id = serializers.UUIDField(read_only=True)
    description = serializers.CharField(read_only=True)
    transactionDate = serializers.DateField(source="transaction_date", read_only=True)
    originalPurchaseAmount = serializers.DecimalField(
        source="original_purchase_amount",
        max_digits=None,
        decimal_places=2,
        read_only=True,
    )
    exchangeRate = serializers.DecimalField(
        source="exchange_rate",
        max_digits=None,
        decimal_places=None,
        read_only=True,
    )
    convertedAmount = serializers.DecimalField(
        source="converted_amount",
        max_digits=None,
        decimal_places=2,
        read_only=True,
    )


class ErrorResponseSerializer(serializers.Serializer):
    timestamp = serializers.DateTimeField()
    status = serializers.IntegerField()
    error = serializers.CharField()
    messages = serializers.DictField(child=serializers.CharField())
    path = serializers.CharField()
