"""
ViewSet for the transaction API v1.
POST /transaction stores a transaction; GET /transaction/{id} returns it
converted to the requested currency.
"""

import logging

from rest_framework import viewsets, status
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiExample
from drf_spectacular.types import OpenApiTypes

from apps.transactions.api.v1.exception_handler import RequestValueError
from apps.transactions.api.v1.serializers import (
    ConvertedTransactionResponseSerializer,
    CreateTransactionRequestSerializer,
    CreateTransactionResponseSerializer,
    CurrencyQuerySerializer,
    ErrorResponseSerializer,
)
from apps.transactions.domain.services import DEFAULT_CURRENCY, TransactionService

logger = logging.getLogger(__name__)


@extend_schema(tags=['Transaction Management'])
class TransactionViewSet(viewsets.ViewSet):

    @extend_schema(
        request=CreateTransactionRequestSerializer,
        responses={
            201: CreateTransactionResponseSerializer,
            400: ErrorResponseSerializer,
            500: ErrorResponseSerializer,
        },
        examples=[
            OpenApiExample(
                "New purchase",
                value={
                    "description": "New keyboard for home office",
                    "transactionDate": "2025-08-20",
                    "purchaseAmount": 150.75,
                },
                request_only=True,
            )
        ],
        description="Accepts a transaction and persists it in the database."
    )
    def create(self, request):
        """
        Store a new transaction.

        Body:
        - description: non-blank text, max 50 characters
        - transactionDate: YYYY-MM-DD, not in the future
        - purchaseAmount: positive amount in USD, rounded to cents
        """
        serializer = CreateTransactionRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        logger.info("Received request to store transaction with description: '%s'", data["description"])

        transaction = TransactionService.store_transaction(
            data["description"],
            data["transactionDate"],
            data["purchaseAmount"],
        )

        return Response(
            CreateTransactionResponseSerializer({"id": transaction.id}).data,
            status=status.HTTP_201_CREATED
        )

    @extend_schema(
        parameters=[
            OpenApiParameter("id", OpenApiTypes.UUID, OpenApiParameter.PATH, description="Unique identifier of the transaction (UUID)"),
            OpenApiParameter("currency", OpenApiTypes.STR, required=False, description="Target currency for conversion (e.g. Brazil-Real). If not given no conversion is made"),
        ],
        responses={
            200: ConvertedTransactionResponseSerializer,
            400: ErrorResponseSerializer,
            404: ErrorResponseSerializer,
            500: ErrorResponseSerializer,
        },
        description="Fetches a stored transaction by its ID and converts the purchase amount to the target currency. "
                    "Responds 404 when the transaction does not exist or no exchange rate is available for its date."
    )
    def retrieve(self, request, pk=None):
        query = CurrencyQuerySerializer(data=request.query_params)
        if not query.is_valid():
            raise RequestValueError(query.errors["currency"][0])

        currency = query.validated_data.get("currency")
        logger.info("Received request to convert transaction ID %s to currency %s", pk, currency or DEFAULT_CURRENCY)

        converted = TransactionService.get_converted_transaction(pk, currency)

        return Response(ConvertedTransactionResponseSerializer(converted).data)
