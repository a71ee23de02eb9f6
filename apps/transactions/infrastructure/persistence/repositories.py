"""
Repository pattern implementation.
Abstracts database access to decouple domain logic from persistence.
"""

import logging
from datetime import date
from decimal import Decimal
from uuid import UUID

from django.conf import settings
from django.utils import timezone

from apps.transactions.domain.exceptions import TransactionNotFoundError
from apps.transactions.domain.models import NewTransaction
from apps.transactions.infrastructure.persistence.models import Transaction

logger = logging.getLogger(__name__)


class TransactionRepository:
    """Repository for Transaction aggregate."""

    @staticmethod
    def create(
        description: str,
        transaction_date: date | str,
        purchase_amount: Decimal | str | int | float,
    ) -> Transaction:
        """
        Validate and persist a new transaction.

        The id is a fresh UUID4 generated per instance, so concurrent
        creations never need to coordinate.

        Raises:
            ValidationError: if any field breaks a domain rule
        """
        new_transaction = NewTransaction.build(
            description,
            transaction_date,
            purchase_amount,
            today=timezone.localdate(),
            retention_days=settings.TRANSACTION_RETENTION_DAYS,
        )

        transaction = Transaction(
            description=new_transaction.description,
            transaction_date=new_transaction.transaction_date,
            purchase_amount=new_transaction.purchase_amount,
        )
        transaction.save()
        logger.debug("Transaction %s persisted", transaction.id)
        return transaction

    @staticmethod
    def get(transaction_id: UUID | str) -> Transaction:
        """
        Get transaction by id.

        Raises:
            TransactionNotFoundError: if no record exists, including when
                `transaction_id` is not a valid UUID
        """
        try:
            pk = transaction_id if isinstance(transaction_id, UUID) else UUID(str(transaction_id))
        except ValueError:
            raise TransactionNotFoundError(transaction_id)

        try:
            return Transaction.objects.get(pk=pk)
        except Transaction.DoesNotExist:
            raise TransactionNotFoundError(transaction_id)
