"""
Django ORM models for persistence.
Infrastructure layer: technical storage detail.
"""

import uuid
from django.db import models

from apps.transactions.domain.models import DESCRIPTION_MAX_LENGTH


class BaseModel(models.Model):

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Transaction(BaseModel):

    description = models.CharField(max_length=DESCRIPTION_MAX_LENGTH)
    transaction_date = models.DateField(db_index=True)
    purchase_amount = models.DecimalField(
        max_digits=19,
        decimal_places=2,
    )

    class Meta:
        ordering = ["-transaction_date", "-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(purchase_amount__gt=0),
                name="purchase_amount_positive",
            )
        ]

    def __str__(self):
        return f"{self.description} | {self.transaction_date} | {self.purchase_amount} USD"
