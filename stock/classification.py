"""
Stock — Low-Stock Classification

Pure mapping from an on-hand quantity and a threshold to a stock level.
Used for reporting only; it never blocks a mutation.

@file stock/classification.py
"""

from dataclasses import dataclass
from uuid import UUID

from django.db import models
from django.utils.translation import gettext_lazy as _

from core.constants import DEFAULT_LOW_STOCK_THRESHOLD


class StockStatus(models.TextChoices):
    OUT_OF_STOCK = 'OUT_OF_STOCK', _('Out of stock')
    LOW = 'LOW', _('Low')
    IN_STOCK = 'IN_STOCK', _('In stock')


def classify_stock(quantity: int, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> StockStatus:
    """
    0 -> OUT_OF_STOCK, 1..threshold -> LOW, above threshold -> IN_STOCK.

    >>> classify_stock(10, 10)
    <StockStatus.LOW: 'LOW'>
    """
    if quantity < 0:
        raise ValueError(f'Quantity cannot be negative, got {quantity}.')
    if threshold < 0:
        raise ValueError(f'Threshold cannot be negative, got {threshold}.')
    if quantity == 0:
        return StockStatus.OUT_OF_STOCK
    if quantity <= threshold:
        return StockStatus.LOW
    return StockStatus.IN_STOCK


@dataclass(frozen=True)
class StockClassification:
    product_id: UUID
    quantity: int
    threshold: int
    status: StockStatus
