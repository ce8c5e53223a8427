"""
Products — Models

The stock record: one row per product carrying the authoritative
on-hand quantity and active flag. quantity, is_active and version are
written only by StockService (stock/services.py) and the deactivation
path in ProductService, always under a row lock.

@file products/models.py
"""

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.constants import DEFAULT_LOW_STOCK_THRESHOLD
from core.models import BaseModel
from stock.classification import StockStatus, classify_stock


class Product(BaseModel):
    """
    A stocked product.

    Created with quantity 0 and active. Deactivation is a soft delete:
    the row and its stock history are kept, but the product can no
    longer be mutated and drops out of listings.
    """

    name = models.CharField(_('name'), max_length=200)
    description = models.TextField(_('description'), blank=True)
    quantity = models.PositiveIntegerField(
        _('quantity on hand'), default=0, editable=False,
    )
    is_active = models.BooleanField(
        _('active'), default=True, editable=False, db_index=True,
    )
    version = models.PositiveIntegerField(
        _('version'), default=0, editable=False,
        help_text=_('Number of committed stock movements'),
    )
    # Set explicitly on every committed change, not auto_now.
    updated_at = models.DateTimeField(
        _('updated at'), default=timezone.now, editable=False,
    )
    deactivated_at = models.DateTimeField(
        _('deactivated at'), null=True, blank=True, editable=False,
    )

    class Meta:
        verbose_name = _('product')
        verbose_name_plural = _('products')
        ordering = ['name']
        indexes = [
            models.Index(fields=['is_active', 'quantity'], name='product_active_qty_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=0),
                name='product_quantity_non_negative',
            ),
            models.UniqueConstraint(
                fields=['name'],
                condition=models.Q(is_active=True),
                name='unique_active_product_name',
            ),
        ]

    def __str__(self):
        return f'{self.name} ({self.quantity})'

    def is_low_stock(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> bool:
        return self.quantity <= threshold

    def stock_status(self, threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> StockStatus:
        return classify_stock(self.quantity, threshold)
