"""
Stock — Models

The stock ledger. One immutable StockMovement per committed quantity
change, written by StockService in the same transaction as the
Product.quantity update. Records are INSERT ONLY — never update or
delete.

For a given product, ordering by sequence gives commit order, and
quantity_after is the running sum of delta in that order.

@file stock/models.py
"""

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.constants import MAX_REASON_LENGTH


class StockMovementQuerySet(models.QuerySet):
    """Blocks bulk update/delete so the ledger stays append-only."""

    def update(self, **kwargs):
        raise NotImplementedError('StockMovement is insert-only; updates are not allowed.')

    def delete(self):
        raise NotImplementedError('StockMovement records cannot be deleted.')


class StockMovement(models.Model):
    """A single immutable stock ledger entry."""

    class ChangeType(models.TextChoices):
        ADDED = 'ADDED', _('Added')
        REMOVED = 'REMOVED', _('Removed')

    id = models.UUIDField(
        primary_key=True, default=uuid.uuid4, editable=False,
    )
    product = models.ForeignKey(
        'products.Product',
        on_delete=models.PROTECT,
        related_name='stock_movements',
        verbose_name=_('product'),
    )
    sequence = models.PositiveIntegerField(
        _('sequence'),
        help_text=_('Product version after this movement; unique per product'),
    )
    delta = models.IntegerField(_('delta'))
    quantity_after = models.PositiveIntegerField(_('quantity after'))
    change_type = models.CharField(
        _('change type'), max_length=8,
        choices=ChangeType.choices, db_index=True,
    )
    reason = models.CharField(
        _('reason'), max_length=MAX_REASON_LENGTH, blank=True,
    )
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='+',
        verbose_name=_('actor'),
    )
    occurred_at = models.DateTimeField(
        _('occurred at'), default=timezone.now, db_index=True,
    )
    # No updated_at: immutable record.

    objects = StockMovementQuerySet.as_manager()

    class Meta:
        verbose_name = _('stock movement')
        verbose_name_plural = _('stock movements')
        ordering = ['-occurred_at', '-sequence']
        indexes = [
            models.Index(fields=['product', '-occurred_at'], name='stock_product_occurred_idx'),
            models.Index(fields=['actor', 'occurred_at'], name='stock_actor_occurred_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['product', 'sequence'],
                name='unique_movement_sequence_per_product',
            ),
            models.CheckConstraint(
                condition=~models.Q(delta=0),
                name='movement_delta_non_zero',
            ),
            models.CheckConstraint(
                condition=models.Q(quantity_after__gte=0),
                name='movement_quantity_after_non_negative',
            ),
        ]

    def __str__(self):
        return f'{self.change_type} {self.delta:+d} -> {self.quantity_after} product={self.product_id}'

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise NotImplementedError('StockMovement is insert-only; updates are not allowed.')
        if self.delta == 0:
            raise ValueError('StockMovement delta cannot be zero.')
        self.change_type = self.ChangeType.ADDED if self.delta > 0 else self.ChangeType.REMOVED
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise NotImplementedError('StockMovement records cannot be deleted.')
