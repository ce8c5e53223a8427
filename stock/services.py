"""
Stock — Service Layer

add_stock, remove_stock, get_history, classify_product.

Every mutation runs in one transaction: lock the product row, check the
invariant, update Product.quantity/version and append one StockMovement.
Concurrent mutations of the same product serialize on the row lock;
different products never block each other. Readers only ever see the
quantity and its ledger entry together, after commit.

@file stock/services.py
"""

import logging
from datetime import datetime
from uuid import UUID

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from core.constants import MAX_STOCK_QUANTITY
from core.exceptions import BusinessRuleViolation, InvalidQuantity, ResourceNotFoundError
from products.models import Product
from products.services import lock_product

from .classification import StockClassification, classify_stock
from .models import StockMovement
from .outcomes import InsufficientStock, StockUpdated

logger = logging.getLogger('stockroom')


def _validate_quantity(quantity) -> int:
    # bool is an int subclass; True must not count as 1.
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise InvalidQuantity(detail=f'Quantity must be a positive integer, got {quantity!r}.')
    if quantity <= 0:
        raise InvalidQuantity(detail=f'Quantity must be greater than 0, got {quantity}.')
    if quantity > MAX_STOCK_QUANTITY:
        raise InvalidQuantity(detail=f'Quantity cannot exceed {MAX_STOCK_QUANTITY}, got {quantity}.')
    return quantity


def _clean_reason(reason: str | None) -> str:
    reason = (reason or '').strip()
    if len(reason) > StockMovement._meta.get_field('reason').max_length:
        raise BusinessRuleViolation(detail='Reason cannot exceed 500 characters.')
    return reason


def _resolve_actor(actor):
    return actor if getattr(actor, 'is_authenticated', False) else None


def _apply_delta(product: Product, delta: int, reason: str, actor) -> StockMovement:
    """Update the locked product and append its ledger entry. Caller holds the lock."""
    # Never earlier than the previous commit, so occurred_at is non-decreasing per product.
    occurred_at = max(timezone.now(), product.updated_at)

    product.quantity += delta
    product.version += 1
    product.updated_at = occurred_at
    product.save(update_fields=['quantity', 'version', 'updated_at'])

    return StockMovement.objects.create(
        product=product,
        sequence=product.version,
        delta=delta,
        quantity_after=product.quantity,
        reason=reason,
        actor=actor,
        occurred_at=occurred_at,
    )


class StockService:
    """Quantity mutations with their ledger, plus read-side queries."""

    @staticmethod
    @transaction.atomic
    def add_stock(
        *,
        product_id: UUID,
        quantity: int,
        reason: str = '',
        actor=None,
    ) -> StockUpdated:
        """
        Add units to an active product.

        The only ceiling is the storage range of the quantity column; a
        total above MAX_STOCK_QUANTITY is rejected before any write.
        """
        _validate_quantity(quantity)
        reason = _clean_reason(reason)

        product = lock_product(product_id)
        if product.quantity + quantity > MAX_STOCK_QUANTITY:
            raise InvalidQuantity(detail=(
                f'Adding {quantity} to product {product.pk} would exceed the maximum '
                f'on-hand quantity of {MAX_STOCK_QUANTITY} (current: {product.quantity}).'
            ))
        movement = _apply_delta(product, quantity, reason, _resolve_actor(actor))

        logger.info(
            'Stock ADDED product=%s qty=%s now=%s seq=%s by=%s',
            product.pk, quantity, product.quantity, movement.sequence, actor,
        )
        return StockUpdated(
            product_id=product.pk,
            new_quantity=product.quantity,
            movement=movement,
        )

    @staticmethod
    @transaction.atomic
    def remove_stock(
        *,
        product_id: UUID,
        quantity: int,
        reason: str = '',
        actor=None,
    ) -> StockUpdated | InsufficientStock:
        """
        Remove units from an active product.

        Returns InsufficientStock, writing nothing, when the locked
        quantity is below the requested amount.
        """
        _validate_quantity(quantity)
        reason = _clean_reason(reason)

        product = lock_product(product_id)
        if product.quantity < quantity:
            logger.info(
                'Stock removal rejected product=%s requested=%s available=%s',
                product.pk, quantity, product.quantity,
            )
            return InsufficientStock(
                product_id=product.pk,
                requested=quantity,
                available=product.quantity,
            )

        movement = _apply_delta(product, -quantity, reason, _resolve_actor(actor))

        logger.info(
            'Stock REMOVED product=%s qty=%s now=%s seq=%s by=%s',
            product.pk, quantity, product.quantity, movement.sequence, actor,
        )
        threshold = settings.LOW_STOCK_THRESHOLD
        if product.is_low_stock(threshold):
            logger.warning(
                'Product %s (%s) is low on stock: %d units (threshold %d).',
                product.pk, product.name, product.quantity, threshold,
            )
        return StockUpdated(
            product_id=product.pk,
            new_quantity=product.quantity,
            movement=movement,
        )

    @staticmethod
    def get_history(
        *,
        product_id: UUID | None = None,
        from_time: datetime | None = None,
        to_time: datetime | None = None,
        limit: int | None = None,
    ) -> list[StockMovement]:
        """
        Ledger entries, newest first. Time bounds are inclusive.

        limit defaults to STOCK_HISTORY_DEFAULT_LIMIT and is capped at
        STOCK_HISTORY_MAX_LIMIT.
        """
        if limit is None:
            limit = settings.STOCK_HISTORY_DEFAULT_LIMIT
        if limit < 1:
            raise BusinessRuleViolation(detail='limit must be at least 1.')
        limit = min(limit, settings.STOCK_HISTORY_MAX_LIMIT)

        qs = StockMovement.objects.select_related('product', 'actor')
        if product_id is not None:
            qs = qs.filter(product_id=product_id)
        if from_time is not None:
            qs = qs.filter(occurred_at__gte=from_time)
        if to_time is not None:
            qs = qs.filter(occurred_at__lte=to_time)

        return list(qs.order_by('-occurred_at', '-sequence')[:limit])

    @staticmethod
    def classify_product(product_id: UUID, threshold: int | None = None) -> StockClassification:
        """Classify an active product's committed quantity. Takes no lock."""
        if threshold is None:
            threshold = settings.LOW_STOCK_THRESHOLD
        try:
            product = Product.objects.only('id', 'quantity').get(pk=product_id, is_active=True)
        except Product.DoesNotExist:
            raise ResourceNotFoundError(detail=f'Product {product_id} not found.')

        return StockClassification(
            product_id=product.pk,
            quantity=product.quantity,
            threshold=threshold,
            status=classify_stock(product.quantity, threshold),
        )
