"""
Products — Service Layer

Product registration, the row lock shared with the stock service, the
deactivation guard and low-stock listing.

Deactivation re-checks quantity == 0 after taking the row lock and
writes is_active=False in the same transaction. A quantity read before
the lock (e.g. by request validation) is never trusted: a concurrent
add_stock landing in between would otherwise leave an inactive product
holding stock.

@file products/services.py
"""

import logging

from django.conf import settings
from django.db import IntegrityError, OperationalError, connection, transaction
from django.db.models import QuerySet
from django.utils import timezone

from core.constants import AUDIT_ACTION_CREATE, AUDIT_ACTION_SOFT_DELETE
from core.exceptions import DuplicateResourceError, ResourceNotFoundError, StockLockTimeout
from core.services import AuditService
from stock.outcomes import Deactivated, HasStock

from .models import Product

logger = logging.getLogger('stockroom')

# SQLSTATE lock_not_available, raised when lock_timeout expires.
LOCK_NOT_AVAILABLE = '55P03'


def _is_lock_timeout(exc: OperationalError) -> bool:
    cause = exc.__cause__
    code = getattr(cause, 'sqlstate', None) or getattr(cause, 'pgcode', None)
    return code == LOCK_NOT_AVAILABLE


def _name_taken(name: str) -> bool:
    return Product.objects.filter(name__iexact=name, is_active=True).exists()


def lock_product(product_id) -> Product:
    """
    SELECT ... FOR UPDATE on an active product.

    Must run inside transaction.atomic; the lock is held until the
    enclosing transaction commits or rolls back. On PostgreSQL the wait
    is bounded by STOCK_LOCK_TIMEOUT_MS.
    """
    try:
        if connection.vendor == 'postgresql':
            with connection.cursor() as cursor:
                cursor.execute(
                    "SELECT set_config('lock_timeout', %s, true)",
                    [f'{settings.STOCK_LOCK_TIMEOUT_MS}ms'],
                )
        return Product.objects.select_for_update().get(pk=product_id, is_active=True)
    except Product.DoesNotExist:
        raise ResourceNotFoundError(detail=f'Product {product_id} not found.')
    except OperationalError as exc:
        if _is_lock_timeout(exc):
            logger.warning('Lock wait on product %s timed out.', product_id)
            raise StockLockTimeout() from exc
        raise


class ProductService:
    """Registration, deactivation and low-stock queries for Product."""

    @staticmethod
    @transaction.atomic
    def create_product(*, name: str, description: str = '', actor=None) -> Product:
        """Register a product with quantity 0. Names are unique among active products."""
        name = name.strip()
        message = f"A product named '{name}' already exists."
        if _name_taken(name):
            raise DuplicateResourceError(detail=message)

        # A concurrent registration can pass the check above; the unique
        # index on active names rejects the second insert.
        try:
            with transaction.atomic():
                product = Product.objects.create(
                    name=name,
                    description=description,
                    created_by=actor,
                )
        except IntegrityError as exc:
            raise DuplicateResourceError(detail=message) from exc

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_CREATE,
            model_name='Product',
            object_id=str(product.pk),
            new_values=AuditService.snapshot(product),
        )
        logger.info('Product %s (%s) registered by %s.', product.pk, product.name, actor)
        return product

    @staticmethod
    @transaction.atomic
    def deactivate_product(*, product_id, actor=None) -> Deactivated | HasStock:
        """Soft-delete a product, only if it holds no stock at commit time."""
        product = lock_product(product_id)

        if product.quantity != 0:
            logger.info(
                'Deactivation of product %s rejected: %d units in stock.',
                product.pk, product.quantity,
            )
            return HasStock(product_id=product.pk, current_quantity=product.quantity)

        before = AuditService.snapshot(product)
        now = timezone.now()
        product.is_active = False
        product.deactivated_at = now
        product.updated_at = now
        product.save(update_fields=['is_active', 'deactivated_at', 'updated_at'])

        AuditService.log(
            actor=actor,
            action=AUDIT_ACTION_SOFT_DELETE,
            model_name='Product',
            object_id=str(product.pk),
            old_values=before,
            new_values=AuditService.snapshot(product),
        )
        logger.info('Product %s deactivated by %s.', product.pk, actor)
        return Deactivated(product_id=product.pk)

    @staticmethod
    def get_low_stock(threshold: int | None = None) -> QuerySet[Product]:
        """Active products at or below the threshold, lowest stock first."""
        if threshold is None:
            threshold = settings.LOW_STOCK_THRESHOLD
        return (
            Product.objects
            .filter(is_active=True, quantity__lte=threshold)
            .order_by('quantity', 'name')
        )
