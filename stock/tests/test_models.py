"""
Tests — StockMovement model (insert-only, no delete).

@file stock/tests/test_models.py
"""

import pytest
from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from stock.models import StockMovement
from tests.factories import ProductFactory, UserFactory


pytestmark = pytest.mark.django_db


def _movement(product, **overrides):
    fields = {
        'product': product,
        'sequence': 1,
        'delta': 5,
        'quantity_after': 5,
        'actor': UserFactory(),
    }
    fields.update(overrides)
    return StockMovement.objects.create(**fields)


class TestStockMovementInsertOnly:

    def test_create_movement_derives_change_type(self):
        product = ProductFactory()
        added = _movement(product)
        removed = _movement(product, sequence=2, delta=-5, quantity_after=0)
        assert added.change_type == StockMovement.ChangeType.ADDED
        assert removed.change_type == StockMovement.ChangeType.REMOVED

    def test_update_raises(self):
        movement = _movement(ProductFactory())
        movement.reason = 'edited'
        with pytest.raises(NotImplementedError) as exc_info:
            movement.save()
        assert 'insert-only' in str(exc_info.value).lower()

    def test_delete_raises(self):
        movement = _movement(ProductFactory())
        with pytest.raises(NotImplementedError) as exc_info:
            movement.delete()
        assert 'delete' in str(exc_info.value).lower()

    def test_queryset_update_raises(self):
        _movement(ProductFactory())
        with pytest.raises(NotImplementedError):
            StockMovement.objects.all().update(reason='x')

    def test_queryset_delete_raises(self):
        _movement(ProductFactory())
        with pytest.raises(NotImplementedError):
            StockMovement.objects.all().delete()

    def test_zero_delta_rejected(self):
        with pytest.raises(ValueError):
            _movement(ProductFactory(), delta=0)

    def test_sequence_unique_per_product(self):
        product = ProductFactory()
        _movement(product, sequence=1)
        with pytest.raises(IntegrityError):
            with transaction.atomic():
                _movement(product, sequence=1, delta=1, quantity_after=6)

    def test_same_sequence_allowed_across_products(self):
        _movement(ProductFactory(), sequence=1)
        _movement(ProductFactory(), sequence=1)
        assert StockMovement.objects.filter(sequence=1).count() == 2


class TestProductDeletionProtected:

    def test_product_with_ledger_cannot_be_hard_deleted(self):
        product = ProductFactory(initial_stock=3)
        with pytest.raises(ProtectedError):
            product.delete()
