"""
Tests — classify_stock boundaries and Product helpers.

@file stock/tests/test_classification.py
"""

import pytest

from core.constants import DEFAULT_LOW_STOCK_THRESHOLD
from products.models import Product
from stock.classification import StockStatus, classify_stock


class TestClassifyStock:

    @pytest.mark.parametrize('quantity, expected', [
        (0, StockStatus.OUT_OF_STOCK),
        (1, StockStatus.LOW),
        (10, StockStatus.LOW),
        (11, StockStatus.IN_STOCK),
    ])
    def test_boundaries_at_default_threshold(self, quantity, expected):
        assert classify_stock(quantity, 10) == expected

    def test_default_threshold_is_ten(self):
        assert DEFAULT_LOW_STOCK_THRESHOLD == 10
        assert classify_stock(10) == StockStatus.LOW
        assert classify_stock(11) == StockStatus.IN_STOCK

    def test_zero_threshold_has_no_low_band(self):
        assert classify_stock(0, 0) == StockStatus.OUT_OF_STOCK
        assert classify_stock(1, 0) == StockStatus.IN_STOCK

    def test_negative_quantity_rejected(self):
        with pytest.raises(ValueError):
            classify_stock(-1, 10)

    def test_negative_threshold_rejected(self):
        with pytest.raises(ValueError):
            classify_stock(5, -1)


class TestProductStockHelpers:
    """Unsaved instances; no database needed."""

    def test_is_low_stock_includes_threshold(self):
        assert Product(name='a', quantity=10).is_low_stock(10) is True
        assert Product(name='a', quantity=11).is_low_stock(10) is False

    def test_out_of_stock_counts_as_low(self):
        assert Product(name='a', quantity=0).is_low_stock() is True

    def test_stock_status(self):
        assert Product(name='a', quantity=0).stock_status() == StockStatus.OUT_OF_STOCK
        assert Product(name='a', quantity=3).stock_status(5) == StockStatus.LOW
