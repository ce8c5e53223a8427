"""
Stock — Operation Outcomes

Explicit result variants returned by the stock and deactivation
services. Business-rule rejections are values, not exceptions: the
caller inspects `ok` (or the type) and, at the API edge, turns a
rejection into its HTTP error with `as_error()`.

    StockUpdated | InsufficientStock   <- StockService.add_stock / remove_stock
    Deactivated  | HasStock            <- ProductService.deactivate_product

@file stock/outcomes.py
"""

from dataclasses import dataclass
from typing import ClassVar
from uuid import UUID

from core.exceptions import InsufficientStockError, ProductHasStockError

from .models import StockMovement


@dataclass(frozen=True)
class StockUpdated:
    ok: ClassVar[bool] = True

    product_id: UUID
    new_quantity: int
    movement: StockMovement


@dataclass(frozen=True)
class InsufficientStock:
    ok: ClassVar[bool] = False

    product_id: UUID
    requested: int
    available: int

    def as_error(self) -> InsufficientStockError:
        return InsufficientStockError(
            product_id=self.product_id,
            requested=self.requested,
            available=self.available,
        )


@dataclass(frozen=True)
class Deactivated:
    ok: ClassVar[bool] = True

    product_id: UUID


@dataclass(frozen=True)
class HasStock:
    ok: ClassVar[bool] = False

    product_id: UUID
    current_quantity: int

    def as_error(self) -> ProductHasStockError:
        return ProductHasStockError(
            product_id=self.product_id,
            current_quantity=self.current_quantity,
        )
