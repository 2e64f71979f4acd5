# src/products.py
"""
Product records and their variants.

A :class:`Product` carries the fields every product shares (id, name,
price, stock) plus a ``kind`` holding the variant specific data:

* :class:`Perishable` adds an expiration date and a weight.  Perishable
  goods are always shipped.
* :class:`NonPerishable` may or may not be shipped; its weight is zero
  when it is not.

Availability rules live on the variant so that adding a new kind of
product does not require touching the checkout code.
"""

from __future__ import annotations

import logging
import math
import uuid
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Union

from errors import ExpiredProductError, OutOfStockError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Shippable:
    """Name and per‑unit weight (kg) of something that goes in a parcel."""
    name: str
    weight: float


@dataclass(frozen=True)
class Perishable:
    expiration_date: date
    weight: float = 0.0

    def check(self, product: "Product", today: date) -> None:
        if self.expiration_date < today:
            raise ExpiredProductError(product.name, self.expiration_date)

    def shippable_weight(self) -> Optional[float]:
        return self.weight


@dataclass(frozen=True)
class NonPerishable:
    is_shippable: bool = False
    weight: float = 0.0

    def __post_init__(self) -> None:
        # Weight only matters for goods that are actually shipped
        if not self.is_shippable:
            object.__setattr__(self, "weight", 0.0)

    def check(self, product: "Product", today: date) -> None:
        return None

    def shippable_weight(self) -> Optional[float]:
        return self.weight if self.is_shippable else None


ProductKind = Union[Perishable, NonPerishable]


def _new_product_id() -> str:
    return uuid.uuid4().hex


@dataclass(eq=False)
class Product:
    """An item for sale.

    Products are compared by identity; carts key them by ``product_id``.
    """
    name: str
    price: float
    quantity: int
    kind: ProductKind
    product_id: str = field(default_factory=_new_product_id)

    def __post_init__(self) -> None:
        if not math.isfinite(self.price) or self.price < 0:
            raise ValueError(f"Price of {self.name} must be a finite, non-negative number.")
        if self.quantity < 0:
            raise ValueError(f"Quantity of {self.name} must not be negative.")
        if not math.isfinite(self.kind.weight) or self.kind.weight < 0:
            raise ValueError(f"Weight of {self.name} must be a finite, non-negative number.")

    def check_availability(self, requested_quantity: int, today: Optional[date] = None) -> None:
        """Raise if ``requested_quantity`` units cannot be sold today.

        :raises OutOfStockError: more units requested than in stock.
        :raises ExpiredProductError: a perishable product has expired.
        """
        if requested_quantity > self.quantity:
            raise OutOfStockError(self.name, self.quantity, requested_quantity)
        self.kind.check(self, today or date.today())

    def reduce_quantity(self, amount: int) -> None:
        """Take ``amount`` units out of stock."""
        if amount > self.quantity:
            raise OutOfStockError(self.name, self.quantity, amount)
        self.quantity -= amount
        logger.debug(
            "Stock reduced",
            extra={"extra": {"product": self.name, "amount": amount, "remaining": self.quantity}},
        )

    @property
    def shippable(self) -> Optional[Shippable]:
        """The shipping view of this product, or None if it is not shipped."""
        weight = self.kind.shippable_weight()
        if weight is None:
            return None
        return Shippable(name=self.name, weight=weight)


def perishable(name: str, price: float, quantity: int, expiration_date: date, weight: float) -> Product:
    """Build a perishable product."""
    return Product(name, price, quantity, Perishable(expiration_date, weight))


def non_perishable(
    name: str, price: float, quantity: int, is_shippable: bool = False, weight: float = 0.0
) -> Product:
    """Build a non‑perishable product."""
    return Product(name, price, quantity, NonPerishable(is_shippable, weight))
