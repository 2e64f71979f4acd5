# src/cart.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from products import Product


@dataclass
class CartLine:
    """A line in the in‑memory shopping cart."""
    product: Product
    quantity: int

    @property
    def line_total(self) -> float:
        return self.product.price * self.quantity


class Cart:
    """
    Products requested by a customer, keyed by ``product_id``.

    Adding the same product twice merges the quantities.  Each ``add``
    checks the newly requested amount against current stock on its own;
    the accumulated quantity is only validated again at checkout.
    """

    def __init__(self) -> None:
        self._lines: Dict[str, CartLine] = {}

    def add(self, product: Product, quantity: int, today: Optional[date] = None) -> None:
        if quantity <= 0:
            raise ValueError("Quantity must be positive.")
        product.check_availability(quantity, today)
        line = self._lines.get(product.product_id)
        if line is None:
            self._lines[product.product_id] = CartLine(product=product, quantity=quantity)
        else:
            line.quantity += quantity

    def remove(self, product: Product) -> None:
        self._lines.pop(product.product_id, None)

    def clear(self) -> None:
        self._lines.clear()

    def is_empty(self) -> bool:
        return not self._lines

    def lines(self) -> List[CartLine]:
        """Snapshot of the cart lines in the order they were first added."""
        return [CartLine(l.product, l.quantity) for l in self._lines.values()]

    def quantity_of(self, product: Product) -> int:
        line = self._lines.get(product.product_id)
        return line.quantity if line else 0

    def subtotal(self) -> float:
        return sum(line.line_total for line in self._lines.values())

    def __len__(self) -> int:
        return len(self._lines)
