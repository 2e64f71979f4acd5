"""Checkout error hierarchy.

Every failure that aborts a checkout derives from :class:`CheckoutError`
so callers can report it with a single ``except`` clause.  The message is
human‑readable and safe to print as is.
"""

from __future__ import annotations

from datetime import date


class CheckoutError(Exception):
    """Base class for failures that abort the current checkout."""


class EmptyCartError(CheckoutError):
    def __init__(self) -> None:
        super().__init__("Cart is empty.")


class InsufficientBalanceError(CheckoutError):
    """The customer cannot cover the requested amount."""

    def __init__(self, available: float, requested: float) -> None:
        self.available = available
        self.requested = requested
        super().__init__(f"Insufficient balance. Available: {available}")


class OutOfStockError(CheckoutError):
    """More units were requested than the product has in stock."""

    def __init__(self, product_name: str, available: int, requested: int) -> None:
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(f"{product_name} is out of stock. Available: {available}")


class ExpiredProductError(CheckoutError):
    """A perishable product is past its expiration date."""

    def __init__(self, product_name: str, expiration_date: date) -> None:
        self.product_name = product_name
        self.expiration_date = expiration_date
        super().__init__(f"{product_name} is expired.")
