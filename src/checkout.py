# src/checkout.py
"""
Checkout orchestration.

``CheckoutService.checkout`` turns a cart into a paid order in fixed
phases:

1. reject an empty cart;
2. re‑validate stock and expiry of every line;
3. price the cart and collect the shippable lines;
4. compute the shipping fee from the parcel weight;
5. charge the customer;
6. take the purchased units out of stock;
7. print the shipment notice (if anything ships) and the receipt.

Any failure before step 5 leaves customer and stock untouched; a failed
charge leaves the stock untouched.  Errors are not retried, they
propagate to the caller.
"""

from __future__ import annotations

import logging
import math
import sys
import time
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional, TextIO

from cart import Cart, CartLine
from customer import Customer
from errors import (
    CheckoutError,
    EmptyCartError,
    ExpiredProductError,
    InsufficientBalanceError,
    OutOfStockError,
)
from metrics import (
    CHECKOUT_DURATION_SECONDS,
    CHECKOUT_ERROR_TOTAL,
    CHECKOUT_TOTAL,
    SHIPPED_WEIGHT_KG,
)
from shipping import DEFAULT_RATE_PER_KG, ShippableItem, ShippingService, calculate_shipping

logger = logging.getLogger(__name__)

_ERROR_TYPES = {
    EmptyCartError: "empty_cart",
    OutOfStockError: "out_of_stock",
    ExpiredProductError: "expired_product",
    InsufficientBalanceError: "insufficient_balance",
}


@dataclass
class Receipt:
    """Outcome of a successful checkout."""
    lines: List[CartLine]
    subtotal: float
    shipping_fee: float
    total: float
    total_weight: float
    balance_after: float
    shipment_notice: List[str]
    text: List[str]


class CheckoutService:
    """Stateless checkout routine; the only setting is the per‑kg shipping rate."""

    def __init__(
        self,
        shipping_rate_per_kg: float = DEFAULT_RATE_PER_KG,
        shipping_service: Optional[ShippingService] = None,
        clock: Callable[[], date] = date.today,
        out: Optional[TextIO] = None,
    ) -> None:
        if not math.isfinite(shipping_rate_per_kg) or shipping_rate_per_kg < 0:
            raise ValueError("Shipping rate must be a finite, non-negative number.")
        self.shipping_rate_per_kg = shipping_rate_per_kg
        self.shipping_service = shipping_service or ShippingService()
        self.clock = clock
        self._out = out

    @property
    def out(self) -> TextIO:
        # Resolved lazily so redirected stdout is honoured
        return self._out or sys.stdout

    def checkout(self, customer: Customer, cart: Cart) -> Receipt:
        """Charge ``customer`` for ``cart``, update stock and print the receipt.

        :raises EmptyCartError: the cart has no lines.
        :raises OutOfStockError: a line asks for more than is in stock.
        :raises ExpiredProductError: a perishable line has expired.
        :raises InsufficientBalanceError: the customer cannot pay the total.
        """
        start_time = time.perf_counter()
        try:
            receipt = self._checkout(customer, cart)
        except CheckoutError as ex:
            error_type = _ERROR_TYPES.get(type(ex), "checkout_error")
            CHECKOUT_TOTAL.inc(outcome="rejected")
            CHECKOUT_ERROR_TOTAL.inc(type=error_type)
            logger.info(
                "Checkout rejected",
                extra={"user_id": customer.name, "extra": {"error_type": error_type, "reason": str(ex)}},
            )
            raise
        finally:
            CHECKOUT_DURATION_SECONDS.observe(time.perf_counter() - start_time)

        CHECKOUT_TOTAL.inc(outcome="success")
        if receipt.shipment_notice:
            SHIPPED_WEIGHT_KG.observe(receipt.total_weight)
        logger.info(
            "Checkout completed",
            extra={
                "user_id": customer.name,
                "extra": {
                    "items": len(receipt.lines),
                    "subtotal": receipt.subtotal,
                    "shipping_fee": receipt.shipping_fee,
                    "total": receipt.total,
                },
            },
        )
        return receipt

    def _checkout(self, customer: Customer, cart: Cart) -> Receipt:
        if cart.is_empty():
            raise EmptyCartError()

        # Work on a snapshot so the cart can't change between phases
        lines = cart.lines()
        today = self.clock()
        for line in lines:
            line.product.check_availability(line.quantity, today)

        subtotal = sum(line.line_total for line in lines)
        shippable_items: List[ShippableItem] = []
        for line in lines:
            shippable = line.product.shippable
            if shippable is not None:
                shippable_items.append(ShippableItem(shippable, line.quantity))

        quote = calculate_shipping(shippable_items, self.shipping_rate_per_kg)
        total = subtotal + quote.fee

        customer.deduct_balance(total)

        for line in lines:
            line.product.reduce_quantity(line.quantity)

        notice: List[str] = []
        if shippable_items:
            notice = self.shipping_service.ship(shippable_items, self.out)

        text = self._render_receipt(lines, subtotal, quote.fee, total, customer.balance)
        for row in text:
            print(row, file=self.out)

        return Receipt(
            lines=lines,
            subtotal=subtotal,
            shipping_fee=quote.fee,
            total=total,
            total_weight=quote.total_weight,
            balance_after=customer.balance,
            shipment_notice=notice,
            text=text,
        )

    @staticmethod
    def _render_receipt(
        lines: List[CartLine], subtotal: float, shipping_fee: float, total: float, balance: float
    ) -> List[str]:
        rows = ["** Checkout receipt **"]
        for line in lines:
            rows.append(f"{line.quantity}x {line.product.name} {line.line_total:.2f}")
        rows.append("----------------------")
        rows.append(f"Subtotal {subtotal:.2f}")
        rows.append(f"Shipping {shipping_fee:.2f}")
        rows.append(f"Amount {total:.2f}")
        rows.append(f"Customer balance after payment: {balance:.2f}")
        return rows
