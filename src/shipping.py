"""
Shipping fee calculation and the shipment notice.

``calculate_shipping`` is a pure function over the shippable part of a
cart.  ``ShippingService`` stands in for a carrier integration: it only
prints the notice a warehouse would receive.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Iterable, List, Optional, TextIO

from products import Shippable

logger = logging.getLogger(__name__)

# Flat fee per kilogram of parcel weight
DEFAULT_RATE_PER_KG = 30.0 / 1.1


@dataclass(frozen=True)
class ShippableItem:
    shippable: Shippable
    quantity: int

    @property
    def total_weight(self) -> float:
        return self.shippable.weight * self.quantity


@dataclass(frozen=True)
class ShippingQuote:
    total_weight: float
    fee: float


def calculate_shipping(items: Iterable[ShippableItem], rate_per_kg: float = DEFAULT_RATE_PER_KG) -> ShippingQuote:
    """Return total parcel weight (kg) and the fee charged for it."""
    total_weight = sum(item.total_weight for item in items)
    return ShippingQuote(total_weight=total_weight, fee=total_weight * rate_per_kg)


def _format_kg(value: float) -> str:
    return f"{value:.3f}".rstrip("0").rstrip(".")


class ShippingService:
    """Emit the shipment notice for a paid order."""

    def ship(self, items: List[ShippableItem], out: Optional[TextIO] = None) -> List[str]:
        out = out or sys.stdout
        lines = ["** Shipment notice **"]
        for item in items:
            grams = item.total_weight * 1000
            lines.append(f"{item.quantity}x {item.shippable.name} {grams:.0f}g")
        total_weight = sum(item.total_weight for item in items)
        lines.append(f"Total package weight {_format_kg(total_weight)}kg")
        for line in lines:
            print(line, file=out)
        logger.info(
            "Shipment created",
            extra={"extra": {"items": len(items), "weight_kg": total_weight}},
        )
        return lines
