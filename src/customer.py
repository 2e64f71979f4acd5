"""Customer account holding a spendable balance."""

from __future__ import annotations

import logging
import math

from errors import InsufficientBalanceError

logger = logging.getLogger(__name__)


class Customer:
    def __init__(self, balance: float, name: str = "customer") -> None:
        if not math.isfinite(balance) or balance < 0:
            raise ValueError("Balance must be a finite, non-negative number.")
        self.name = name
        self._balance = balance

    @property
    def balance(self) -> float:
        return self._balance

    def deduct_balance(self, amount: float) -> None:
        """Charge ``amount``; the balance is left untouched on failure.

        :raises ValueError: ``amount`` is negative or not finite.
        :raises InsufficientBalanceError: ``amount`` exceeds the balance.
        """
        if not math.isfinite(amount) or amount < 0:
            raise ValueError(f"Amount to deduct must be a finite, non-negative number, got {amount}.")
        if amount > self._balance:
            raise InsufficientBalanceError(self._balance, amount)
        self._balance -= amount
        logger.debug(
            "Balance deducted",
            extra={"user_id": self.name, "extra": {"amount": amount, "balance": self._balance}},
        )
