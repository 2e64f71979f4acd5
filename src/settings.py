"""Runtime configuration read from the environment.

=========================  ===========================================
``CHECKOUT_LOG_DIR``       directory for ``checkout.log``; unset means
                           console logging only
``CHECKOUT_LOG_LEVEL``     logging level name, ``WARNING`` by default
``CHECKOUT_SHIPPING_RATE`` shipping fee per kilogram
=========================  ===========================================
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from shipping import DEFAULT_RATE_PER_KG


@dataclass(frozen=True)
class Settings:
    log_dir: Optional[str] = None
    log_level: int = logging.WARNING
    shipping_rate_per_kg: float = DEFAULT_RATE_PER_KG

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        level_name = env.get("CHECKOUT_LOG_LEVEL", "WARNING").strip().upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level_name}")

        rate_raw = env.get("CHECKOUT_SHIPPING_RATE")
        if rate_raw is None or not rate_raw.strip():
            rate = DEFAULT_RATE_PER_KG
        else:
            try:
                rate = float(rate_raw)
            except ValueError:
                raise ValueError(f"CHECKOUT_SHIPPING_RATE must be a number, got {rate_raw!r}") from None
            if not math.isfinite(rate) or rate < 0:
                raise ValueError("CHECKOUT_SHIPPING_RATE must be a finite, non-negative number.")

        return cls(
            log_dir=env.get("CHECKOUT_LOG_DIR") or None,
            log_level=level,
            shipping_rate_per_kg=rate,
        )
