"""
Command‑line driver for the checkout demo.

Runs five independent scenarios: a normal checkout, an empty cart, an
insufficient balance, an out‑of‑stock request and an expired product.
Successful checkouts print their shipment notice and receipt on stdout;
a failed scenario prints a single ``Error: ...`` line on stderr and the
driver moves on to the next one.
"""

import logging
import sys
from datetime import date, timedelta
from typing import Callable, List, Optional, TextIO, Tuple

import logging_config
from cart import Cart
from checkout import CheckoutService
from customer import Customer
from errors import CheckoutError
from metrics import generate_metrics_text
from products import non_perishable, perishable
from settings import Settings

logger = logging.getLogger(__name__)


def normal_checkout(service: CheckoutService, today: date) -> None:
    cheese = perishable("Cheese", 100, 5, today + timedelta(days=10), 0.2)
    biscuits = perishable("Biscuits", 150, 3, today + timedelta(days=5), 0.7)
    scratch_card = non_perishable("Mobile Scratch Card", 50, 10)
    customer = Customer(1000)
    cart = Cart()
    cart.add(cheese, 2, today)
    cart.add(biscuits, 1, today)
    cart.add(scratch_card, 1, today)
    service.checkout(customer, cart)


def empty_cart(service: CheckoutService, today: date) -> None:
    service.checkout(Customer(1000), Cart())


def insufficient_balance(service: CheckoutService, today: date) -> None:
    cheese = perishable("Cheese", 100, 5, today + timedelta(days=10), 0.2)
    cart = Cart()
    cart.add(cheese, 2, today)
    service.checkout(Customer(100), cart)


def out_of_stock(service: CheckoutService, today: date) -> None:
    tv = non_perishable("TV", 1000, 2, is_shippable=True, weight=5.0)
    cart = Cart()
    cart.add(tv, 3, today)
    service.checkout(Customer(5000), cart)


def expired_product(service: CheckoutService, today: date) -> None:
    expired_cheese = perishable("Cheese", 100, 5, today - timedelta(days=1), 0.2)
    cart = Cart()
    cart.add(expired_cheese, 2, today)
    service.checkout(Customer(1000), cart)


SCENARIOS: List[Tuple[str, Callable[[CheckoutService, date], None]]] = [
    ("Normal Checkout", normal_checkout),
    ("Empty Cart", empty_cart),
    ("Insufficient Balance", insufficient_balance),
    ("Out of Stock", out_of_stock),
    ("Expired Product", expired_product),
]


def run_scenarios(
    service: CheckoutService, today: date, out: TextIO, err: TextIO
) -> List[Optional[str]]:
    """Run every scenario and return the error message of each (None on success)."""
    results: List[Optional[str]] = []
    for number, (title, scenario) in enumerate(SCENARIOS, start=1):
        header = f"=== Test Case {number}: {title} ==="
        print(header if number == 1 else f"\n{header}", file=out)
        try:
            scenario(service, today)
        except (CheckoutError, ValueError) as ex:
            print(f"Error: {ex}", file=err)
            results.append(str(ex))
        else:
            results.append(None)
    return results


def main(settings: Optional[Settings] = None) -> None:
    settings = settings or Settings.from_env()
    logging_config.configure_logging(settings.log_dir, settings.log_level)
    service = CheckoutService(shipping_rate_per_kg=settings.shipping_rate_per_kg, out=sys.stdout)
    run_scenarios(service, service.clock(), sys.stdout, sys.stderr)
    logger.debug("Metrics snapshot", extra={"extra": {"metrics": generate_metrics_text()}})


if __name__ == "__main__":
    try:
        main()
    except KeyboardInterrupt:
        print("\nInterrupted by user. Exiting.")
        sys.exit(0)
