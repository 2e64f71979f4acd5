# --- path/bootstrap (keep this at the very top) ---
from pathlib import Path
import sys

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
# --- end path/bootstrap ---

import unittest
from datetime import date, timedelta

from cart import Cart
from customer import Customer
from errors import ExpiredProductError, InsufficientBalanceError, OutOfStockError
from products import non_perishable, perishable

TODAY = date(2024, 6, 1)


class TestCart(unittest.TestCase):

    def setUp(self):
        self.cart = Cart()
        self.cheese = perishable("Cheese", 100, 5, TODAY + timedelta(days=10), 0.2)
        self.card = non_perishable("Scratch Card", 50, 10)

    def test_new_cart_is_empty(self):
        self.assertTrue(self.cart.is_empty())
        self.assertEqual(self.cart.lines(), [])

    def test_add_merges_repeated_product(self):
        self.cart.add(self.cheese, 2, TODAY)
        self.cart.add(self.card, 1, TODAY)
        self.cart.add(self.cheese, 1, TODAY)
        self.assertFalse(self.cart.is_empty())
        self.assertEqual(len(self.cart), 2)
        self.assertEqual(self.cart.quantity_of(self.cheese), 3)
        self.assertEqual([l.product.name for l in self.cart.lines()], ["Cheese", "Scratch Card"])
        self.assertAlmostEqual(self.cart.subtotal(), 350.0)

    def test_each_add_is_validated_on_its_own(self):
        # Two adds of 3 pass against a stock of 5; the total is only
        # rejected at checkout.
        self.cart.add(self.cheese, 3, TODAY)
        self.cart.add(self.cheese, 3, TODAY)
        self.assertEqual(self.cart.quantity_of(self.cheese), 6)
        self.assertEqual(self.cheese.quantity, 5)

    def test_add_over_stock_fails_and_cart_unchanged(self):
        with self.assertRaises(OutOfStockError):
            self.cart.add(self.cheese, 6, TODAY)
        self.assertTrue(self.cart.is_empty())

    def test_add_expired_fails(self):
        old = perishable("Yoghurt", 10, 5, TODAY - timedelta(days=1), 0.1)
        with self.assertRaises(ExpiredProductError):
            self.cart.add(old, 1, TODAY)
        self.assertTrue(self.cart.is_empty())

    def test_non_positive_quantity_rejected(self):
        for qty in (0, -1):
            with self.assertRaises(ValueError):
                self.cart.add(self.card, qty, TODAY)

    def test_remove_and_clear(self):
        self.cart.add(self.cheese, 1, TODAY)
        self.cart.add(self.card, 1, TODAY)
        self.cart.remove(self.cheese)
        self.assertEqual(self.cart.quantity_of(self.cheese), 0)
        self.cart.clear()
        self.assertTrue(self.cart.is_empty())

    def test_lines_is_a_snapshot(self):
        self.cart.add(self.card, 1, TODAY)
        snapshot = self.cart.lines()
        snapshot[0].quantity = 9
        self.assertEqual(self.cart.quantity_of(self.card), 1)


class TestCustomer(unittest.TestCase):

    def test_deduct_balance(self):
        customer = Customer(1000)
        customer.deduct_balance(430)
        self.assertEqual(customer.balance, 570)

    def test_deduct_exact_balance(self):
        customer = Customer(100)
        customer.deduct_balance(100)
        self.assertEqual(customer.balance, 0)

    def test_insufficient_balance_leaves_balance_unchanged(self):
        customer = Customer(100)
        with self.assertRaises(InsufficientBalanceError) as ctx:
            customer.deduct_balance(100.01)
        self.assertEqual(customer.balance, 100)
        self.assertIn("Insufficient balance. Available: 100", str(ctx.exception))

    def test_negative_opening_balance_rejected(self):
        with self.assertRaises(ValueError):
            Customer(-1)

    def test_non_finite_opening_balance_rejected(self):
        for bad in (float("nan"), float("inf")):
            with self.assertRaises(ValueError):
                Customer(bad)

    def test_negative_or_non_finite_deduction_rejected(self):
        customer = Customer(10)
        for bad in (-5, float("nan"), float("inf"), float("-inf")):
            with self.assertRaises(ValueError):
                customer.deduct_balance(bad)
        self.assertEqual(customer.balance, 10)


if __name__ == "__main__":
    unittest.main(verbosity=2)
