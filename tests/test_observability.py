# --- path/bootstrap (keep this at the very top) ---
from pathlib import Path
import sys

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))
# --- end path/bootstrap ---

import json
import logging
import os
import tempfile
import unittest

import logging_config
from metrics import Counter, Histogram, generate_metrics_text
from settings import Settings
from shipping import DEFAULT_RATE_PER_KG


class TestSettings(unittest.TestCase):

    def test_defaults(self):
        settings = Settings.from_env({})
        self.assertIsNone(settings.log_dir)
        self.assertEqual(settings.log_level, logging.WARNING)
        self.assertEqual(settings.shipping_rate_per_kg, DEFAULT_RATE_PER_KG)

    def test_values_from_environment(self):
        settings = Settings.from_env(
            {"CHECKOUT_LOG_DIR": "/tmp/x", "CHECKOUT_LOG_LEVEL": "debug", "CHECKOUT_SHIPPING_RATE": "12.5"}
        )
        self.assertEqual(settings.log_dir, "/tmp/x")
        self.assertEqual(settings.log_level, logging.DEBUG)
        self.assertEqual(settings.shipping_rate_per_kg, 12.5)

    def test_invalid_values(self):
        for env in (
            {"CHECKOUT_LOG_LEVEL": "chatty"},
            {"CHECKOUT_SHIPPING_RATE": "free"},
            {"CHECKOUT_SHIPPING_RATE": "-1"},
            {"CHECKOUT_SHIPPING_RATE": "nan"},
            {"CHECKOUT_SHIPPING_RATE": "inf"},
        ):
            with self.assertRaises(ValueError):
                Settings.from_env(env)


class TestLogging(unittest.TestCase):

    def setUp(self):
        root = logging.getLogger()
        self._saved = (root.level, list(root.handlers))

    def tearDown(self):
        root = logging.getLogger()
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()
        root.setLevel(self._saved[0])
        for handler in self._saved[1]:
            root.addHandler(handler)

    def test_json_formatter_merges_extra(self):
        record = logging.LogRecord("checkout", logging.INFO, __file__, 1, "Checkout completed", None, None)
        record.user_id = "alice"
        record.extra = {"total": 430.0}
        payload = json.loads(logging_config.JsonFormatter().format(record))
        self.assertEqual(payload["level"], "INFO")
        self.assertEqual(payload["message"], "Checkout completed")
        self.assertEqual(payload["user_id"], "alice")
        self.assertEqual(payload["total"], 430.0)

    def test_file_handler_written_when_log_dir_set(self):
        with tempfile.TemporaryDirectory() as log_dir:
            logging_config.configure_logging(log_dir, logging.INFO)
            logging.getLogger("checkout").info("hello", extra={"extra": {"k": 1}})
            for handler in logging.getLogger().handlers:
                handler.flush()
            with open(os.path.join(log_dir, "checkout.log"), encoding="utf-8") as f:
                line = json.loads(f.readline())
            self.assertEqual(line["message"], "hello")
            self.assertEqual(line["k"], 1)
            for handler in list(logging.getLogger().handlers):
                logging.getLogger().removeHandler(handler)
                handler.close()

    def test_console_only_without_log_dir(self):
        logging_config.configure_logging(None, logging.WARNING)
        handlers = logging.getLogger().handlers
        self.assertEqual(len(handlers), 1)
        self.assertIsInstance(handlers[0].formatter, logging_config.JsonFormatter)


class TestMetrics(unittest.TestCase):

    def test_counter_export(self):
        counter = Counter("test_events_total", "Events", ["kind"])
        counter.inc(kind="a")
        counter.inc(kind="a")
        self.assertEqual(counter.value(kind="a"), 2)
        self.assertEqual(counter.value(kind="b"), 0)
        text = generate_metrics_text()
        self.assertIn("# TYPE test_events_total counter", text)
        self.assertIn('test_events_total{kind="a"} 2', text)

    def test_histogram_buckets_are_cumulative(self):
        hist = Histogram("test_sizes", "Sizes", buckets=[1.0, 5.0])
        hist.observe(0.5)
        hist.observe(3.0)
        hist.observe(10.0)
        self.assertEqual(hist.count(), 3)
        lines = hist.to_prometheus()
        self.assertIn('test_sizes_bucket{le="1.0"} 1', lines)
        self.assertIn('test_sizes_bucket{le="5.0"} 2', lines)
        self.assertIn('test_sizes_bucket{le="+Inf"} 3', lines)
        self.assertIn("test_sizes_sum 13.5", lines)
        self.assertIn("test_sizes_count 3", lines)


if __name__ == "__main__":
    unittest.main(verbosity=2)
