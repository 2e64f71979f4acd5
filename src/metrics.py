"""In‑process checkout metrics.

Counters and histograms keyed by label values, exported in the
Prometheus text exposition format by :func:`generate_metrics_text`.
Only the standard library is used; every metric registers itself in a
module level registry when it is created.
"""

from collections import defaultdict
from threading import Lock
from typing import Dict, Iterable, List, Tuple

LabelValues = Tuple[str, ...]


class Metric:
    """Base class for all metrics."""

    kind = "untyped"

    def __init__(self, name: str, description: str, label_names: Iterable[str] = ()):
        self.name = name
        self.description = description
        self.label_names = list(label_names)
        self._lock = Lock()
        _METRIC_REGISTRY.append(self)

    def _key(self, labels: Dict[str, str]) -> LabelValues:
        return tuple(str(labels.get(k, "")) for k in self.label_names)

    def _format_labels(self, label_values: LabelValues, **more: str) -> str:
        pairs = [f'{name}="{value}"' for name, value in zip(self.label_names, label_values)]
        pairs.extend(f'{name}="{value}"' for name, value in more.items())
        return "{" + ",".join(pairs) + "}" if pairs else ""

    def _header(self) -> List[str]:
        return [f"# HELP {self.name} {self.description}", f"# TYPE {self.name} {self.kind}"]

    def to_prometheus(self) -> List[str]:
        raise NotImplementedError


class Counter(Metric):
    """Monotonic counter, e.g. ``CHECKOUT_TOTAL.inc(outcome="success")``."""

    kind = "counter"

    def __init__(self, name: str, description: str, label_names: Iterable[str] = ()):
        super().__init__(name, description, label_names)
        self._values: Dict[LabelValues, int] = defaultdict(int)

    def inc(self, **labels: str) -> None:
        key = self._key(labels)
        with self._lock:
            self._values[key] += 1

    def value(self, **labels: str) -> int:
        with self._lock:
            return self._values.get(self._key(labels), 0)

    def to_prometheus(self) -> List[str]:
        lines = self._header()
        with self._lock:
            for label_values, value in self._values.items():
                lines.append(f"{self.name}{self._format_labels(label_values)} {value}")
        return lines


class Histogram(Metric):
    """Histogram over ascending bucket upper bounds.

    Bucket counts are stored cumulatively; the ``+Inf`` bucket equals the
    observation count.
    """

    kind = "histogram"

    def __init__(self, name: str, description: str, buckets: Iterable[float], label_names: Iterable[str] = ()):
        super().__init__(name, description, label_names)
        self.buckets = sorted(float(b) for b in buckets)
        self._counts: Dict[LabelValues, List[int]] = defaultdict(lambda: [0] * len(self.buckets))
        self._sums: Dict[LabelValues, float] = defaultdict(float)
        self._totals: Dict[LabelValues, int] = defaultdict(int)

    def observe(self, value: float, **labels: str) -> None:
        key = self._key(labels)
        with self._lock:
            counts = self._counts[key]
            for idx, upper in enumerate(self.buckets):
                if value <= upper:
                    counts[idx] += 1
            self._totals[key] += 1
            self._sums[key] += float(value)

    def count(self, **labels: str) -> int:
        with self._lock:
            return self._totals.get(self._key(labels), 0)

    def to_prometheus(self) -> List[str]:
        lines = self._header()
        with self._lock:
            for label_values, total in self._totals.items():
                for upper, count in zip(self.buckets, self._counts[label_values]):
                    lines.append(f"{self.name}_bucket{self._format_labels(label_values, le=str(upper))} {count}")
                lines.append(f"{self.name}_bucket{self._format_labels(label_values, le='+Inf')} {total}")
                label_str = self._format_labels(label_values)
                lines.append(f"{self.name}_sum{label_str} {self._sums[label_values]}")
                lines.append(f"{self.name}_count{label_str} {total}")
        return lines


_METRIC_REGISTRY: List[Metric] = []


def generate_metrics_text() -> str:
    """Render every registered metric."""
    lines: List[str] = []
    for metric in _METRIC_REGISTRY:
        lines.extend(metric.to_prometheus())
    return "\n".join(lines) + "\n"


# -----------------------------------------------------------------------------
# Checkout metrics
# -----------------------------------------------------------------------------

# Completed and rejected checkouts
CHECKOUT_TOTAL = Counter(
    name="checkout_total",
    description="Checkout attempts by outcome",
    label_names=["outcome"],
)

# Rejected checkouts, labelled by error class (empty_cart, out_of_stock, ...)
CHECKOUT_ERROR_TOTAL = Counter(
    name="checkout_error_total",
    description="Total number of checkout errors, labelled by type",
    label_names=["type"],
)

CHECKOUT_DURATION_SECONDS = Histogram(
    name="checkout_duration_seconds",
    description="Duration of checkout operations in seconds",
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0],
)

SHIPPED_WEIGHT_KG = Histogram(
    name="shipped_weight_kg",
    description="Parcel weight per successful checkout in kilograms",
    buckets=[0.5, 1.0, 2.0, 5.0, 10.0, 25.0],
)
