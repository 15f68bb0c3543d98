"""Prometheus metrics for card saving."""

from prometheus_client import Counter, Histogram

SAVE_ATTEMPTS = Counter(
    "cardform_save_attempts_total",
    "Total number of save attempts started",
)

SAVE_OUTCOMES = Counter(
    "cardform_save_outcomes_total",
    "Terminal outcomes of save attempts",
    labelnames=["outcome", "stage"],
)

SUPERSEDED_ATTEMPTS = Counter(
    "cardform_superseded_attempts_total",
    "Save attempts whose result was discarded because a newer attempt started",
    labelnames=["stage"],
)

REMOTE_CALL_LATENCY = Histogram(
    "cardform_remote_call_latency_seconds",
    "Latency of tokenization and payment method persistence calls",
    labelnames=["stage"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0),
)
