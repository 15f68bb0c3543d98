"""Tests for Prometheus metrics."""

from prometheus_client import REGISTRY

from cardform.observability.metrics import (
    REMOTE_CALL_LATENCY,
    SAVE_ATTEMPTS,
    SAVE_OUTCOMES,
    SUPERSEDED_ATTEMPTS,
)


class TestSaveMetrics:
    """Tests for save attempt metrics."""

    def test_attempt_counter_increments(self) -> None:
        before = REGISTRY.get_sample_value("cardform_save_attempts_total") or 0.0
        SAVE_ATTEMPTS.inc()
        assert REGISTRY.get_sample_value("cardform_save_attempts_total") == before + 1

    def test_outcome_counter_labels(self) -> None:
        labels = {"outcome": "failure", "stage": "tokenizing"}
        before = REGISTRY.get_sample_value("cardform_save_outcomes_total", labels) or 0.0
        SAVE_OUTCOMES.labels(**labels).inc()
        assert REGISTRY.get_sample_value("cardform_save_outcomes_total", labels) == before + 1

    def test_superseded_counter_labels(self) -> None:
        SUPERSEDED_ATTEMPTS.labels(stage="tokenizing").inc()
        # Should not raise

    def test_latency_histogram_observe(self) -> None:
        labels = {"stage": "tokenize"}
        before = REGISTRY.get_sample_value("cardform_remote_call_latency_seconds_count", labels) or 0.0
        REMOTE_CALL_LATENCY.labels(**labels).observe(0.2)
        after = REGISTRY.get_sample_value("cardform_remote_call_latency_seconds_count", labels)
        assert after == before + 1
