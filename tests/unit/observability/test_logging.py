"""Tests for structured logging."""

import json

import pytest
import structlog

from cardform.config.models.observability import LoggingConfig
from cardform.observability.logging import (
    PIIRedactor,
    configure_logging,
    get_logger,
    setup_logging,
)


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_json_format(self, capsys: pytest.CaptureFixture[str]) -> None:
        """JSON format writes one JSON object per event to stderr."""
        setup_logging(level="INFO", format="json", redact_pii=False)
        get_logger("test").info("card_form_opened", session="s1")

        line = capsys.readouterr().err.strip().splitlines()[-1]
        payload = json.loads(line)
        assert payload["event"] == "card_form_opened"
        assert payload["session"] == "s1"
        assert payload["level"] == "info"

    def test_setup_console_format(self) -> None:
        setup_logging(level="DEBUG", format="console", redact_pii=False)
        # Should not raise
        get_logger("test").debug("test_message")

    def test_level_filters_lower_events(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="WARNING", format="json", redact_pii=False)
        get_logger("test").info("hidden_event")
        assert "hidden_event" not in capsys.readouterr().err

    def test_redaction_applied_when_enabled(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="INFO", format="json", redact_pii=True)
        get_logger("test").info("card_entered", card_number="4242424242424242")

        output = capsys.readouterr().err
        assert "4242424242424242" not in output
        assert "[REDACTED]" in output

    def test_bound_context_appears_in_logs(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(level="INFO", format="json", redact_pii=False)
        structlog.contextvars.bind_contextvars(save_attempt_id=7)
        get_logger("test").info("card_tokenized")

        payload = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert payload["save_attempt_id"] == 7


class TestPIIRedactor:
    """Tests for card data redaction."""

    @pytest.fixture
    def redactor(self) -> PIIRedactor:
        return PIIRedactor()

    @pytest.mark.parametrize(
        "key", ["card_number", "cvc", "postal_code", "address_zip", "token_id", "number"]
    )
    def test_redacts_sensitive_keys(self, redactor: PIIRedactor, key: str) -> None:
        result = redactor(None, None, {key: "secret-value", "other": "value"})  # type: ignore
        assert result[key] == "[REDACTED]"
        assert result["other"] == "value"

    def test_key_lookup_is_case_insensitive(self, redactor: PIIRedactor) -> None:
        result = redactor(None, None, {"CVC": "123"})  # type: ignore
        assert result["CVC"] == "[REDACTED]"

    def test_redacts_card_number_in_string(self, redactor: PIIRedactor) -> None:
        result = redactor(None, None, {"error": "card 4242 4242 4242 4242 declined"})  # type: ignore
        assert result["error"] == "card [CARD] declined"

    def test_redacts_email_in_string(self, redactor: PIIRedactor) -> None:
        result = redactor(None, None, {"note": "contact ada@example.com"})  # type: ignore
        assert result["note"] == "contact [EMAIL]"

    def test_short_numbers_untouched(self, redactor: PIIRedactor) -> None:
        """Attempt ids and short codes are not mistaken for card numbers."""
        result = redactor(None, None, {"message": "attempt 12 failed"})  # type: ignore
        assert result["message"] == "attempt 12 failed"

    def test_redacts_nested_structures(self, redactor: PIIRedactor) -> None:
        event = {
            "card": {"cvc": "123", "brand": "visa"},
            "numbers": ["4242424242424242", {"postal_code": "12345"}],
        }
        result = redactor(None, None, event)  # type: ignore
        assert result["card"] == {"cvc": "[REDACTED]", "brand": "visa"}
        assert result["numbers"][0] == "[CARD]"
        assert result["numbers"][1] == {"postal_code": "[REDACTED]"}

    def test_non_string_values_pass_through(self, redactor: PIIRedactor) -> None:
        result = redactor(None, None, {"attempt_id": 3, "ok": True})  # type: ignore
        assert result == {"attempt_id": 3, "ok": True}


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_applies_logging_config(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(LoggingConfig(level="ERROR", format="json", redact_pii=True))
        logger = get_logger("test")
        logger.warning("dropped_event")
        logger.error("save_attempt_failed", cvc="123")

        output = capsys.readouterr().err
        assert "dropped_event" not in output
        payload = json.loads(output.strip().splitlines()[-1])
        assert payload["event"] == "save_attempt_failed"
        assert payload["cvc"] == "[REDACTED]"
