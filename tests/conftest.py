"""Shared test fixtures for the cardform test suite."""

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import structlog

from cardform.config.models.payments import PaymentsConfig
from cardform.controller import NewCardController
from cardform.providers import InMemoryPaymentMethodStore, MockTokenizationService


@pytest.fixture
def test_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def mock_toml_files(test_config_dir: Path) -> Callable[[dict[str, str]], None]:
    """Factory fixture to create TOML files in the test config directory.

    Usage:
        def test_something(mock_toml_files):
            mock_toml_files({
                "default.toml": "[payments]\\nmin_classifiable_length = 3",
                "development.toml": "[observability.logging]\\nlevel = 'DEBUG'",
            })
    """

    def _create_toml_files(files: dict[str, str]) -> None:
        for filename, content in files.items():
            (test_config_dir / filename).write_text(content)

    return _create_toml_files


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test."""
    from cardform.config import get_settings
    from cardform.config.settings import set_toml_config

    get_settings.cache_clear()
    set_toml_config({})
    yield
    get_settings.cache_clear()
    set_toml_config({})


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Keep logging configuration from leaking between tests."""
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.fixture
def tokenizer() -> MockTokenizationService:
    return MockTokenizationService()


@pytest.fixture
def payment_methods() -> InMemoryPaymentMethodStore:
    return InMemoryPaymentMethodStore()


@pytest.fixture
def payments_config() -> PaymentsConfig:
    return PaymentsConfig(request_timeout_seconds=5.0)


@pytest.fixture
def controller(
    tokenizer: MockTokenizationService,
    payment_methods: InMemoryPaymentMethodStore,
    payments_config: PaymentsConfig,
) -> Generator[NewCardController, None, None]:
    """Controller wired to in-memory services."""
    controller = NewCardController(tokenizer, payment_methods, payments_config)
    yield controller
    controller.close()


class Recorder:
    """Collects every value a signal publishes."""

    def __init__(self) -> None:
        self.values: list[Any] = []

    def __call__(self, value: Any) -> None:
        self.values.append(value)

    @property
    def count(self) -> int:
        return len(self.values)


@pytest.fixture
def recorder() -> Callable[[], Recorder]:
    """Factory for signal recorders."""
    return Recorder
