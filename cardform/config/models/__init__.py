"""Configuration model exports.

    from cardform.config.models import PaymentsConfig, ObservabilityConfig
"""

from cardform.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from cardform.config.models.payments import DEFAULT_ALLOWED_BRANDS, PaymentsConfig

__all__ = [
    "DEFAULT_ALLOWED_BRANDS",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "PaymentsConfig",
]
