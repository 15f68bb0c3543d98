"""Card tokenization with the payment processor."""

from cardform.providers.tokenization.base import PaymentToken, TokenizationService
from cardform.providers.tokenization.mock import MockTokenizationService

__all__ = ["MockTokenizationService", "PaymentToken", "TokenizationService"]
