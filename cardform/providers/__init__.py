"""External payment services: card tokenization and payment method storage.

Abstract interfaces plus in-memory implementations for tests and demos.
"""

from cardform.providers.errors import (
    PaymentMethodSaveError,
    PaymentServiceError,
    TokenizationError,
)
from cardform.providers.payment_methods import (
    InMemoryPaymentMethodStore,
    PaymentMethodKind,
    PaymentMethodStore,
)
from cardform.providers.tokenization import (
    MockTokenizationService,
    PaymentToken,
    TokenizationService,
)

__all__ = [
    # Errors
    "PaymentServiceError",
    "TokenizationError",
    "PaymentMethodSaveError",
    # Tokenization
    "TokenizationService",
    "PaymentToken",
    "MockTokenizationService",
    # Persistence
    "PaymentMethodStore",
    "PaymentMethodKind",
    "InMemoryPaymentMethodStore",
]
