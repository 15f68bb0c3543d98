"""Payment method persistence on the user's account."""

from cardform.providers.payment_methods.base import PaymentMethodKind, PaymentMethodStore
from cardform.providers.payment_methods.mock import (
    InMemoryPaymentMethodStore,
    SavedPaymentMethod,
)

__all__ = [
    "InMemoryPaymentMethodStore",
    "PaymentMethodKind",
    "PaymentMethodStore",
    "SavedPaymentMethod",
]
