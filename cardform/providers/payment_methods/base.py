"""Payment method persistence interface."""

from abc import ABC, abstractmethod
from enum import Enum


class PaymentMethodKind(str, Enum):
    """Kind of payment method stored against the account."""

    CREDIT_CARD = "credit_card"


class PaymentMethodStore(ABC):
    """Stores a tokenized payment method on the user's account.

    Single-shot, no retries. Failures raise ``PaymentMethodSaveError``
    carrying a user-facing message.
    """

    @abstractmethod
    async def save(self, kind: PaymentMethodKind, token_id: str, card_id: str) -> None:
        """Persist the token pair as a payment method of ``kind``.

        Raises:
            PaymentMethodSaveError: The account service rejected the request
        """
        pass
