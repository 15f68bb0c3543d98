"""In-memory payment method store for testing."""

from pydantic import BaseModel, ConfigDict

from cardform.providers.errors import PaymentMethodSaveError
from cardform.providers.payment_methods.base import PaymentMethodKind, PaymentMethodStore


class SavedPaymentMethod(BaseModel):
    """A payment method recorded by the in-memory store."""

    model_config = ConfigDict(frozen=True)

    kind: PaymentMethodKind
    token_id: str
    card_id: str


class InMemoryPaymentMethodStore(PaymentMethodStore):
    """Keeps saved payment methods in a list.

    ``fail_next(message)`` makes the next call raise ``PaymentMethodSaveError``.
    """

    def __init__(self) -> None:
        self._saved: list[SavedPaymentMethod] = []
        self._failures: list[str] = []
        self.calls = 0

    @property
    def saved(self) -> list[SavedPaymentMethod]:
        return list(self._saved)

    def fail_next(self, message: str) -> None:
        self._failures.append(message)

    async def save(self, kind: PaymentMethodKind, token_id: str, card_id: str) -> None:
        self.calls += 1
        if self._failures:
            raise PaymentMethodSaveError(self._failures.pop(0))
        self._saved.append(SavedPaymentMethod(kind=kind, token_id=token_id, card_id=card_id))
