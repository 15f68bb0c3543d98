"""Tokenization service interface."""

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field

from cardform.form.cards import CardDetails


class PaymentToken(BaseModel):
    """Opaque token pair returned by the payment processor."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Single-use token identifier")
    card_id: str = Field(..., description="Processor-side card identifier")


class TokenizationService(ABC):
    """Exchanges raw card data for a payment token.

    Implementations are single-shot: no retries. Failures raise
    ``TokenizationError`` carrying a user-facing message.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def tokenize(self, card: CardDetails) -> PaymentToken:
        """Tokenize ``card``.

        Raises:
            TokenizationError: The processor rejected the card
        """
        pass
