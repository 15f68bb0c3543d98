"""Payment configuration models.

Controls which card brands the processor accepts and how the save
orchestrator talks to the tokenization and persistence services.
"""

from pydantic import BaseModel, Field

from cardform.form.brands import ALLOWED_BRANDS, CardBrand
from cardform.providers.payment_methods.base import PaymentMethodKind

DEFAULT_ALLOWED_BRANDS: frozenset[CardBrand] = ALLOWED_BRANDS


class PaymentsConfig(BaseModel):
    """Configuration for card classification and saving."""

    allowed_brands: frozenset[CardBrand] = Field(
        default=DEFAULT_ALLOWED_BRANDS,
        description="Card brands accepted by the payment processor",
    )
    min_classifiable_length: int = Field(
        default=3,
        ge=0,
        description="Card numbers shorter than this are never flagged as disallowed",
    )
    payment_method_kind: PaymentMethodKind = Field(
        default=PaymentMethodKind.CREDIT_CARD,
        description="Payment method kind sent to the persistence service",
    )
    request_timeout_seconds: float | None = Field(
        default=30.0,
        gt=0,
        description="Timeout for each remote call (None disables it)",
    )
    fallback_error_message: str = Field(
        default="Something went wrong, please try again.",
        min_length=1,
        description="Error message used when a failure carries no message",
    )
    timeout_message: str = Field(
        default="The request timed out, please try again.",
        min_length=1,
        description="Error message published when a remote call times out",
    )
