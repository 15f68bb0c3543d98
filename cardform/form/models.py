"""Form data models.

``FormSnapshot`` is the immutable aggregate the validation classifier and the
save orchestrator work on. The card slot is a tagged variant so "no card yet"
is distinguishable from a card that failed validation.
"""

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from cardform.form.brands import CardBrand
from cardform.form.cards import CardDetails


class FocusAffordance(str, Enum):
    """Divider style shown under the card widget."""

    FOCUSED = "focused"
    UNFOCUSED = "unfocused"


class PresentCard(BaseModel):
    """The card widget reported card data."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["present"] = "present"
    details: CardDetails

    @property
    def is_present(self) -> bool:
        return True

    @property
    def brand(self) -> CardBrand:
        return self.details.brand

    @property
    def number_valid(self) -> bool:
        return self.details.validate_number()

    @property
    def expiry_valid(self) -> bool:
        return self.details.validate_expiry_date()

    @property
    def cvc_valid(self) -> bool:
        return self.details.validate_cvc()


class AbsentCard(BaseModel):
    """No card has been entered yet."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["absent"] = "absent"

    @property
    def is_present(self) -> bool:
        return False

    @property
    def brand(self) -> CardBrand:
        return CardBrand.UNKNOWN

    @property
    def number_valid(self) -> bool:
        return False

    @property
    def expiry_valid(self) -> bool:
        return False

    @property
    def cvc_valid(self) -> bool:
        return False


CardEntry = Annotated[PresentCard | AbsentCard, Field(discriminator="kind")]

ABSENT_CARD = AbsentCard()


def card_entry(card: CardDetails | PresentCard | AbsentCard | None) -> PresentCard | AbsentCard:
    """Wrap widget output into a card entry, copying the details.

    The copy keeps later edits of the caller's object out of snapshots.
    """
    if card is None:
        return ABSENT_CARD
    if isinstance(card, AbsentCard):
        return card
    if isinstance(card, PresentCard):
        return PresentCard(details=card.details.model_copy(deep=True))
    return PresentCard(details=card.model_copy(deep=True))


class FormSnapshot(BaseModel):
    """Latest value of every form field, taken together."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    card: CardEntry = ABSENT_CARD
    card_number: str = ""
    postal_code: str = ""
