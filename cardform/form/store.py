"""Field store and form snapshot combinator.

Every form mutator records its field and republishes a complete
``FormSnapshot`` built from the latest value of all four form fields
(combine-latest). Focus has its own signal and never produces a snapshot.

Nothing is published until the first form mutation, so listeners never see
the all-defaults form as if the user had entered it.
"""

from cardform.form.cards import CardDetails
from cardform.form.models import AbsentCard, FormSnapshot, PresentCard, card_entry
from cardform.observability.logging import get_logger
from cardform.reactive import Signal, StateSignal

logger = get_logger(__name__)


class FieldStore:
    """Latest value of each form input for one form session."""

    def __init__(self) -> None:
        self._name = ""
        self._card: PresentCard | AbsentCard = card_entry(None)
        self._card_number = ""
        self._postal_code = ""
        self._focus = False

        self.snapshots: StateSignal[FormSnapshot] = StateSignal("form_snapshot")
        self.focus: Signal[bool] = Signal("card_focus")

    @property
    def snapshot(self) -> FormSnapshot | None:
        """Latest published snapshot, None until the first form edit."""
        return self.snapshots.value

    @property
    def current(self) -> FormSnapshot:
        """Snapshot of the current field values, defaults included."""
        return FormSnapshot(
            name=self._name,
            card=self._card,
            card_number=self._card_number,
            postal_code=self._postal_code,
        )

    @property
    def has_focus(self) -> bool:
        return self._focus

    def set_name(self, name: str) -> None:
        self._name = name
        self._publish()

    def set_card(self, card: CardDetails | PresentCard | AbsentCard | None) -> None:
        """Record the card widget's verdict; None means no card entered."""
        self._card = card_entry(card)
        self._publish()

    def set_card_number(self, card_number: str) -> None:
        self._card_number = card_number
        self._publish()

    def set_postal_code(self, postal_code: str) -> None:
        self._postal_code = postal_code
        self._publish()

    def set_focus(self, has_focus: bool) -> None:
        self._focus = has_focus
        self.focus.publish(has_focus)

    def close(self) -> None:
        """Detach every listener of both signals."""
        self.snapshots.clear()
        self.focus.clear()

    def _publish(self) -> None:
        snapshot = self.current
        logger.debug(
            "form_snapshot_published",
            has_name=bool(snapshot.name),
            has_postal_code=bool(snapshot.postal_code),
            card_present=snapshot.card.is_present,
            card_number_length=len(snapshot.card_number),
        )
        self.snapshots.publish(snapshot)
