"""Controller behind the "add payment card" form.

The UI layer feeds raw edits in through the mutators and renders the output
signals. One controller serves one form session and must be used from the
event loop thread.

    controller = NewCardController(tokenizer, payment_methods)
    controller.outputs.save_button_enabled.subscribe(button.set_enabled)
    controller.outputs.error.subscribe(show_error)

    controller.inputs.set_name("Ada")
    controller.inputs.trigger_save()
"""

import asyncio
from typing import Protocol

from cardform.config import get_settings
from cardform.config.models.payments import PaymentsConfig
from cardform.config.settings import Settings
from cardform.form.brands import BrandClassifier, classify_brand
from cardform.form.cards import CardDetails
from cardform.form.focus import focus_affordance
from cardform.form.models import AbsentCard, FocusAffordance, FormSnapshot, PresentCard
from cardform.form.store import FieldStore
from cardform.form.validation import is_allowed_card, is_valid
from cardform.observability.logging import configure_logging, get_logger
from cardform.providers.payment_methods.base import PaymentMethodStore
from cardform.providers.tokenization.base import TokenizationService
from cardform.reactive import Signal, StateSignal, Subscription
from cardform.save.models import SaveOutcome, SaveState
from cardform.save.orchestrator import SaveOrchestrator

logger = get_logger(__name__)


class ControllerInputs(Protocol):
    """Events coming from the form widgets."""

    def set_card(self, card: CardDetails | PresentCard | AbsentCard | None) -> None:
        """Call when the card widget's verdict changes (None: no card)."""
        ...

    def set_card_number(self, card_number: str) -> None:
        """Call when the card number text changes."""
        ...

    def set_name(self, name: str) -> None:
        """Call when the name field changes."""
        ...

    def set_postal_code(self, postal_code: str) -> None:
        """Call when the postal code field changes."""
        ...

    def set_focus(self, has_focus: bool) -> None:
        """Call when the card widget gains or loses focus."""
        ...

    def trigger_save(self) -> "asyncio.Task[SaveOutcome | None] | None":
        """Call when the user clicks save."""
        ...


class ControllerOutputs(Protocol):
    """Signals the form renders."""

    # Emits whether the save button should be enabled, only on change
    save_button_enabled: StateSignal[bool]
    # Emits whether the unsupported-card warning is shown, only on change
    allowed_card_warning_visible: StateSignal[bool]
    # Emits the divider style under the card widget on every focus change
    focus_affordance: StateSignal[FocusAffordance]
    # Emits whether the progress bar is shown
    progress_visible: StateSignal[bool]
    # Emits when the card was saved
    success: Signal[None]
    # Emits the message of a failed save
    error: Signal[str]


class NewCardController:
    """Reactive controller for one "add payment card" form session."""

    def __init__(
        self,
        tokenizer: TokenizationService,
        payment_methods: PaymentMethodStore,
        config: PaymentsConfig | None = None,
        *,
        classify: BrandClassifier = classify_brand,
        metrics_enabled: bool = True,
    ) -> None:
        """Initialize the controller.

        Args:
            tokenizer: Payment processor client
            payment_methods: Account service storing payment methods
            config: Payment settings (allowed brands, timeouts, messages)
            classify: Brand classifier applied to the typed card number
            metrics_enabled: Record Prometheus metrics for save attempts
        """
        self._config = config or PaymentsConfig()
        self._classify = classify
        self._closed = False

        self._store = FieldStore()
        self._orchestrator = SaveOrchestrator(
            tokenizer,
            payment_methods,
            self._config,
            metrics_enabled=metrics_enabled,
        )

        self.save_button_enabled: StateSignal[bool] = StateSignal(
            "save_button_enabled", distinct=True
        )
        self.allowed_card_warning_visible: StateSignal[bool] = StateSignal(
            "allowed_card_warning_visible", distinct=True
        )
        self.focus_affordance: StateSignal[FocusAffordance] = StateSignal("focus_affordance")
        self.progress_visible = self._orchestrator.progress_visible
        self.success = self._orchestrator.success
        self.error = self._orchestrator.error

        self._subscriptions: list[Subscription] = [
            self._store.snapshots.subscribe(self._on_snapshot),
            self._store.focus.subscribe(self._on_focus),
        ]

    @classmethod
    def from_settings(
        cls,
        tokenizer: TokenizationService,
        payment_methods: PaymentMethodStore,
        settings: Settings | None = None,
    ) -> "NewCardController":
        """Build a controller from the loaded configuration.

        Also applies the logging section of the settings.
        """
        settings = settings or get_settings()
        configure_logging(settings.observability.logging)
        return cls(
            tokenizer,
            payment_methods,
            settings.payments,
            metrics_enabled=settings.observability.metrics.enabled,
        )

    @property
    def inputs(self) -> ControllerInputs:
        return self

    @property
    def outputs(self) -> ControllerOutputs:
        return self

    @property
    def snapshot(self) -> FormSnapshot | None:
        """Latest form snapshot, None until the first form edit."""
        return self._store.snapshot

    @property
    def save_state(self) -> SaveState:
        return self._orchestrator.state

    @property
    def last_outcome(self) -> SaveOutcome | None:
        return self._orchestrator.last_outcome

    @property
    def closed(self) -> bool:
        return self._closed

    def set_card(self, card: CardDetails | PresentCard | AbsentCard | None) -> None:
        self._store.set_card(card)

    def set_card_number(self, card_number: str) -> None:
        self._store.set_card_number(card_number)

    def set_name(self, name: str) -> None:
        self._store.set_name(name)

    def set_postal_code(self, postal_code: str) -> None:
        self._store.set_postal_code(postal_code)

    def set_focus(self, has_focus: bool) -> None:
        self._store.set_focus(has_focus)

    def trigger_save(self) -> "asyncio.Task[SaveOutcome | None] | None":
        """Save the latest snapshot.

        Does nothing and returns None until the form has been edited, or
        after ``close()``. Otherwise returns the task running the attempt.
        """
        if self._closed:
            logger.warning("save_trigger_after_close")
            return None

        snapshot = self._store.snapshot
        if snapshot is None:
            logger.debug("save_trigger_ignored", reason="no_snapshot")
            return None
        return self._orchestrator.start(snapshot)

    def close(self) -> None:
        """End the form session.

        Detaches every listener and silences attempts still in flight.
        """
        if self._closed:
            return
        self._closed = True

        for subscription in self._subscriptions:
            subscription.dispose()
        self._store.close()
        self._orchestrator.close()
        self.save_button_enabled.clear()
        self.allowed_card_warning_visible.clear()
        self.focus_affordance.clear()
        logger.debug("card_form_closed")

    def _on_snapshot(self, snapshot: FormSnapshot) -> None:
        allowed = self._config.allowed_brands
        min_length = self._config.min_classifiable_length
        self.save_button_enabled.publish(
            is_valid(snapshot, allowed=allowed, classify=self._classify, min_length=min_length)
        )
        self.allowed_card_warning_visible.publish(
            not is_allowed_card(
                snapshot, allowed=allowed, classify=self._classify, min_length=min_length
            )
        )

    def _on_focus(self, has_focus: bool) -> None:
        self.focus_affordance.publish(focus_affordance(has_focus))
