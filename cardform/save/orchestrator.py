"""Save orchestrator: tokenize the card, then store the token.

Each call to ``start`` is one attempt. The attempt captures the form
snapshot, shows the progress bar, tokenizes the card, stores the resulting
token pair as a payment method and publishes exactly one of ``success`` or
``error`` followed by hiding the progress bar.

Attempts are numbered by a generation counter. Starting a new attempt makes
every older one stale: a stale attempt publishes nothing and stops before
the persistence call if it is still before it. The remote calls themselves
are not cancelled.
"""

import asyncio
import time
from collections.abc import Awaitable
from typing import TypeVar

import structlog

from cardform.config.models.payments import PaymentsConfig
from cardform.form.cards import CardDetails
from cardform.form.models import FormSnapshot, PresentCard
from cardform.observability.logging import get_logger
from cardform.observability.metrics import (
    REMOTE_CALL_LATENCY,
    SAVE_ATTEMPTS,
    SAVE_OUTCOMES,
    SUPERSEDED_ATTEMPTS,
)
from cardform.providers.errors import PaymentServiceError
from cardform.providers.payment_methods.base import PaymentMethodStore
from cardform.providers.tokenization.base import TokenizationService
from cardform.reactive import Signal, StateSignal
from cardform.save.models import SaveFailure, SaveOutcome, SaveState, SaveSuccess

logger = get_logger(__name__)

T = TypeVar("T")


def build_card_payload(snapshot: FormSnapshot) -> CardDetails | None:
    """Copy the snapshot's card and fill in the name and postal code.

    The card widget does not collect those two fields. Returns None when the
    snapshot has no card.
    """
    card = snapshot.card
    if not isinstance(card, PresentCard):
        return None
    return card.details.model_copy(
        update={"name": snapshot.name, "address_zip": snapshot.postal_code},
        deep=True,
    )


class SaveOrchestrator:
    """Run save attempts and publish their progress and outcome.

    Must be driven from a running event loop; ``start`` schedules the remote
    work as a task on it so completions are handled on the loop.
    """

    def __init__(
        self,
        tokenizer: TokenizationService,
        payment_methods: PaymentMethodStore,
        config: PaymentsConfig | None = None,
        *,
        metrics_enabled: bool = True,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            tokenizer: Payment processor client
            payment_methods: Account service storing the token
            config: Payment settings (timeouts, messages, method kind)
            metrics_enabled: Record Prometheus metrics
        """
        self._tokenizer = tokenizer
        self._payment_methods = payment_methods
        self._config = config or PaymentsConfig()
        self._metrics_enabled = metrics_enabled

        self._generation = 0
        self._state = SaveState.IDLE
        self._last_outcome: SaveOutcome | None = None
        self._tasks: set[asyncio.Task[SaveOutcome | None]] = set()

        self.progress_visible: StateSignal[bool] = StateSignal("progress_visible")
        self.success: Signal[None] = Signal("save_success")
        self.error: Signal[str] = Signal("save_error")

    @property
    def state(self) -> SaveState:
        """State of the current attempt."""
        return self._state

    @property
    def last_outcome(self) -> SaveOutcome | None:
        """Outcome of the most recent attempt that was not superseded."""
        return self._last_outcome

    @property
    def in_flight(self) -> int:
        """Number of attempts whose remote work has not finished."""
        return sum(1 for task in self._tasks if not task.done())

    def start(self, snapshot: FormSnapshot) -> asyncio.Task[SaveOutcome | None]:
        """Start a save attempt for ``snapshot``, superseding any earlier one.

        Returns the task running the attempt. It resolves to the outcome, or
        None when the attempt was superseded.
        """
        loop = asyncio.get_running_loop()

        self._generation += 1
        attempt_id = self._generation
        if self.in_flight:
            logger.info("save_attempt_superseding", attempt_id=attempt_id, in_flight=self.in_flight)

        self._state = SaveState.CAPTURING
        payload = build_card_payload(snapshot)

        if self._metrics_enabled:
            SAVE_ATTEMPTS.inc()
        logger.info(
            "save_attempt_started",
            attempt_id=attempt_id,
            brand=snapshot.card.brand.value,
        )

        self.progress_visible.publish(True)
        task = loop.create_task(self._run(attempt_id, payload), name=f"card-save-{attempt_id}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def close(self) -> None:
        """Invalidate and cancel outstanding attempts, detach all listeners."""
        self._generation += 1
        for task in list(self._tasks):
            task.cancel()
        self._state = SaveState.IDLE
        self.progress_visible.clear()
        self.success.clear()
        self.error.clear()

    def _is_current(self, attempt_id: int) -> bool:
        return attempt_id == self._generation

    def _enter(self, attempt_id: int, state: SaveState) -> None:
        if self._is_current(attempt_id):
            self._state = state

    async def _run(self, attempt_id: int, payload: CardDetails | None) -> SaveOutcome | None:
        with structlog.contextvars.bound_contextvars(save_attempt_id=attempt_id):
            stage = SaveState.CAPTURING
            try:
                if payload is None:
                    logger.warning("save_attempt_without_card")
                    raise PaymentServiceError(self._config.fallback_error_message)

                stage = SaveState.TOKENIZING
                self._enter(attempt_id, stage)
                token = await self._call("tokenize", self._tokenizer.tokenize(payload))
                logger.info("card_tokenized", provider=self._tokenizer.provider_name)

                if not self._is_current(attempt_id):
                    return self._discard(attempt_id, stage)

                stage = SaveState.PERSISTING
                self._enter(attempt_id, stage)
                await self._call(
                    "persist",
                    self._payment_methods.save(
                        self._config.payment_method_kind, token.id, token.card_id
                    ),
                )
                logger.info("payment_method_saved", kind=self._config.payment_method_kind.value)
                outcome: SaveOutcome = SaveSuccess(attempt_id=attempt_id, token_id=token.id)

            except asyncio.CancelledError:
                if self._is_current(attempt_id):
                    self._state = SaveState.IDLE
                    self.progress_visible.publish(False)
                raise

            except Exception as e:
                outcome = SaveFailure(
                    attempt_id=attempt_id,
                    message=self._message_for(e),
                    stage=stage,
                )
                logger.warning(
                    "save_attempt_failed",
                    stage=stage.value,
                    error_type=type(e).__name__,
                    error=outcome.message,
                )

            return self._finish(attempt_id, outcome, stage)

    async def _call(self, stage: str, awaitable: Awaitable[T]) -> T:
        start_time = time.perf_counter()
        try:
            if self._config.request_timeout_seconds is None:
                return await awaitable
            return await asyncio.wait_for(awaitable, self._config.request_timeout_seconds)
        except TimeoutError as e:
            raise PaymentServiceError(self._config.timeout_message) from e
        finally:
            if self._metrics_enabled:
                REMOTE_CALL_LATENCY.labels(stage=stage).observe(time.perf_counter() - start_time)

    def _message_for(self, error: Exception) -> str:
        if isinstance(error, PaymentServiceError):
            message = error.message
        else:
            message = str(error)
        return message or self._config.fallback_error_message

    def _discard(self, attempt_id: int, stage: SaveState) -> None:
        if self._metrics_enabled:
            SUPERSEDED_ATTEMPTS.labels(stage=stage.value).inc()
        logger.info("save_attempt_superseded", attempt_id=attempt_id, stage=stage.value)
        return None

    def _finish(self, attempt_id: int, outcome: SaveOutcome, stage: SaveState) -> SaveOutcome | None:
        if not self._is_current(attempt_id):
            return self._discard(attempt_id, stage)

        self._last_outcome = outcome
        if isinstance(outcome, SaveSuccess):
            self._state = SaveState.SUCCEEDED
            if self._metrics_enabled:
                SAVE_OUTCOMES.labels(outcome="success", stage=stage.value).inc()
            self.success.publish(None)
        else:
            self._state = SaveState.FAILED
            if self._metrics_enabled:
                SAVE_OUTCOMES.labels(outcome="failure", stage=stage.value).inc()
            self.error.publish(outcome.message)

        self.progress_visible.publish(False)
        self._state = SaveState.IDLE
        return outcome
