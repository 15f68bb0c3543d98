"""End-to-end scenarios for the add-card form with in-memory services."""

import asyncio

import pytest

from cardform.controller import NewCardController
from cardform.providers import (
    InMemoryPaymentMethodStore,
    MockTokenizationService,
    PaymentMethodKind,
    PaymentToken,
    TokenizationError,
)
from tests.factories.cards import CardDetailsFactory

pytestmark = pytest.mark.integration


class FormSession:
    """Drives a controller the way the form UI does and records its outputs."""

    def __init__(self, controller: NewCardController) -> None:
        self.controller = controller
        self.progress: list[bool] = []
        self.success: list[None] = []
        self.errors: list[str] = []
        self.warnings: list[bool] = []
        outputs = controller.outputs
        outputs.progress_visible.subscribe(self.progress.append)
        outputs.success.subscribe(self.success.append)
        outputs.error.subscribe(self.errors.append)
        outputs.allowed_card_warning_visible.subscribe(self.warnings.append)

    def type_card_number(self, number: str) -> None:
        for end in range(1, len(number) + 1):
            self.controller.inputs.set_card_number(number[:end])

    def fill(self, *, name: str = "Ada", postal_code: str = "12345") -> None:
        card = CardDetailsFactory.create()
        inputs = self.controller.inputs
        inputs.set_focus(True)
        inputs.set_name(name)
        self.type_card_number(card.number)
        inputs.set_card(card)
        inputs.set_focus(False)
        inputs.set_postal_code(postal_code)


def make_session(
    tokenizer: MockTokenizationService | None = None,
    store: InMemoryPaymentMethodStore | None = None,
) -> tuple[FormSession, MockTokenizationService, InMemoryPaymentMethodStore]:
    tokenizer = tokenizer or MockTokenizationService()
    store = store or InMemoryPaymentMethodStore()
    return FormSession(NewCardController(tokenizer, store)), tokenizer, store


@pytest.mark.asyncio
async def test_valid_visa_is_saved() -> None:
    tokenizer = MockTokenizationService(
        results=[PaymentToken(id="tok_1", card_id="card_1")]
    )
    session, _, store = make_session(tokenizer)
    session.fill()

    assert session.controller.outputs.save_button_enabled.value is True
    await session.controller.inputs.trigger_save()

    assert session.success == [None]
    assert session.progress == [True, False]
    assert session.errors == []
    assert len(store.saved) == 1
    saved = store.saved[0]
    assert (saved.kind, saved.token_id, saved.card_id) == (
        PaymentMethodKind.CREDIT_CARD,
        "tok_1",
        "card_1",
    )


@pytest.mark.asyncio
async def test_declined_card_reports_error() -> None:
    tokenizer = MockTokenizationService(results=[TokenizationError("Your card was declined.")])
    session, _, store = make_session(tokenizer)
    session.fill()

    await session.controller.inputs.trigger_save()

    assert session.errors == ["Your card was declined."]
    assert session.progress == [True, False]
    assert session.success == []
    assert store.calls == 0


@pytest.mark.parametrize(
    ("number", "warning_shown"),
    [("6011", False), ("3528", False), ("6200", True)],
)
def test_warning_only_for_unsupported_brand(number: str, warning_shown: bool) -> None:
    session, _, _ = make_session()
    session.type_card_number(number)
    assert session.controller.outputs.allowed_card_warning_visible.value is warning_shown
    assert session.warnings == ([False, True] if warning_shown else [False])


@pytest.mark.asyncio
async def test_double_trigger_observes_only_second_attempt() -> None:
    tokenizer = MockTokenizationService(results=[TokenizationError("first attempt failed")])
    session, _, store = make_session(tokenizer)
    session.fill()

    tokenizer.pause()
    first = session.controller.inputs.trigger_save()
    await asyncio.sleep(0)
    second = session.controller.inputs.trigger_save()
    tokenizer.resume()
    await asyncio.gather(first, second)

    assert session.errors == []
    assert session.success == [None]
    assert session.progress == [True, True, False]
    assert [method.token_id for method in store.saved] == ["tok_2"]


@pytest.mark.asyncio
async def test_user_can_retry_after_failure() -> None:
    session, tokenizer, store = make_session()
    session.fill()

    store.fail_next("Something went wrong on our end.")
    await session.controller.inputs.trigger_save()
    await session.controller.inputs.trigger_save()

    assert session.errors == ["Something went wrong on our end."]
    assert session.success == [None]
    assert session.progress == [True, False, True, False]
    assert len(tokenizer.call_history) == 2
