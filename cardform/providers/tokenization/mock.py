"""Mock tokenization service for testing."""

import asyncio
from collections.abc import Iterable

from cardform.form.cards import CardDetails
from cardform.providers.errors import TokenizationError
from cardform.providers.tokenization.base import PaymentToken, TokenizationService


class MockTokenizationService(TokenizationService):
    """Tokenization service that never leaves the process.

    Each call consumes the next scripted result (a ``PaymentToken`` or an
    exception to raise). Once the script is exhausted it returns
    ``tok_<n>`` / ``card_<n>`` for the n-th call. ``pause()`` holds every
    call until ``resume()``.
    """

    def __init__(
        self,
        results: Iterable[PaymentToken | Exception] | None = None,
        latency: float = 0.0,
    ):
        """Initialize mock service.

        Args:
            results: Scripted results, consumed one per call
            latency: Seconds to sleep before answering
        """
        self._results = list(results or [])
        self._latency = latency
        self._released = asyncio.Event()
        self._released.set()
        self._call_history: list[CardDetails] = []

    @property
    def provider_name(self) -> str:
        return "mock"

    @property
    def call_history(self) -> list[CardDetails]:
        """Cards passed to ``tokenize``, in call order."""
        return self._call_history

    def fail_next(self, message: str) -> None:
        """Make the next unscripted call fail with ``message``."""
        self._results.append(TokenizationError(message))

    def pause(self) -> None:
        self._released.clear()

    def resume(self) -> None:
        self._released.set()

    async def tokenize(self, card: CardDetails) -> PaymentToken:
        self._call_history.append(card)
        call_number = len(self._call_history)
        result = self._results.pop(0) if self._results else None

        await self._released.wait()
        if self._latency:
            await asyncio.sleep(self._latency)

        if isinstance(result, Exception):
            raise result
        if result is not None:
            return result
        return PaymentToken(id=f"tok_{call_number}", card_id=f"card_{call_number}")
