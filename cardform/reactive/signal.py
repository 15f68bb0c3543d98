"""Push-based signals with explicit listener lists.

A ``Signal`` forwards each published value to the listeners registered at
that moment. A ``StateSignal`` also remembers its latest value, replays it
to new listeners and can suppress consecutive duplicates.

Publication is synchronous: ``publish`` returns once every listener ran.
A failing listener is logged and skipped so the others still receive the
value.
"""

from collections.abc import Callable
from typing import Any, Generic, TypeVar

from cardform.observability.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Listener = Callable[[T], Any]

_MISSING: Any = object()


class Subscription:
    """Handle returned by ``subscribe``; ``dispose()`` detaches the listener."""

    def __init__(self, signal: "Signal[Any]", listener: Listener[Any]) -> None:
        self._signal: Signal[Any] | None = signal
        self._listener = listener

    @property
    def disposed(self) -> bool:
        return self._signal is None

    def dispose(self) -> None:
        """Detach the listener. Safe to call more than once."""
        if self._signal is None:
            return
        self._signal._remove(self._listener)
        self._signal = None


class Signal(Generic[T]):
    """Publish/subscribe channel without replay."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: list[Listener[T]] = []

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener[T]) -> Subscription:
        """Register a listener for values published from now on."""
        self._listeners.append(listener)
        return Subscription(self, listener)

    def publish(self, value: T) -> None:
        """Deliver ``value`` to every listener registered right now."""
        for listener in list(self._listeners):
            self._dispatch(listener, value)

    def clear(self) -> None:
        """Drop every listener."""
        self._listeners.clear()

    def _remove(self, listener: Listener[T]) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            logger.warning("signal_listener_not_found", signal=self.name)

    def _dispatch(self, listener: Listener[T], value: T) -> None:
        try:
            listener(value)
        except Exception as e:
            logger.error(
                "signal_listener_failed",
                signal=self.name,
                error=str(e),
                exc_info=True,
            )


class StateSignal(Signal[T]):
    """Signal that holds its latest value.

    New listeners immediately receive the current value when one exists.
    With ``distinct=True`` a value equal to the current one is dropped.
    """

    def __init__(self, name: str, *, distinct: bool = False) -> None:
        super().__init__(name)
        self._distinct = distinct
        self._value: Any = _MISSING

    @property
    def has_value(self) -> bool:
        return self._value is not _MISSING

    @property
    def value(self) -> T | None:
        """Latest published value, or None before the first publication."""
        return None if self._value is _MISSING else self._value

    def subscribe(self, listener: Listener[T]) -> Subscription:
        subscription = super().subscribe(listener)
        if self.has_value:
            self._dispatch(listener, self._value)
        return subscription

    def publish(self, value: T) -> None:
        if self._distinct and self.has_value and self._value == value:
            return
        self._value = value
        super().publish(value)
