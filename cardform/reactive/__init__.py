"""Reactive primitives used to wire form inputs to form outputs."""

from cardform.reactive.signal import Listener, Signal, StateSignal, Subscription

__all__ = ["Listener", "Signal", "StateSignal", "Subscription"]
