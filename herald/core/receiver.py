# herald/core/receiver.py
"""
Convenience helpers for registering listeners.
"""

from __future__ import annotations
from typing import Any, Callable, List, Optional

from .binding import SignalBinding
from .signal import Signal


def on_signal(signal: Signal, priority: int = 0, once: bool = False):
    """Decorator to add a function to a signal."""
    def decorator(func: Callable[..., Any]):
        signal.add(func, None, priority, once)
        return func
    return decorator


class SignalReceiver:
    """Mixin class for objects that listen to signals."""

    _bindings: Optional[List[SignalBinding]] = None

    def subscribe(self,
                  signal: Signal,
                  handler: Callable[..., Any],
                  priority: int = 0,
                  once: bool = False) -> SignalBinding:
        """
        Add ``handler`` with this object as binding target.

        Plain functions receive the receiver as their first argument; bound
        methods are called as they are.
        """
        if self._bindings is None:
            self._bindings = []
        binding = signal.add(handler, self, priority, once)
        if binding not in self._bindings:
            self._bindings.append(binding)
        return binding

    def unsubscribe_all(self) -> None:
        if self._bindings:
            for binding in self._bindings:
                binding.detach()
            self._bindings.clear()
