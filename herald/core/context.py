# herald/core/context.py
"""
DispatchContext - per-dispatch handle passed to two-parameter listeners.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import logging

if TYPE_CHECKING:
    from .signal import Signal

logger = logging.getLogger(__name__)


class DispatchContext:
    """
    Created fresh by every ``Signal.dispatch`` call.

    Listeners call ``halt()`` to stop the remaining, lower priority listeners
    from running inside the dispatch. Listeners deferred by a halt still get
    the same instance afterwards.
    """

    __slots__ = ("_signal", "_halted", "_yielded")

    def __init__(self, signal: "Signal"):
        self._signal = signal
        self._halted = False
        self._yielded = False

    @property
    def signal(self) -> "Signal":
        return self._signal

    @property
    def was_halted(self) -> bool:
        return self._halted

    @property
    def was_yielded(self) -> bool:
        """True once the dispatch's resolution condition has been met."""
        return self._yielded

    def halt(self) -> None:
        if self._halted:
            logger.warning("`halt` was already called on this context.")
        if self._yielded:
            logger.warning("`halt` called after the dispatch had already resolved.")
        self._halted = True

    # Engine-only ----------------------------------------------------------

    def _halt_silently(self) -> None:
        self._halted = True

    def _mark_yielded(self) -> None:
        self._yielded = True

    def __repr__(self) -> str:
        return f"DispatchContext(halted={self._halted}, yielded={self._yielded})"
