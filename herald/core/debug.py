# herald/core/debug.py
"""
SignalDebugger - logs every dispatch of a signal.
"""

from __future__ import annotations
from typing import Any, List, Optional
import logging

from .signal import Signal

logger = logging.getLogger(__name__)


class SignalDebugger:
    """Debug wrapper that logs payloads and outcomes of a signal."""

    def __init__(self, signal: Signal, name: Optional[str] = None):
        self.signal = signal
        self.name = name or f"signal@{id(signal):x}"
        self.dispatch_count = 0
        self._original_dispatch = signal.dispatch
        signal.dispatch = self._debug_dispatch

    async def _debug_dispatch(self, payload: Any = None) -> List[Any]:
        self.dispatch_count += 1
        logger.debug(f"SIGNAL: {self.name}({payload!r}) -> {self.signal.binding_count} binding(s)")
        try:
            outcomes = await self._original_dispatch(payload)
        except Exception as e:
            logger.debug(f"SIGNAL: {self.name} failed: {e!r}")
            raise
        logger.debug(f"SIGNAL: {self.name} outcomes={outcomes!r}")
        return outcomes

    def detach(self) -> None:
        self.signal.dispatch = self._original_dispatch
