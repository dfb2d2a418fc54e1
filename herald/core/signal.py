# herald/core/signal.py
"""
Signal - single-event broadcast with prioritized, sequential listeners.

A dispatch walks a priority-ordered snapshot of the signal's bindings,
awaiting each listener before starting the next. After every listener the
configured resolution strategy is evaluated; a halt (from the policy or from
a listener) stops the loop and hands the rest of the snapshot to a
background task.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, List, Optional, Set, Tuple, TypeVar, Union
import asyncio
import logging

from .binding import ListenerArity, SignalBinding
from .context import DispatchContext
from .errors import SignalSuspendedError
from .resolution import Outcome, Resolution, SuccessTest, default_success_test, is_resolved

logger = logging.getLogger(__name__)

T = TypeVar('T')


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class SignalConfig:
    resolution: Union[Resolution, str] = Resolution.ALL
    halt_on_resolve: bool = False
    memoize: bool = False
    listener_success_test: SuccessTest = default_success_test


# =============================================================================
# Signal
# =============================================================================

class Signal(Generic[T]):
    """
    Broadcasts one payload type to its listeners.

    Keyword arguments override the matching fields of ``config``:

        signal = Signal(resolution="any", halt_on_resolve=True)
    """

    def __init__(self, config: Optional[SignalConfig] = None, **overrides: Any):
        config = replace(config or SignalConfig(), **overrides)

        self._resolution = Resolution.coerce(config.resolution)
        self._halt_on_resolve = bool(config.halt_on_resolve)
        self._memoize = bool(config.memoize)
        self._success_test: SuccessTest = config.listener_success_test or default_success_test

        self._bindings: List[SignalBinding[T]] = []
        self._latest_call: Optional[Tuple[Optional[T]]] = None
        self._suspended: bool = False
        self._tasks: Set[asyncio.Task] = set()

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def resolution(self) -> Resolution:
        return self._resolution

    @property
    def halt_on_resolve(self) -> bool:
        return self._halt_on_resolve

    @property
    def memoize(self) -> bool:
        return self._memoize

    @property
    def listener_success_test(self) -> SuccessTest:
        return self._success_test

    @property
    def suspended(self) -> bool:
        return self._suspended

    @property
    def binding_count(self) -> int:
        return len(self._bindings)

    @property
    def has_latest_payload(self) -> bool:
        return self._latest_call is not None

    @property
    def latest_payload(self) -> Optional[T]:
        """Payload of the last dispatch when memoizing, else None."""
        if self._latest_call is None:
            return None
        return self._latest_call[0]

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def add(self,
            listener: Callable[..., Any],
            binding_target: Any = None,
            priority: int = 0,
            is_once: bool = False,
            *,
            arity: Optional[ListenerArity] = None) -> SignalBinding[T]:
        """
        Register ``listener`` and return its binding.

        Adding the same (listener, binding_target) pair again returns the
        existing binding; the new priority and once flag are ignored.
        """
        if not callable(listener):
            raise TypeError(f"Listener must be callable, got {type(listener).__name__}")

        existing = self._find(listener, binding_target)
        if existing is not None:
            logger.debug(f"Listener already bound, keeping {existing!r}")
            return existing

        binding = SignalBinding(self, listener, binding_target, priority, is_once, arity)
        self._bindings.append(binding)

        if self._memoize and self._latest_call is not None:
            self._replay(self._latest_call[0])

        return binding

    def add_once(self,
                 listener: Callable[..., Any],
                 binding_target: Any = None,
                 priority: int = 0,
                 *,
                 arity: Optional[ListenerArity] = None) -> SignalBinding[T]:
        return self.add(listener, binding_target, priority, True, arity=arity)

    def has(self, listener: Callable[..., Any], binding_target: Any = None) -> bool:
        binding = self._find(listener, binding_target)
        return binding is not None and binding.is_bound()

    def remove_all(self) -> None:
        """Destroy every binding. The remembered payload is kept."""
        for binding in self._bindings:
            binding._destroy()
        self._bindings = []

    def forget(self) -> None:
        """Forget the memoized payload."""
        self._latest_call = None

    def dispose(self) -> None:
        self._bindings = []
        self._latest_call = None

    def suspend(self) -> None:
        self._suspended = True

    def resume(self) -> None:
        self._suspended = False

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    async def dispatch(self, payload: Optional[T] = None) -> List[Any]:
        """
        Run the listeners against ``payload`` and return their outcomes.

        Outcomes are listed in invocation order. A listener that raised is
        represented by its exception. Listeners skipped by a halt run later
        in a background task and are not part of the result. That task only
        runs while the event loop does: ``await signal.join()`` before the
        loop shuts down (``asyncio.run`` cancels whatever is still pending).

        Raises SignalSuspendedError while the signal is suspended.
        """
        if self._suspended:
            raise SignalSuspendedError()

        if self._memoize:
            self._latest_call = (payload,)

        snapshot = self._sorted_bindings()
        context = DispatchContext(self)
        outcomes: List[Outcome] = []
        deferred: List[SignalBinding[T]] = []

        logger.debug(f"Dispatching to {len(snapshot)} listener(s), resolution={self._resolution.value}")

        for index, binding in enumerate(snapshot):
            # detached by an earlier listener of this dispatch
            if not binding.is_bound():
                continue

            try:
                value = await binding._execute(payload, context)
            except Exception as e:
                logger.debug(f"Listener {binding!r} raised {e!r}", exc_info=True)
                outcomes.append(Outcome(e, raised=True))
            else:
                outcomes.append(Outcome(value))
                if binding.is_once:
                    self._remove_binding(binding)

            if not context.was_yielded and is_resolved(
                    self._resolution, outcomes, self._success_test, self._live_count()):
                context._mark_yielded()
                if self._halt_on_resolve:
                    context._halt_silently()

            if context.was_halted:
                deferred = snapshot[index + 1:]
                logger.debug(f"Dispatch halted after {len(outcomes)} listener(s), "
                             f"{len(deferred)} deferred")
                break

        if deferred:
            task = asyncio.get_running_loop().create_task(
                self._run_deferred(deferred, payload, context))
            self._track(task)

        return [outcome.value for outcome in outcomes]

    async def join(self) -> None:
        """Wait for background work: deferred listeners and memoized replays."""
        while True:
            pending = [task for task in self._tasks if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)

    # -------------------------------------------------------------------------
    # Internal
    # -------------------------------------------------------------------------

    def _find(self, listener: Callable[..., Any], binding_target: Any) -> Optional[SignalBinding[T]]:
        for binding in self._bindings:
            if binding._matches(listener, binding_target):
                return binding
        return None

    def _remove_binding(self, binding: SignalBinding[T]) -> None:
        try:
            self._bindings.remove(binding)
        except ValueError:
            pass

    def _sorted_bindings(self) -> List[SignalBinding[T]]:
        active = [b for b in self._bindings if b.is_bound() and not b.suspended]
        ordered = sorted(active, key=lambda b: b.priority)
        ordered.reverse()
        return ordered

    def _live_count(self) -> int:
        return sum(1 for b in self._bindings if not b.suspended)

    async def _run_deferred(self,
                            bindings: List[SignalBinding[T]],
                            payload: Optional[T],
                            context: DispatchContext) -> None:
        for binding in bindings:
            if not binding.is_bound():
                continue
            try:
                await binding._execute(payload, context)
            except Exception as e:
                logger.error(f"Deferred listener {binding!r} failed: {e!r}")
                continue
            if binding.is_once:
                self._remove_binding(binding)

    def _replay(self, payload: Optional[T]) -> None:
        if self._suspended:
            logger.debug("Signal suspended, skipping memoized replay")
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            asyncio.run(self._replay_to_completion(payload))
            return

        self._track(loop.create_task(self.dispatch(payload)))

    async def _replay_to_completion(self, payload: Optional[T]) -> None:
        await self.dispatch(payload)
        await self.join()

    def _track(self, task: asyncio.Task) -> None:
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug(f"Background task {task.get_name()} cancelled before finishing")
            return
        exc = task.exception()
        if exc is not None:
            logger.error(f"Background dispatch failed: {exc!r}")

    def __repr__(self) -> str:
        flags = []
        if self._halt_on_resolve:
            flags.append("halt_on_resolve")
        if self._memoize:
            flags.append("memoize")
        if self._suspended:
            flags.append("suspended")
        extra = f" {' '.join(flags)}" if flags else ""
        return (f"<Signal resolution={self._resolution.value} "
                f"bindings={len(self._bindings)}{extra}>")
