# herald/core/binding.py
"""
SignalBinding - one listener's registration on a Signal.

The binding owns a normalized invoker built once at registration. Callers
pick the call shape explicitly with ``ListenerArity`` or let it be inferred
from the listener's signature.
"""

from __future__ import annotations
from enum import IntEnum
from types import MethodType
from typing import TYPE_CHECKING, Any, Callable, Generic, Optional, Tuple, TypeVar
import inspect
import logging

from .errors import UnboundBindingError

if TYPE_CHECKING:
    from .context import DispatchContext
    from .signal import Signal

logger = logging.getLogger(__name__)

T = TypeVar('T')
Invoker = Callable[[Any, "DispatchContext"], Any]


class ListenerArity(IntEnum):
    """Arguments a listener is called with."""
    NONE = 0        # listener()
    PAYLOAD = 1     # listener(payload)
    CONTEXT = 2     # listener(payload, context)


_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def infer_arity(func: Callable) -> ListenerArity:
    """Read the declared positional parameter count of ``func``."""
    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        # builtins without metadata
        return ListenerArity.PAYLOAD

    count = 0
    for param in sig.parameters.values():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return ListenerArity.CONTEXT
        if param.kind in _POSITIONAL:
            count += 1
    return ListenerArity(min(count, ListenerArity.CONTEXT))


def make_invoker(func: Callable, arity: ListenerArity) -> Invoker:
    if arity is ListenerArity.NONE:
        return lambda payload, context: func()
    if arity is ListenerArity.PAYLOAD:
        return lambda payload, context: func(payload)
    return lambda payload, context: func(payload, context)


def _bind_target(listener: Callable, target: Any) -> Tuple[Callable, ListenerArity]:
    """Return the callable to invoke and the arity it declares."""
    if target is None or inspect.ismethod(listener):
        return listener, infer_arity(listener)
    if infer_arity(listener) is ListenerArity.NONE:
        # no parameter left to receive the target
        return listener, ListenerArity.NONE
    callee = MethodType(listener, target)
    return callee, infer_arity(callee)


class SignalBinding(Generic[T]):
    """
    Handle returned by ``Signal.add``.

    The signal owns the binding while it is bound; callers use the handle to
    inspect it, suspend it or detach it.
    """

    def __init__(self,
                 signal: "Signal[T]",
                 listener: Callable,
                 binding_target: Any = None,
                 priority: int = 0,
                 is_once: bool = False,
                 arity: Optional[ListenerArity] = None):
        callee, declared = _bind_target(listener, binding_target)

        self._signal: Optional["Signal[T]"] = signal
        self._listener: Optional[Callable] = listener
        self._binding_target = binding_target
        self._priority = int(priority or 0)
        self._is_once = bool(is_once)
        self._suspended = False
        self._arity = ListenerArity(arity) if arity is not None else declared
        self._invoke: Optional[Invoker] = make_invoker(callee, self._arity)

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def priority(self) -> int:
        return self._priority

    @property
    def is_once(self) -> bool:
        return self._is_once

    @property
    def listener(self) -> Optional[Callable]:
        return self._listener

    @property
    def binding_target(self) -> Any:
        return self._binding_target

    @property
    def arity(self) -> ListenerArity:
        return self._arity

    @property
    def suspended(self) -> bool:
        return self._suspended

    def is_bound(self) -> bool:
        return self._signal is not None and self._listener is not None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def detach(self) -> None:
        """Remove this binding from its signal. No-op once unbound."""
        if not self.is_bound():
            return
        self._signal._remove_binding(self)
        self._destroy()

    def suspend(self) -> None:
        """Leave this binding out of later dispatches until resumed."""
        if not self.is_bound():
            raise UnboundBindingError("Cannot suspend a detached binding")
        self._suspended = True

    def resume(self) -> None:
        if not self.is_bound():
            raise UnboundBindingError("Cannot resume a detached binding")
        self._suspended = False

    # -------------------------------------------------------------------------
    # Engine-only
    # -------------------------------------------------------------------------

    def _matches(self, listener: Callable, binding_target: Any) -> bool:
        return (self._listener is not None
                and self._listener == listener
                and self._binding_target is binding_target)

    def _destroy(self) -> None:
        self._signal = None
        self._listener = None
        self._binding_target = None
        self._invoke = None

    async def _execute(self, payload: Any, context: "DispatchContext") -> Any:
        invoke = self._invoke
        if invoke is None:
            raise UnboundBindingError("Cannot execute a detached binding")
        result = invoke(payload, context)
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        name = getattr(self._listener, "__qualname__", repr(self._listener))
        state = "bound" if self.is_bound() else "unbound"
        flags = " once" if self._is_once else ""
        flags += " suspended" if self._suspended else ""
        return f"<SignalBinding {name} priority={self._priority}{flags} {state}>"
