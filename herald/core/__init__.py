# herald/core/__init__.py
"""
Core signal engine: bindings, dispatch contexts and resolution policies.
"""

from .errors import SignalError, SignalSuspendedError, UnboundBindingError
from .resolution import Resolution, Outcome, default_success_test, is_resolved
from .context import DispatchContext
from .binding import ListenerArity, SignalBinding, infer_arity
from .signal import Signal, SignalConfig
from .receiver import SignalReceiver, on_signal
from .debug import SignalDebugger
