# herald/__init__.py
"""
HERALD - Prioritized async signals.

Core components:
- Signal: Broadcasts one payload to prioritized listeners
- SignalBinding: Handle for one listener registration
- DispatchContext: Per-dispatch halt control
- Resolution: all / any / any-fail / none policies
"""

from .core import (
    # Signals
    Signal,
    SignalConfig,
    SignalBinding,
    DispatchContext,
    ListenerArity,

    # Resolution
    Resolution,
    Outcome,
    default_success_test,

    # Errors
    SignalError,
    SignalSuspendedError,
    UnboundBindingError,

    # Helpers
    SignalReceiver,
    SignalDebugger,
    on_signal,
)

__version__ = '1.0.0'

__all__ = [
    'Signal', 'SignalConfig', 'SignalBinding', 'DispatchContext', 'ListenerArity',
    'Resolution', 'Outcome', 'default_success_test',
    'SignalError', 'SignalSuspendedError', 'UnboundBindingError',
    'SignalReceiver', 'SignalDebugger', 'on_signal',
]
