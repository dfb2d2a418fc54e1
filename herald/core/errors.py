# herald/core/errors.py
"""
Exceptions raised by signals and bindings.

Listener failures never show up here: they are captured into the dispatch
outcomes. Only structural misuse reaches the caller.
"""


class SignalError(Exception):
    """Base class for herald errors."""


class SignalSuspendedError(SignalError):
    """Raised by ``Signal.dispatch`` while the signal is suspended."""

    def __init__(self, message: str = "Signal suspended"):
        super().__init__(message)


class UnboundBindingError(SignalError):
    """Raised when suspending or resuming a binding that was detached."""

    def __init__(self, message: str = "Binding is no longer bound to a signal"):
        super().__init__(message)
