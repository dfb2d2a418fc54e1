# herald/core/resolution.py
"""
Resolution policy - decides when a dispatch counts as resolved.

Each strategy looks at the outcomes collected so far and the number of
bindings still live on the signal. Outcomes are classified by the signal's
success test:

    success   listener returned and the test accepts the value
    failure   listener raised, or returned a non-None value the test rejects
    neither   listener returned None and the test rejects it

``None`` is therefore neutral for ``any`` / ``any-fail``, passes ``all`` and
counts against ``none``.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Sequence, Union


SuccessTest = Callable[[Any], bool]


class Resolution(Enum):
    """Named resolution strategies."""
    ALL = "all"
    ANY = "any"
    ANY_FAIL = "any-fail"
    NONE = "none"

    @classmethod
    def coerce(cls, value: Union["Resolution", str]) -> "Resolution":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(repr(r.value) for r in cls)
            raise ValueError(f"Unknown resolution {value!r} (expected one of {valid})") from None


def default_success_test(value: Any) -> bool:
    """An outcome succeeds when the listener returned something."""
    return value is not None


@dataclass(frozen=True)
class Outcome:
    """One listener invocation result."""
    value: Any
    raised: bool = False

    def is_success(self, test: SuccessTest) -> bool:
        return not self.raised and bool(test(self.value))

    def is_failure(self, test: SuccessTest) -> bool:
        if self.raised:
            return True
        return self.value is not None and not test(self.value)


# =============================================================================
# Strategies
# =============================================================================

def _covered(outcomes: Sequence[Outcome], live_count: int, was_stopped: bool) -> bool:
    return was_stopped or len(outcomes) >= live_count


def resolve_all(outcomes: Sequence[Outcome], test: SuccessTest,
                live_count: int, was_stopped: bool = False) -> bool:
    return (_covered(outcomes, live_count, was_stopped)
            and not any(o.is_failure(test) for o in outcomes))


def resolve_any(outcomes: Sequence[Outcome], test: SuccessTest,
                live_count: int, was_stopped: bool = False) -> bool:
    return any(o.is_success(test) for o in outcomes)


def resolve_any_fail(outcomes: Sequence[Outcome], test: SuccessTest,
                     live_count: int, was_stopped: bool = False) -> bool:
    return any(o.is_failure(test) for o in outcomes)


def resolve_none(outcomes: Sequence[Outcome], test: SuccessTest,
                 live_count: int, was_stopped: bool = False) -> bool:
    return (_covered(outcomes, live_count, was_stopped)
            and not any(o.is_success(test) for o in outcomes))


RESOLVERS: Dict[Resolution, Callable[..., bool]] = {
    Resolution.ALL: resolve_all,
    Resolution.ANY: resolve_any,
    Resolution.ANY_FAIL: resolve_any_fail,
    Resolution.NONE: resolve_none,
}


def is_resolved(resolution: Resolution, outcomes: Sequence[Outcome],
                test: SuccessTest, live_count: int, was_stopped: bool = False) -> bool:
    """Evaluate ``resolution`` against the outcomes collected so far."""
    return RESOLVERS[resolution](outcomes, test, live_count, was_stopped)
