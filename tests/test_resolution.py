import pytest

from herald.core.resolution import (
    Outcome, Resolution, default_success_test, is_resolved,
)


def ok(value):
    return Outcome(value)


def raised(exc=None):
    return Outcome(exc or RuntimeError("failed"), raised=True)


def test_coerce():
    assert Resolution.coerce("any-fail") is Resolution.ANY_FAIL
    assert Resolution.coerce(Resolution.NONE) is Resolution.NONE
    with pytest.raises(ValueError):
        Resolution.coerce("some")


def test_classification_with_default_test():
    assert ok(1).is_success(default_success_test)
    assert ok(False).is_success(default_success_test)
    assert not ok(None).is_success(default_success_test)
    assert not ok(None).is_failure(default_success_test)
    assert raised().is_failure(default_success_test)
    assert not raised().is_success(default_success_test)


def test_classification_with_custom_test():
    def is_true(v):
        return v is True

    assert ok(True).is_success(is_true)
    assert ok(False).is_failure(is_true)
    assert not ok(None).is_failure(is_true)


def test_all_needs_coverage():
    outcomes = [ok(1)]
    assert not is_resolved(Resolution.ALL, outcomes, default_success_test, live_count=2)
    assert is_resolved(Resolution.ALL, outcomes, default_success_test, live_count=1)
    assert is_resolved(Resolution.ALL, outcomes, default_success_test, live_count=2, was_stopped=True)


def test_all_treats_none_as_success():
    outcomes = [ok(None), ok(None)]
    assert is_resolved(Resolution.ALL, outcomes, default_success_test, live_count=2)
    assert not is_resolved(Resolution.ALL, outcomes + [raised()], default_success_test, live_count=3)


def test_any():
    test = default_success_test
    assert not is_resolved(Resolution.ANY, [], test, live_count=0)
    assert not is_resolved(Resolution.ANY, [ok(None), raised()], test, live_count=5)
    assert is_resolved(Resolution.ANY, [ok(None), ok("yes")], test, live_count=5)


def test_any_fail():
    test = default_success_test
    assert not is_resolved(Resolution.ANY_FAIL, [ok(None), ok(0)], test, live_count=5)
    assert is_resolved(Resolution.ANY_FAIL, [ok(1), raised()], test, live_count=5)


def test_none_treats_none_as_failure():
    test = default_success_test
    assert is_resolved(Resolution.NONE, [ok(None), raised()], test, live_count=2)
    assert not is_resolved(Resolution.NONE, [ok(None)], test, live_count=2)
    assert not is_resolved(Resolution.NONE, [ok(None), ok("value")], test, live_count=2)


def test_empty_outcomes_with_no_bindings():
    test = default_success_test
    assert is_resolved(Resolution.ALL, [], test, live_count=0)
    assert is_resolved(Resolution.NONE, [], test, live_count=0)
