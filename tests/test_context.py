import asyncio
import logging

from herald.core.context import DispatchContext
from herald.core.signal import Signal


def test_context_starts_clean():
    signal = Signal()
    context = DispatchContext(signal)

    assert context.signal is signal
    assert not context.was_halted
    assert not context.was_yielded


def test_halt_twice_warns(caplog):
    context = DispatchContext(Signal())

    with caplog.at_level(logging.WARNING, logger="herald.core.context"):
        context.halt()
        assert caplog.records == []
        context.halt()

    assert context.was_halted
    assert len(caplog.records) == 1
    assert "already called" in caplog.text


def test_halt_after_resolution_warns_but_still_halts(caplog):
    signal = Signal(resolution="any")
    calls = []

    def late_halt(_, context):
        calls.append("halting")
        context.halt()

    signal.add(lambda: True, None, 3)
    signal.add(late_halt, None, 2)
    signal.add(lambda: calls.append("skipped"), None, 1)

    async def main():
        results = await signal.dispatch()
        assert calls == ["halting"]
        return results

    with caplog.at_level(logging.WARNING, logger="herald.core.context"):
        results = asyncio.run(main())

    assert results == [True, None]
    assert "already resolved" in caplog.text


def test_halt_on_resolve_does_not_warn(caplog):
    signal = Signal(resolution="any", halt_on_resolve=True)
    signal.add(lambda: "done")

    with caplog.at_level(logging.WARNING, logger="herald.core.context"):
        asyncio.run(signal.dispatch())

    assert caplog.records == []
