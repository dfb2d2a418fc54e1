import asyncio
import logging

from herald.core.debug import SignalDebugger
from herald.core.receiver import SignalReceiver, on_signal
from herald.core.signal import Signal


def test_on_signal_decorator():
    signal = Signal()
    seen = []

    @on_signal(signal, priority=5)
    def handler(payload):
        seen.append(payload)

    asyncio.run(signal.dispatch("ping"))

    assert seen == ["ping"]
    assert signal.has(handler)
    # decorated function is returned unchanged
    handler("direct")
    assert seen == ["ping", "direct"]


def test_on_signal_once():
    signal = Signal()
    seen = []

    @on_signal(signal, once=True)
    def handler():
        seen.append(1)

    async def main():
        await signal.dispatch()
        await signal.dispatch()

    asyncio.run(main())
    assert seen == [1]


class Meter(SignalReceiver):
    def __init__(self):
        self.levels = []

    def on_level(self, level):
        self.levels.append(level)


def test_receiver_subscribe_and_unsubscribe():
    volume = Signal()
    peak = Signal()
    meter = Meter()

    def record_peak(receiver, level):
        receiver.levels.append(("peak", level))

    meter.subscribe(volume, meter.on_level)
    meter.subscribe(peak, record_peak)

    async def main():
        await volume.dispatch(0.5)
        await peak.dispatch(0.9)

    asyncio.run(main())
    assert meter.levels == [0.5, ("peak", 0.9)]
    assert peak.has(record_peak, meter)

    meter.unsubscribe_all()

    assert volume.binding_count == 0
    assert peak.binding_count == 0
    asyncio.run(volume.dispatch(0.1))
    assert meter.levels == [0.5, ("peak", 0.9)]


def test_debugger_logs_dispatches(caplog):
    signal = Signal()
    signal.add(lambda p: p * 2)
    debugger = SignalDebugger(signal, name="doubler")

    with caplog.at_level(logging.DEBUG, logger="herald.core.debug"):
        assert asyncio.run(signal.dispatch(21)) == [42]

    assert debugger.dispatch_count == 1
    assert "doubler(21)" in caplog.text
    assert "outcomes=[42]" in caplog.text

    debugger.detach()
    asyncio.run(signal.dispatch(1))
    assert debugger.dispatch_count == 1
