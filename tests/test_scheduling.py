"""Tests for the debouncer."""

from client.scheduling import Debouncer
from tests.fakes import ManualScheduler


def test_debouncer_fires_once_after_quiet_period() -> None:
    scheduler = ManualScheduler()
    fired: list[float] = []
    debouncer = Debouncer(lambda: fired.append(scheduler.now), delay_seconds=0.3, scheduler=scheduler)

    debouncer.trigger()
    scheduler.advance(0.2)
    debouncer.trigger()
    scheduler.advance(0.2)

    assert fired == []
    assert debouncer.pending is True

    scheduler.advance(0.2)

    assert len(fired) == 1
    assert debouncer.pending is False
    assert scheduler.pending_count == 0


def test_debouncer_cancel_drops_pending_callback() -> None:
    scheduler = ManualScheduler()
    fired: list[str] = []
    debouncer = Debouncer(lambda: fired.append("fired"), delay_seconds=0.3, scheduler=scheduler)

    debouncer.trigger()
    debouncer.cancel()
    scheduler.advance(1.0)

    assert fired == []
    assert debouncer.pending is False


def test_debouncer_can_fire_again_after_firing() -> None:
    scheduler = ManualScheduler()
    fired: list[str] = []
    debouncer = Debouncer(lambda: fired.append("fired"), delay_seconds=0.3, scheduler=scheduler)

    debouncer.trigger()
    scheduler.advance(0.3)
    debouncer.trigger()
    scheduler.advance(0.3)

    assert fired == ["fired", "fired"]
