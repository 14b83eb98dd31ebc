from algoviz.engine import ManualClock, Player, TickScheduler
from algoviz.engine.scheduler import COMPACT_AFTER


def test_tick_fires_due_callbacks_in_deadline_order() -> None:
    clock = ManualClock()
    sched = TickScheduler(clock=clock)
    fired = []
    sched.call_later(2.0, lambda: fired.append("late"))
    sched.call_later(1.0, lambda: fired.append("early"))

    assert sched.tick() == 0
    clock.advance(1.0)
    assert sched.tick() == 1
    clock.advance(5.0)
    assert sched.tick() == 1
    assert fired == ["early", "late"]
    assert sched.pending == 0


def test_cancelled_calls_never_fire() -> None:
    clock = ManualClock()
    sched = TickScheduler(clock=clock)
    fired = []
    handle = sched.call_later(1.0, lambda: fired.append("x"))
    assert sched.pending == 1
    assert sched.next_deadline() == 1.0

    handle.cancel()
    assert sched.pending == 0
    assert sched.next_deadline() is None
    clock.advance(2.0)
    assert sched.tick() == 0
    assert fired == []


def test_callbacks_scheduled_during_tick_wait_for_next_tick() -> None:
    clock = ManualClock()
    sched = TickScheduler(clock=clock)
    fired = []

    def again():
        fired.append(clock())
        sched.call_later(0.0, again)

    sched.call_later(0.0, again)
    assert sched.tick() == 1
    assert sched.tick() == 1
    assert len(fired) == 2


def test_clear_drops_everything() -> None:
    clock = ManualClock()
    sched = TickScheduler(clock=clock)
    sched.call_later(1.0, lambda: None)
    sched.call_later(2.0, lambda: None)
    sched.clear()
    clock.advance(3.0)
    assert sched.pending == 0
    assert sched.tick() == 0


def test_cancelled_calls_are_compacted_away() -> None:
    clock = ManualClock()
    sched = TickScheduler(clock=clock)
    keep = sched.call_later(60.0, lambda: None)
    for _ in range(10 * COMPACT_AFTER):
        sched.call_later(30.0, lambda: None).cancel()
        assert sched.queued <= 2 * COMPACT_AFTER + 2

    assert sched.pending == 1
    assert sched.next_deadline() == 60.0
    keep.cancel()
    assert sched.pending == 0


def test_play_pause_loop_keeps_queue_bounded(trace) -> None:
    sched = TickScheduler(clock=ManualClock())
    player = Player(scheduler=sched, speed="slow")
    player.load(trace)
    for _ in range(500):
        player.play()
        player.pause()
    assert sched.queued <= COMPACT_AFTER + 1
    assert sched.pending == 0
