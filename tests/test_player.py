import pytest

from algoviz.engine import MIN_SPEED, SPEED_PRESETS, Player, PlayerState, Trace
from algoviz.errors import ConfigurationError, EmptyTraceError


# ---------------------------------------------------------------------------
# Nothing loaded
# ---------------------------------------------------------------------------
def test_idle_player_ignores_everything(player) -> None:
    assert player.state is PlayerState.IDLE
    assert player.current is None
    assert player.step_forward() is False
    assert player.step_back() is False
    assert player.seek(0) is False
    player.play()
    player.pause()
    player.reset()
    assert player.state is PlayerState.IDLE
    assert not player.has_pending_tick


def test_load_rejects_empty_trace(player) -> None:
    with pytest.raises(EmptyTraceError):
        player.load(Trace())


def test_default_speed_is_medium() -> None:
    assert Player().speed == SPEED_PRESETS["medium"]


# ---------------------------------------------------------------------------
# Manual navigation
# ---------------------------------------------------------------------------
def test_step_through_to_the_end(player, trace) -> None:
    player.load(trace)
    assert player.state is PlayerState.READY
    assert player.cursor == 0

    assert player.step_forward()
    assert player.state is PlayerState.PAUSED
    assert player.step_forward()
    assert player.step_forward()
    assert player.cursor == 3
    assert player.is_finished

    # terminal: further steps are a no-op, not an error
    assert player.step_forward() is False
    assert player.cursor == 3
    player.play()
    assert player.state is PlayerState.FINISHED


def test_step_back_and_seek(player, trace) -> None:
    player.load(trace)
    assert player.step_back() is False

    assert player.seek(3)
    assert player.state is PlayerState.FINISHED
    assert player.step_back()
    assert player.cursor == 2
    assert player.state is PlayerState.PAUSED

    assert player.seek(0)
    assert player.state is PlayerState.READY
    assert player.seek(4) is False
    assert player.seek(-1) is False
    assert player.cursor == 0


def test_reset_keeps_trace(player, trace) -> None:
    player.load(trace)
    player.seek(2)
    player.reset()
    assert player.cursor == 0
    assert player.state is PlayerState.READY
    assert player.trace is trace


def test_on_step_sees_every_displayed_snapshot(scheduler, trace) -> None:
    seen = []
    player = Player(scheduler=scheduler, speed=1.0, on_step=lambda s: seen.append(s.index))
    player.load(trace)
    player.step_forward()
    player.step_back()
    player.seek(3)
    assert seen == [0, 1, 0, 3]


# ---------------------------------------------------------------------------
# Auto-advance
# ---------------------------------------------------------------------------
def test_play_advances_once_per_interval(player, trace, clock, scheduler) -> None:
    player.load(trace)
    player.play()
    assert player.running
    assert player.has_pending_tick

    clock.advance(0.5)
    scheduler.tick()
    assert player.cursor == 0

    clock.advance(0.5)
    scheduler.tick()
    assert player.cursor == 1

    # a long stall still moves only one step per tick
    clock.advance(10.0)
    scheduler.tick()
    assert player.cursor == 2

    clock.advance(1.0)
    scheduler.tick()
    assert player.cursor == 3
    assert player.state is PlayerState.FINISHED
    assert not player.running
    assert not player.has_pending_tick
    assert scheduler.pending == 0


def test_pause_cancels_pending_tick(player, trace, clock, scheduler) -> None:
    player.load(trace)
    player.play()
    player.pause()
    assert player.state is PlayerState.PAUSED
    assert scheduler.pending == 0

    clock.advance(5.0)
    scheduler.tick()
    assert player.cursor == 0

    player.toggle_play()
    assert player.running
    player.toggle_play()
    assert player.state is PlayerState.PAUSED


def test_loading_a_new_trace_cancels_playback(player, trace, trace_factory, clock, scheduler) -> None:
    player.load(trace)
    player.play()
    replacement = trace_factory(6, algorithm="other")
    player.load(replacement)

    assert player.state is PlayerState.READY
    assert scheduler.pending == 0
    clock.advance(5.0)
    scheduler.tick()
    assert player.cursor == 0
    assert player.trace is replacement


def test_reset_and_close_cancel_playback(player, trace, clock, scheduler) -> None:
    player.load(trace)
    player.play()
    player.reset()
    assert scheduler.pending == 0
    assert player.state is PlayerState.READY

    player.play()
    player.close()
    player.close()
    assert scheduler.pending == 0
    clock.advance(5.0)
    scheduler.tick()
    assert player.cursor == 0


def test_manual_step_restarts_countdown(player, trace, clock, scheduler) -> None:
    player.load(trace)
    player.play()

    clock.advance(0.5)
    assert player.step_forward()
    assert player.running
    assert scheduler.pending == 1

    clock.advance(0.75)          # old deadline (1.0) passed, new one is 1.5
    scheduler.tick()
    assert player.cursor == 1

    clock.advance(0.25)
    scheduler.tick()
    assert player.cursor == 2


def test_step_back_stops_playback(player, trace, clock, scheduler) -> None:
    player.load(trace)
    player.seek(2)
    player.play()
    assert player.step_back()
    assert not player.running
    assert scheduler.pending == 0


# ---------------------------------------------------------------------------
# Speed
# ---------------------------------------------------------------------------
def test_speed_change_applies_to_next_tick(player, trace, clock, scheduler) -> None:
    player.load(trace)
    player.play()
    player.set_speed(0.25)

    clock.advance(0.25)
    scheduler.tick()
    assert player.cursor == 0        # the tick in flight keeps its 1.0 s

    clock.advance(0.75)
    scheduler.tick()
    assert player.cursor == 1

    clock.advance(0.25)
    scheduler.tick()
    assert player.cursor == 2


def test_speed_presets_and_clamping(player) -> None:
    player.set_speed("fast")
    assert player.speed == SPEED_PRESETS["fast"]
    player.set_speed(0.001)
    assert player.speed == MIN_SPEED
    player.set_speed(2)
    assert player.speed == 2.0
    with pytest.raises(ConfigurationError):
        player.set_speed("warp")
    with pytest.raises(ConfigurationError):
        player.set_speed(True)
