"""
player.py - Step-by-Step Playback Engine
=========================================
The Player is the ONLY object a UI drives during playback.  It owns the
cursor, the running flag and the speed; the Trace it walks is read-only.

State machine:
    IDLE     →  load()         →  READY
    READY    →  play()         →  RUNNING
    RUNNING  →  pause()        →  PAUSED
    PAUSED   →  play()         →  RUNNING
    any      →  step_forward() →  PAUSED, or FINISHED on the last index
    RUNNING  →  (tick reaches last index) → FINISHED
    any      →  reset()        →  READY   (trace kept, cursor 0)
    any      →  load()         →  READY   (trace replaced)

Timers:
  Auto-advance uses exactly one outstanding scheduler handle.  Every
  transition that stops or supersedes playback (pause, reset, load, close,
  manual navigation) cancels it first, so a stale timer can never fire
  after the fact.

Misuse with nothing loaded is a silent no-op.  Reaching the end of the
trace is a normal terminal transition, never an exception.
"""

from enum import Enum
from typing import Callable, Optional, Union

import structlog

from algoviz.engine.scheduler import Scheduler, TickScheduler, TimerHandle
from algoviz.engine.snapshot import Snapshot, Trace
from algoviz.errors import ConfigurationError, EmptyTraceError

log = structlog.get_logger()


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlayerState(Enum):
    IDLE     = "idle"
    READY    = "ready"
    RUNNING  = "running"
    PAUSED   = "paused"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.4,
    "fast":   0.15,   # demo mode
    "turbo":  0.05,
}

MIN_SPEED = 0.02


def resolve_speed(value: Union[str, float, int]) -> float:
    """Preset name or seconds → seconds (clamped to MIN_SPEED)."""
    if isinstance(value, str):
        try:
            return SPEED_PRESETS[value]
        except KeyError:
            raise ConfigurationError(
                f"Unknown speed preset {value!r}; expected one of {', '.join(SPEED_PRESETS)}"
            ) from None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"Speed must be a preset name or seconds, got {value!r}")
    return max(MIN_SPEED, float(value))


# ---------------------------------------------------------------------------
# Player
# ---------------------------------------------------------------------------
class Player:
    """
    Attributes:
        trace   : The loaded Trace (empty Trace while IDLE).
        cursor  : Index into `trace` currently displayed.
        speed   : Seconds between auto-advance ticks.
        on_step : Optional callback(Snapshot) fired whenever the displayed
                  snapshot changes.  The UI hooks its re-render here.
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        speed: Union[str, float, None] = None,
        on_step: Optional[Callable[[Snapshot], None]] = None,
    ):
        self._scheduler: Scheduler             = scheduler or TickScheduler()
        self._trace:     Trace                 = Trace()
        self._cursor:    int                   = 0
        self._state:     PlayerState           = PlayerState.IDLE
        self._speed:     float                 = resolve_speed("medium" if speed is None else speed)
        self._handle:    Optional[TimerHandle] = None
        self.on_step:    Optional[Callable[[Snapshot], None]] = on_step

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, trace: Trace) -> None:
        """Replace the trace (loadNewTrace).  Cursor back to 0, not running."""
        if trace is None or len(trace) == 0:
            raise EmptyTraceError("Cannot load an empty trace")
        self._cancel_timer()
        self._trace  = trace
        self._cursor = 0
        self._state  = PlayerState.READY
        log.debug("player.loaded", algorithm=trace.algorithm, steps=len(trace))
        self._notify()

    def reset(self) -> None:
        """Back to the first snapshot; the trace is kept."""
        if self._state is PlayerState.IDLE:
            return
        self._cancel_timer()
        self._cursor = 0
        self._state  = PlayerState.READY
        log.debug("player.reset", algorithm=self._trace.algorithm)
        self._notify()

    def close(self) -> None:
        """Teardown: cancel any pending tick.  Safe to call repeatedly."""
        self._cancel_timer()
        if self._state is PlayerState.RUNNING:
            self._state = PlayerState.PAUSED

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self._state in (PlayerState.IDLE, PlayerState.RUNNING):
            return
        if self._at_end():
            return
        self._state = PlayerState.RUNNING
        self._schedule()

    def pause(self) -> None:
        if self._state is not PlayerState.RUNNING:
            return
        self._cancel_timer()
        self._state = PlayerState.PAUSED

    def toggle_play(self) -> None:
        if self._state is PlayerState.RUNNING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def step_forward(self) -> bool:
        """Advance one snapshot.  Returns False if nothing moved."""
        if self._state is PlayerState.IDLE or self._at_end():
            return False
        self._advance()
        if self._state is PlayerState.RUNNING:
            # restart the countdown so a manual step and a tick never stack
            self._schedule()
        return True

    def step_back(self) -> bool:
        """Rewind one snapshot.  Stops auto-play."""
        if self._state is PlayerState.IDLE or self._cursor == 0:
            return False
        self._cancel_timer()
        self._cursor -= 1
        self._state = PlayerState.READY if self._cursor == 0 else PlayerState.PAUSED
        self._notify()
        return True

    def seek(self, index: int) -> bool:
        """Jump to an arbitrary snapshot index.  Stops auto-play."""
        if self._state is PlayerState.IDLE or not 0 <= index < len(self._trace):
            return False
        self._cancel_timer()
        self._cursor = index
        if index == 0:
            self._state = PlayerState.READY
        elif self._at_end():
            self._state = PlayerState.FINISHED
        else:
            self._state = PlayerState.PAUSED
        self._notify()
        return True

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, value: Union[str, float]) -> None:
        """Takes effect on the next scheduled tick, not the one in flight."""
        self._speed = resolve_speed(value)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def trace(self) -> Trace:
        return self._trace

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def state(self) -> PlayerState:
        return self._state

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def running(self) -> bool:
        return self._state is PlayerState.RUNNING

    @property
    def is_finished(self) -> bool:
        return self._state is PlayerState.FINISHED

    @property
    def has_pending_tick(self) -> bool:
        return self._handle is not None

    @property
    def current(self) -> Optional[Snapshot]:
        if 0 <= self._cursor < len(self._trace):
            return self._trace[self._cursor]
        return None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _at_end(self) -> bool:
        return self._cursor >= len(self._trace) - 1

    def _advance(self) -> None:
        self._cursor += 1
        if self._at_end():
            self._cancel_timer()
            self._state = PlayerState.FINISHED
        elif self._state is not PlayerState.RUNNING:
            self._state = PlayerState.PAUSED
        self._notify()

    def _on_tick(self) -> None:
        self._handle = None
        if self._state is not PlayerState.RUNNING:
            return
        self._advance()
        if self._state is PlayerState.RUNNING:
            self._schedule()

    def _schedule(self) -> None:
        self._cancel_timer()
        self._handle = self._scheduler.call_later(self._speed, self._on_tick)

    def _cancel_timer(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _notify(self) -> None:
        snap = self.current
        if self.on_step and snap is not None:
            self.on_step(snap)
