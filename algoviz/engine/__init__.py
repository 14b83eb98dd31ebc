"""
algoviz.engine
--------------
Trace contract, playback & recording layer.

    from algoviz.engine import Player, TraceBuilder, Kind, record
"""

from algoviz.engine.snapshot  import (
    DEFAULT_MAX_STEPS, Kind, TERMINAL_KINDS, Snapshot, Trace, TraceBuilder, freeze, step_budget, thaw,
)
from algoviz.engine.scheduler import ManualClock, Scheduler, TickScheduler, TimerHandle
from algoviz.engine.player    import Player, PlayerState, SPEED_PRESETS, MIN_SPEED, resolve_speed
from algoviz.engine.recorder  import Recording, TraceSummary, export_trace, record, summarize

__all__ = [
    "Kind",
    "TERMINAL_KINDS",
    "Snapshot",
    "Trace",
    "TraceBuilder",
    "freeze",
    "thaw",
    "step_budget",
    "DEFAULT_MAX_STEPS",
    "ManualClock",
    "Scheduler",
    "TickScheduler",
    "TimerHandle",
    "Player",
    "PlayerState",
    "SPEED_PRESETS",
    "MIN_SPEED",
    "resolve_speed",
    "Recording",
    "TraceSummary",
    "export_trace",
    "record",
    "summarize",
]
