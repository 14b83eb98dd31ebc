"""
app.py - Algorithm Visualizer Flask App
========================================
JSON API that a browser page drives.  The page renders whatever snapshot
the API hands back; all playback state lives server-side in a Player.

Routes:
  GET  /api/algorithms          – registry cards
  POST /api/run                 – parse inputs, generate, load, return snapshot 0
  POST /api/step/next           – advance one step
  POST /api/step/prev           – rewind one step
  POST /api/step/goto           – jump to step N
  POST /api/step/reset          – back to step 0
  POST /api/step/play           – start auto-advance
  POST /api/step/pause          – stop auto-advance
  POST /api/config/speed        – change the inter-step delay
  POST /api/config/mode         – visualizer / theory / pseudocode tab
  GET  /api/state               – tick the session scheduler, return current state
  GET  /api/trace               – full exported trace + summary
  DELETE /api/session           – drop this browser session's Player

State management:
  Each browser session gets its own Player and TickScheduler, held in an
  in-process store keyed by a random id kept in the Flask session cookie.
  Players are never shared between sessions, and a per-session lock lets
  only one request at a time drive a Player.  Auto-advance is cooperative:
  the page polls /api/state and every poll fires whatever ticks are due.
  The store is bounded by an LRU limit and an idle timeout (see settings).

  Every run is capped at settings.max_trace_steps snapshots; an input that
  needs more is rejected with 400 instead of tying up the worker.
"""

import secrets
import time
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass, field
from threading import Lock, RLock
from typing import Callable, Dict, Iterator, List, Optional, Tuple, Union

import structlog
from flask import Flask, jsonify, request, session
from pydantic import BaseModel, ConfigDict, ValidationError

from algoviz.algorithms import REGISTRY, ViewMode, get_algorithm, list_algorithms
from algoviz.engine import Player, TickScheduler, TraceSummary, export_trace, record, step_budget, summarize
from algoviz.errors import ConfigurationError, GeneratorError
from algoviz.inputs import build_inputs
from algoviz.logging_setup import bind_context, clear_context, configure_logging
from algoviz.settings import AppSettings, get_settings

log = structlog.get_logger()


# =========================
# Schemas
# =========================

class RunRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    algo: str


class GotoRequest(BaseModel):
    index: int


class SpeedRequest(BaseModel):
    speed: Union[str, float]


class ModeRequest(BaseModel):
    mode: ViewMode


# ---------------------------------------------------------------------------
# Per-session state
# ---------------------------------------------------------------------------
@dataclass
class Visualization:
    scheduler: TickScheduler
    player:    Player
    algo:      Optional[str] = None
    mode:      ViewMode      = ViewMode.VISUALIZER
    inputs:    Dict          = field(default_factory=dict)
    summary:   Optional[TraceSummary] = None
    last_seen: float         = 0.0
    # one request at a time touches the Player
    lock:      RLock         = field(default_factory=RLock, repr=False)


class SessionStore:
    """
    sid → Visualization.  One Player per browser session.

    The store is bounded.  A session left alone for `idle_seconds` is
    evicted on the next lookup, and once `max_sessions` are live the least
    recently used one makes room for a new one.  Evicted Players are closed
    and their schedulers cleared.
    """

    def __init__(
        self,
        default_speed: str,
        max_sessions: int = 256,
        idle_seconds: float = 1800.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._default_speed = default_speed
        self._max_sessions  = max_sessions
        self._idle_seconds  = idle_seconds
        self._clock         = clock
        self._lock = Lock()
        self._items: "OrderedDict[str, Visualization]" = OrderedDict()

    def get(self, sid: str) -> Visualization:
        evicted: List[Tuple[str, Visualization, str]] = []
        with self._lock:
            now = self._clock()
            evicted.extend(self._expire(now))
            viz = self._items.get(sid)
            if viz is None:
                while len(self._items) >= self._max_sessions:
                    old_sid, old = self._items.popitem(last=False)
                    evicted.append((old_sid, old, "capacity"))
                scheduler = TickScheduler()
                viz = Visualization(
                    scheduler=scheduler,
                    player=Player(scheduler=scheduler, speed=self._default_speed),
                )
                self._items[sid] = viz
                log.debug("session.created", sid=sid)
            else:
                self._items.move_to_end(sid)
            viz.last_seen = now

        for old_sid, old, reason in evicted:
            self._close(old, sid=old_sid, reason=reason)
        return viz

    def drop(self, sid: str) -> bool:
        with self._lock:
            viz = self._items.pop(sid, None)
        if viz is None:
            return False
        self._close(viz, sid=sid, reason="closed")
        return True

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, sid: str) -> bool:
        return sid in self._items

    def _expire(self, now: float) -> List[Tuple[str, Visualization, str]]:
        # _items is kept in last-use order, so expired sessions sit at the front
        out = []
        while self._items:
            sid, viz = next(iter(self._items.items()))
            if now - viz.last_seen < self._idle_seconds:
                break
            del self._items[sid]
            out.append((sid, viz, "idle"))
        return out

    @staticmethod
    def _close(viz: Visualization, sid: str, reason: str) -> None:
        with viz.lock:
            viz.player.close()
            viz.scheduler.clear()
        log.info("session.dropped", sid=sid, reason=reason)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(settings: Optional[AppSettings] = None) -> Flask:
    settings = settings or get_settings()
    configure_logging(level=settings.log_level)

    app = Flask(__name__)
    app.secret_key = settings.secret_key or secrets.token_hex(32)
    app.config["ALGOVIZ_SETTINGS"] = settings
    store = SessionStore(
        default_speed=settings.default_speed,
        max_sessions=settings.max_sessions,
        idle_seconds=settings.session_idle_seconds,
    )
    app.extensions["algoviz.sessions"] = store

    # ---------------------------------------------------------------
    # Session helpers
    # ---------------------------------------------------------------
    def current() -> Visualization:
        sid = session.get("sid")
        if sid is None:
            sid = secrets.token_hex(16)
            session["sid"] = sid
        bind_context(sid=sid)
        return store.get(sid)

    @contextmanager
    def locked() -> Iterator[Visualization]:
        viz = current()
        with viz.lock:
            yield viz

    def body() -> dict:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    def state_payload(viz: Visualization, **extra) -> dict:
        player = viz.player
        snap = player.current
        out = {
            "algo":         viz.algo,
            "mode":         viz.mode.value,
            "state":        player.state.value,
            "running":      player.running,
            "speed":        player.speed,
            "current_step": player.cursor,
            "total_steps":  len(player.trace),
            "snapshot":     snap.to_dict(json_safe=True) if snap is not None else None,
        }
        out.update(extra)
        return out

    # ---------------------------------------------------------------
    # Request lifecycle
    # ---------------------------------------------------------------
    @app.before_request
    def _bind_request():
        bind_context(path=request.path, method=request.method)

    @app.teardown_request
    def _clear_request(exc):
        clear_context()

    # ---------------------------------------------------------------
    # Error mapping
    # ---------------------------------------------------------------
    @app.errorhandler(ConfigurationError)
    def _configuration_error(exc: ConfigurationError):
        log.info("request.rejected", error=str(exc))
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(ValidationError)
    def _validation_error(exc: ValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        where = ".".join(str(p) for p in first.get("loc", ()))
        message = f"{where}: {first.get('msg', 'invalid value')}" if where else str(exc)
        return jsonify({"error": message}), 400

    @app.errorhandler(GeneratorError)
    def _generator_error(exc: GeneratorError):
        log.error("generator.failed", error=str(exc))
        return jsonify({"error": str(exc)}), 500

    # ---------------------------------------------------------------
    # API: Catalogue
    # ---------------------------------------------------------------
    @app.route("/api/algorithms", methods=["GET"])
    def api_algorithms():
        return jsonify({
            "algorithms": [a.to_dict() for a in list_algorithms()],
            "modes":      [m.value for m in ViewMode],
        })

    # ---------------------------------------------------------------
    # API: Run Algorithm
    # ---------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        payload = RunRequest.model_validate(body())
        if payload.algo not in REGISTRY:
            return jsonify({"error": f"Unknown algorithm '{payload.algo}'"}), 404
        bind_context(algo=payload.algo)

        inputs = dict(payload.model_extra or {})
        kwargs = build_inputs(payload.algo, inputs, max_items=settings.max_input_items)
        with step_budget(settings.max_trace_steps):
            rec = record(payload.algo, **kwargs)

        with locked() as viz:
            viz.player.load(rec.trace)
            viz.algo    = payload.algo
            viz.inputs  = inputs
            viz.summary = rec.summary
            return jsonify(state_payload(
                viz,
                pseudocode=list(get_algorithm(payload.algo).pseudocode),
                summary=rec.summary.to_dict(),
            ))

    # ---------------------------------------------------------------
    # API: Step Navigation
    # ---------------------------------------------------------------
    @app.route("/api/step/next", methods=["POST"])
    def api_step_next():
        with locked() as viz:
            moved = viz.player.step_forward()
            return jsonify(state_payload(viz, moved=moved))

    @app.route("/api/step/prev", methods=["POST"])
    def api_step_prev():
        with locked() as viz:
            moved = viz.player.step_back()
            return jsonify(state_payload(viz, moved=moved))

    @app.route("/api/step/goto", methods=["POST"])
    def api_step_goto():
        req = GotoRequest.model_validate(body())
        with locked() as viz:
            if viz.player.trace and not 0 <= req.index < len(viz.player.trace):
                raise ConfigurationError(
                    f"Step index must be between 0 and {len(viz.player.trace) - 1}, got {req.index}"
                )
            moved = viz.player.seek(req.index)
            return jsonify(state_payload(viz, moved=moved))

    @app.route("/api/step/reset", methods=["POST"])
    def api_step_reset():
        with locked() as viz:
            viz.player.reset()
            return jsonify(state_payload(viz))

    @app.route("/api/step/play", methods=["POST"])
    def api_step_play():
        with locked() as viz:
            viz.player.play()
            return jsonify(state_payload(viz))

    @app.route("/api/step/pause", methods=["POST"])
    def api_step_pause():
        with locked() as viz:
            viz.player.pause()
            return jsonify(state_payload(viz))

    # ---------------------------------------------------------------
    # API: Config Changes
    # ---------------------------------------------------------------
    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        req = SpeedRequest.model_validate(body())
        with locked() as viz:
            viz.player.set_speed(req.speed)
            return jsonify({"speed": viz.player.speed})

    @app.route("/api/config/mode", methods=["POST"])
    def api_config_mode():
        req = ModeRequest.model_validate(body())
        with locked() as viz:
            viz.mode = req.mode
            out = {"mode": viz.mode.value}
            info = get_algorithm(viz.algo) if viz.algo else None
        if info is not None and req.mode is ViewMode.THEORY:
            out["theory"] = info.theory
            out["complexity"] = {"time": info.complexity_time, "space": info.complexity_space}
        elif info is not None and req.mode is ViewMode.PSEUDOCODE:
            out["pseudocode"] = list(info.pseudocode)
        return jsonify(out)

    # ---------------------------------------------------------------
    # API: Polling
    # ---------------------------------------------------------------
    @app.route("/api/state", methods=["GET"])
    def api_state():
        with locked() as viz:
            fired = viz.scheduler.tick()
            return jsonify(state_payload(viz, ticks=fired))

    @app.route("/api/trace", methods=["GET"])
    def api_trace():
        with locked() as viz:
            trace   = viz.player.trace
            algo    = viz.algo
            summary = viz.summary
        if not trace:
            raise ConfigurationError("Run an algorithm first")
        summary = summary or summarize(trace)
        return jsonify({
            "algo":    algo,
            "trace":   export_trace(trace),
            "summary": summary.to_dict(),
        })

    # ---------------------------------------------------------------
    # API: Session teardown
    # ---------------------------------------------------------------
    @app.route("/api/session", methods=["DELETE"])
    def api_session_close():
        sid = session.pop("sid", None)
        closed = store.drop(sid) if sid is not None else False
        return jsonify({"closed": closed})

    return app
