import threading

import pytest

from algoviz.app import SessionStore, create_app
from algoviz.engine import ManualClock
from algoviz.settings import AppSettings


@pytest.fixture
def app():
    settings = AppSettings(env="test", secret_key="test-secret", log_level="WARNING")
    app = create_app(settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def test_algorithm_catalogue(client) -> None:
    res = client.get("/api/algorithms")
    assert res.status_code == 200
    data = res.get_json()
    assert len(data["algorithms"]) == 21
    assert data["modes"] == ["visualizer", "theory", "pseudocode"]


def test_run_and_navigate(client) -> None:
    res = client.post("/api/run", json={"algo": "bfs"})
    assert res.status_code == 200
    data = res.get_json()
    assert data["current_step"] == 0
    assert data["total_steps"] == 22
    assert data["state"] == "ready"
    assert data["snapshot"]["kind"] == "initialize"
    assert data["summary"]["terminal_kind"] == "complete"
    assert data["pseudocode"][0].startswith("def BFS")

    data = client.post("/api/step/next").get_json()
    assert data["moved"] is True
    assert data["current_step"] == 1
    assert data["snapshot"]["kind"] == "dequeue"

    data = client.post("/api/step/prev").get_json()
    assert data["current_step"] == 0
    assert client.post("/api/step/prev").get_json()["moved"] is False

    data = client.post("/api/step/goto", json={"index": 21}).get_json()
    assert data["state"] == "finished"
    assert data["snapshot"]["kind"] == "complete"

    data = client.post("/api/step/reset").get_json()
    assert data["current_step"] == 0
    assert data["state"] == "ready"


def test_run_with_custom_inputs(client) -> None:
    res = client.post("/api/run", json={"algo": "dijkstra", "nodes": "S, T", "edges": "S-T:7"})
    assert res.status_code == 200
    trace = client.get("/api/trace").get_json()
    final = trace["trace"][-1]["state"]
    assert final["distances"] == {"S": 0, "T": 7}
    assert trace["summary"]["total_steps"] == len(trace["trace"])


def test_play_pause_and_poll(client) -> None:
    client.post("/api/run", json={"algo": "selection_sort"})
    assert client.post("/api/step/play").get_json()["state"] == "running"
    polled = client.get("/api/state").get_json()
    assert polled["algo"] == "selection_sort"
    assert "ticks" in polled
    assert client.post("/api/step/pause").get_json()["state"] == "paused"


def test_speed_and_mode(client) -> None:
    assert client.post("/api/config/speed", json={"speed": "fast"}).get_json()["speed"] == 0.15
    assert client.post("/api/config/speed", json={"speed": 0.5}).get_json()["speed"] == 0.5
    assert client.post("/api/config/speed", json={"speed": "warp"}).status_code == 400

    client.post("/api/run", json={"algo": "kmp"})
    data = client.post("/api/config/mode", json={"mode": "theory"}).get_json()
    assert data["mode"] == "theory"
    assert "Knuth" in data["theory"]
    data = client.post("/api/config/mode", json={"mode": "pseudocode"}).get_json()
    assert data["pseudocode"][0] == "def ComputeLPS(P):"
    assert client.post("/api/config/mode", json={"mode": "bogus"}).status_code == 400


def test_error_mapping(client) -> None:
    assert client.post("/api/run", json={"algo": "bogo_sort"}).status_code == 404
    assert client.post("/api/run", json={}).status_code == 400

    res = client.post("/api/run", json={"algo": "bfs", "start": "Z"})
    assert res.status_code == 400
    assert "Z" in res.get_json()["error"]

    assert client.post("/api/run", json={"algo": "kmp", "pattern": ""}).status_code == 400
    assert client.get("/api/trace").status_code == 400

    client.post("/api/run", json={"algo": "bfs"})
    assert client.post("/api/step/goto", json={"index": 99}).status_code == 400
    assert client.post("/api/step/goto", json={"index": "abc"}).status_code == 400


def test_sessions_are_isolated(app) -> None:
    first, second = app.test_client(), app.test_client()
    first.post("/api/run", json={"algo": "bfs"})
    first.post("/api/step/next")

    other = second.get("/api/state").get_json()
    assert other["total_steps"] == 0
    assert other["snapshot"] is None
    assert first.get("/api/state").get_json()["current_step"] == 1
    assert len(app.extensions["algoviz.sessions"]) == 2


def test_closing_a_session(client, app) -> None:
    client.post("/api/run", json={"algo": "bfs"})
    assert client.delete("/api/session").get_json()["closed"] is True
    assert len(app.extensions["algoviz.sessions"]) == 0
    assert client.get("/api/state").get_json()["total_steps"] == 0


def test_run_that_outgrows_the_step_budget_is_rejected() -> None:
    settings = AppSettings(env="test", secret_key="test-secret", log_level="WARNING", max_trace_steps=2000)
    client = create_app(settings).test_client()
    grid = "\n".join(["0 0 0 0 0 0 0 0 9"] + ["0 0 0 0 0 0 0 0 0"] * 7 + ["1 2 3 4 5 6 7 8 0"])

    res = client.post("/api/run", json={"algo": "sudoku", "grid": grid})
    assert res.status_code == 400
    assert "more than 2000 steps" in res.get_json()["error"]
    assert client.get("/api/state").get_json()["total_steps"] == 0


# ---------------------------------------------------------------------------
# Session store bounds
# ---------------------------------------------------------------------------
def test_one_shot_clients_do_not_pile_up() -> None:
    settings = AppSettings(env="test", secret_key="test-secret", log_level="WARNING", max_sessions=3)
    app = create_app(settings)
    for _ in range(50):
        assert app.test_client().post("/api/run", json={"algo": "selection_sort"}).status_code == 200
    assert len(app.extensions["algoviz.sessions"]) == 3


def test_least_recently_used_session_is_evicted_and_closed(trace) -> None:
    store = SessionStore(default_speed="slow", max_sessions=2, clock=ManualClock())
    first = store.get("a")
    first.player.load(trace)
    first.player.play()
    assert first.scheduler.pending == 1

    store.get("b")
    store.get("a")              # "b" is now the least recently used
    store.get("c")

    assert "a" in store and "c" in store
    assert "b" not in store
    assert len(store) == 2

    store.get("d")
    assert "a" not in store
    assert first.scheduler.pending == 0
    assert not first.player.has_pending_tick


def test_idle_sessions_expire() -> None:
    clock = ManualClock()
    store = SessionStore(default_speed="slow", idle_seconds=60.0, clock=clock)
    stale = store.get("a")
    clock.advance(30.0)
    store.get("b")
    clock.advance(45.0)

    store.get("b")
    assert "a" not in store
    assert "b" in store

    fresh = store.get("a")
    assert fresh is not stale
    assert store.drop("a") is True
    assert store.drop("a") is False


def test_requests_for_one_session_take_turns(client, app) -> None:
    client.post("/api/run", json={"algo": "bfs"})
    with client.session_transaction() as sess:
        sid = sess["sid"]
    viz = app.extensions["algoviz.sessions"].get(sid)

    results = []
    worker = threading.Thread(target=lambda: results.append(client.post("/api/step/next").get_json()))
    with viz.lock:
        worker.start()
        worker.join(timeout=0.3)
        assert worker.is_alive()
        assert viz.player.cursor == 0
    worker.join(timeout=5)

    assert not worker.is_alive()
    assert results[0]["current_step"] == 1
