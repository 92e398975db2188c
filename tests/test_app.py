from concurrent.futures import Future
from datetime import datetime, timezone
from pathlib import Path

from session_usage.data.errors import StoreMissingError
from session_usage.data.models import SessionDefaults, SessionRecord, SessionView
from session_usage.data.summary import build_summary
from session_usage.tui.app import _collect_refresh, _State

DEFAULTS = SessionDefaults("claude-opus-4-5", 200_000)


def _view(*keys: str) -> SessionView:
    summaries = [build_summary(key, SessionRecord(), DEFAULTS, Path("/nonexistent"), []) for key in keys]
    return SessionView(
        store_path=Path("/data/sessions.json"),
        defaults=DEFAULTS,
        summaries=summaries,
        loaded_at=datetime.now(timezone.utc),
    )


def _finished(result=None, error=None) -> Future:
    future = Future()
    if error is not None:
        future.set_exception(error)
    else:
        future.set_result(result)
    return future


class TestCollectRefresh:
    def test_pending_future_is_left_alone(self):
        state = _State(None)
        state.pending = Future()
        _collect_refresh(state)
        assert state.pending is not None
        assert state.loaded_at is None

    def test_successful_load(self):
        state = _State(None)
        state.error = "old error"
        state.pending = _finished(_view("a", "b"))
        _collect_refresh(state)
        assert state.pending is None
        assert [s.key for s in state.summaries] == ["a", "b"]
        assert state.store_path == Path("/data/sessions.json")
        assert state.error is None

    def test_cursor_follows_the_same_session(self):
        state = _State(None)
        state.summaries = _view("a", "b").summaries
        state.cursor = 1
        state.pending = _finished(_view("c", "a", "b"))
        _collect_refresh(state)
        assert state.summaries[state.cursor].key == "b"

    def test_load_error_is_shown(self, tmp_path):
        missing = tmp_path / "sessions.json"
        state = _State(None)
        state.summaries = _view("a").summaries
        state.pending = _finished(error=StoreMissingError(missing))
        _collect_refresh(state)
        assert state.summaries == []
        assert state.store_path == missing
        assert state.error.startswith("No session store found")
        assert state.cursor == 0

    def test_unexpected_error_keeps_viewer_running(self):
        state = _State(None)
        state.summaries = _view("a", "b").summaries
        state.cursor = 1
        state.pending = _finished(error=RuntimeError("boom"))
        _collect_refresh(state)
        assert state.pending is None
        assert state.summaries == []
        assert state.error == "boom"
        assert state.cursor == 0
