import json
from pathlib import Path

import pytest

from session_usage.utils.logger import setup_logging

# Keep structlog quiet; tests assert on behaviour, not log lines
setup_logging("CRITICAL")


@pytest.fixture(autouse=True)
def home(tmp_path, monkeypatch):
    """Isolate the user home and the data directory for every test."""
    user_home = tmp_path / "user"
    user_home.mkdir()
    data_home = user_home / ".clawdis"

    monkeypatch.setenv("HOME", str(user_home))
    monkeypatch.setenv("CLAWDIS_HOME", str(data_home))
    monkeypatch.setenv("CLAWDIS_LOG_LEVEL", "CRITICAL")
    for name in ("CLAWDIS_CONFIG", "CLAWDIS_STORE", "CLAWDIS_PREFERRED_SESSION", "CLAWDIS_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    # No stray .env file from the working directory
    monkeypatch.chdir(tmp_path)
    return data_home


@pytest.fixture
def store_path(home):
    """Default store location under the isolated data directory."""
    return home / "sessions" / "sessions.json"


@pytest.fixture
def write_store():
    """Write a store file and return its path."""
    def _write(path: Path, data) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def write_transcript():
    """Write a <session_id>.jsonl transcript; dict lines are JSON-encoded."""
    def _write(directory: Path, session_id: str, lines) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{session_id}.jsonl"
        text = "\n".join(line if isinstance(line, str) else json.dumps(line) for line in lines)
        path.write_text(text + "\n", encoding="utf-8")
        return path
    return _write
