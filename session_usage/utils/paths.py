"""Path utilities for locating the session store and transcript logs."""

from __future__ import annotations

from pathlib import Path
from typing import List

SESSIONS_DIR = "sessions"
STORE_FILE = "sessions.json"
TRANSCRIPT_SUFFIX = ".jsonl"


def standardize_path(path: str) -> Path:
    """Expand '~' and collapse doubled separators."""
    expanded = str(Path(path).expanduser())
    while "//" in expanded:
        expanded = expanded.replace("//", "/")
    return Path(expanded)


def get_store_path(home: Path) -> Path:
    """Return path: <home>/sessions/sessions.json"""
    return home / SESSIONS_DIR / STORE_FILE


def get_legacy_store_paths(home: Path) -> List[Path]:
    """Return older store locations, checked after the default one."""
    return [home / STORE_FILE]


def get_transcript_dirs() -> List[Path]:
    """Return the per-user directories where agents keep session transcripts."""
    user_home = Path.home()
    return [
        user_home / ".pi" / "agent" / "sessions",
        user_home / ".tau" / "agent" / "sessions" / "clawdis",
    ]


def get_transcript_path(directory: Path, session_id: str) -> Path:
    """Return path: <directory>/<session_id>.jsonl"""
    return directory / f"{session_id}{TRANSCRIPT_SUFFIX}"
