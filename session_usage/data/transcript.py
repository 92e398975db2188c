"""Recover prompt-token counts from per-session transcript logs.

Transcripts are JSON-Lines files named ``<sessionId>.jsonl``. Any line may
carry a ``usage`` object (top level or under ``message``); the last one in the
file wins. Every failure here means "no better number", never an error.
"""

from __future__ import annotations

import json
from functools import reduce
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Sequence

from session_usage.data.models import UsageSnapshot
from session_usage.utils.logger import get_logger
from session_usage.utils.numbers import coerce_int
from session_usage.utils.paths import get_transcript_dirs, get_transcript_path

log = get_logger("transcript")


def find_transcript(session_id: str, store_dir: Path,
                    search_dirs: Optional[Sequence[Path]] = None) -> Optional[Path]:
    """Return the first existing transcript for session_id.

    Looks next to the store first, then in the per-user agent session
    directories (or search_dirs when given).
    """
    trimmed = session_id.strip()
    if not trimmed:
        return None

    dirs = [store_dir] + list(search_dirs if search_dirs is not None else get_transcript_dirs())
    for directory in dirs:
        candidate = get_transcript_path(directory, trimmed)
        try:
            if candidate.is_file():
                return candidate
        except OSError as exc:
            # e.g. a session id longer than the filesystem allows
            log.debug("transcript_candidate_unusable", path=str(candidate), error=str(exc))
    return None


def _usage_from_line(line: str) -> Optional[Dict[str, Any]]:
    """Return the usage object carried by one transcript line, if any."""
    line = line.strip()
    if not line:
        return None
    try:
        entry = json.loads(line)
    except json.JSONDecodeError:
        return None
    if not isinstance(entry, dict):
        return None

    message = entry.get("message")
    if isinstance(message, dict) and isinstance(message.get("usage"), dict):
        return message["usage"]
    if isinstance(entry.get("usage"), dict):
        return entry["usage"]
    return None


def _first_number(usage: Dict[str, Any], *names: str) -> Optional[int]:
    for name in names:
        if usage.get(name) is not None:
            return coerce_int(usage[name])
    return None


def snapshot_from_usage(usage: Dict[str, Any]) -> UsageSnapshot:
    """Build a snapshot from a usage object, accepting camelCase or snake_case keys."""
    return UsageSnapshot(
        input=_first_number(usage, "input") or 0,
        output=_first_number(usage, "output") or 0,
        cache_read=_first_number(usage, "cacheRead", "cache_read") or 0,
        cache_write=_first_number(usage, "cacheWrite", "cache_write") or 0,
        total_tokens=_first_number(usage, "totalTokens", "total_tokens", "total"),
    )


def _keep_latest(latest: Optional[Dict[str, Any]], line: str) -> Optional[Dict[str, Any]]:
    usage = _usage_from_line(line)
    return usage if usage is not None else latest


def latest_usage(lines: Iterable[str]) -> Optional[UsageSnapshot]:
    """Fold transcript lines into the last usage snapshot they contain."""
    last = reduce(_keep_latest, lines, None)
    return snapshot_from_usage(last) if last is not None else None


def read_latest_usage(path: Path) -> Optional[UsageSnapshot]:
    """Read a transcript file and return its last usage snapshot."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        log.debug("transcript_unreadable", path=str(path), error=str(exc))
        return None
    return latest_usage(text.splitlines())


def prompt_tokens_for_session(session_id: Optional[str], store_dir: Path,
                              search_dirs: Optional[Sequence[Path]] = None) -> Optional[int]:
    """Return the prompt-token estimate for a session, or None if unavailable."""
    if not session_id:
        return None

    path = find_transcript(session_id, store_dir, search_dirs)
    if path is None:
        return None

    snapshot = read_latest_usage(path)
    if snapshot is None:
        log.debug("transcript_without_usage", path=str(path))
        return None
    return snapshot.prompt_tokens
