"""Turn session store records into sorted, display-ready summaries."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from session_usage.config import ConfigHints, get_settings, load_config_hints
from session_usage.data.models import (
    FALLBACK_CONTEXT_TOKENS,
    FALLBACK_MODEL,
    SessionDefaults,
    SessionKind,
    SessionRecord,
    SessionView,
    TokenStats,
    UsageSummary,
)
from session_usage.data.store import load_store, models_in_store, resolve_store_path
from session_usage.data.transcript import prompt_tokens_for_session
from session_usage.utils.formatting import ms_to_datetime
from session_usage.utils.logger import get_logger

log = get_logger("summary")

MAIN_SESSION_KEY = "main"


def resolve_defaults(hints: ConfigHints) -> SessionDefaults:
    """Fill in the default model and context window from config hints."""
    return SessionDefaults(
        model=hints.model or FALLBACK_MODEL,
        context_tokens=hints.context_tokens if hints.context_tokens is not None else FALLBACK_CONTEXT_TOKENS,
    )


def _updated_at(record: SessionRecord) -> Optional[datetime]:
    if record.updated_at is None:
        return None
    try:
        return ms_to_datetime(record.updated_at)
    except (OverflowError, OSError, ValueError):
        return None


def build_summary(key: str, record: SessionRecord, defaults: SessionDefaults, store_dir: Path,
                  transcript_dirs: Optional[Sequence[Path]] = None) -> UsageSummary:
    """Resolve one record against defaults and its transcript."""
    input_tokens = record.input_tokens or 0
    output_tokens = record.output_tokens or 0
    stored_total = record.total_tokens if record.total_tokens is not None else input_tokens + output_tokens
    prompt_tokens = prompt_tokens_for_session(record.session_id, store_dir, transcript_dirs)

    return UsageSummary(
        key=key,
        kind=SessionKind.from_key(key),
        updated_at=_updated_at(record),
        session_id=record.session_id,
        thinking_level=record.thinking_level,
        verbose_level=record.verbose_level,
        system_sent=bool(record.system_sent),
        aborted_last_run=bool(record.aborted_last_run),
        tokens=TokenStats(
            input=input_tokens,
            output=output_tokens,
            total=max(stored_total, prompt_tokens or 0),
            context_tokens=record.context_tokens if record.context_tokens is not None else defaults.context_tokens,
        ),
        model=record.model or defaults.model,
    )


def _sort_key(summary: UsageSummary) -> float:
    if summary.updated_at is None:
        return float("-inf")
    return summary.updated_at.timestamp()


def load_usage_summaries(path: Path, defaults: SessionDefaults,
                         transcript_dirs: Optional[Sequence[Path]] = None) -> List[UsageSummary]:
    """Load the store at path and return one summary per key, most recent first.

    Entries without a timestamp sort last.

    Args:
        path: Path to the session store.
        defaults: Model and context window for records that omit them.
        transcript_dirs: Optional override for the per-user transcript directories.

    Raises:
        StoreMissingError: If the store doesn't exist.
        StoreDecodeError: If the store can't be parsed.
    """
    records = load_store(path)
    store_dir = path.parent

    summaries = [
        build_summary(key, record, defaults, store_dir, transcript_dirs)
        for key, record in records.items()
    ]
    summaries.sort(key=_sort_key, reverse=True)

    log.debug("summaries_loaded", path=str(path), count=len(summaries))
    return summaries


def pick_main_session(summaries: Sequence[UsageSummary],
                      preferred_key: Optional[str] = None) -> Optional[UsageSummary]:
    """Return the 'main' session, else the preferred one, else the most recent."""
    for key in (MAIN_SESSION_KEY, preferred_key):
        if key is None:
            continue
        for summary in summaries:
            if summary.key == key:
                return summary
    return summaries[0] if summaries else None


def resolve_store(store_override: Optional[Path] = None) -> Tuple[Path, SessionDefaults]:
    """Return (store path, defaults) from the override, settings and config hints."""
    settings = get_settings()
    hints = load_config_hints(settings.config_path)
    override = store_override or settings.store or hints.store_path
    return resolve_store_path(override, home=settings.home), resolve_defaults(hints)


def load_session_view(store_override: Optional[Path] = None,
                      transcript_dirs: Optional[Sequence[Path]] = None) -> SessionView:
    """Resolve configuration and load every summary.

    Raises the same errors as load_usage_summaries; they carry the resolved
    store path.
    """
    path, defaults = resolve_store(store_override)
    summaries = load_usage_summaries(path, defaults, transcript_dirs)
    return SessionView(
        store_path=path,
        defaults=defaults,
        summaries=summaries,
        loaded_at=datetime.now(timezone.utc),
    )


def available_models(store_override: Optional[Path] = None, fallback: str = FALLBACK_MODEL) -> List[str]:
    """Return the fallback model plus every model the resolved store mentions."""
    path, _ = resolve_store(store_override)
    return models_in_store(path, fallback)
