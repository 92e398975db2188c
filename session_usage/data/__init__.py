"""Data layer for Session Usage."""

from session_usage.data.errors import SessionLoadError, StoreDecodeError, StoreMissingError
from session_usage.data.models import (
    SessionDefaults,
    SessionKind,
    SessionRecord,
    SessionView,
    TokenStats,
    UsageSnapshot,
    UsageSummary,
)
from session_usage.data.store import load_store, models_in_store, resolve_store_path
from session_usage.data.summary import (
    available_models,
    load_session_view,
    load_usage_summaries,
    pick_main_session,
    resolve_store,
)
from session_usage.data.transcript import prompt_tokens_for_session

__all__ = [
    "SessionDefaults",
    "SessionKind",
    "SessionLoadError",
    "SessionRecord",
    "SessionView",
    "StoreDecodeError",
    "StoreMissingError",
    "TokenStats",
    "UsageSnapshot",
    "UsageSummary",
    "available_models",
    "load_session_view",
    "load_store",
    "load_usage_summaries",
    "models_in_store",
    "pick_main_session",
    "prompt_tokens_for_session",
    "resolve_store",
    "resolve_store_path",
]
