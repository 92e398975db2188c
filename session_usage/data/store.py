"""Locate and parse the session store.

The store is a single JSON object mapping session keys to records. Missing
or unparsable stores raise typed errors; a single bad entry never does.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from session_usage.config import get_settings
from session_usage.data.errors import StoreDecodeError, StoreMissingError
from session_usage.data.models import FALLBACK_MODEL, SessionRecord
from session_usage.utils.logger import get_logger
from session_usage.utils.paths import get_legacy_store_paths, get_store_path, standardize_path

log = get_logger("store")


def resolve_store_path(override: Optional[Path] = None, home: Optional[Path] = None) -> Path:
    """Return the store path to read.

    Prefers the override (or the default path when there is none), then the
    legacy locations. If nothing exists on disk, the preferred path is returned
    so the caller can report it as missing.

    Args:
        override: Explicit store path, e.g. from the CLI or config file.
        home: Optional override for the data directory (defaults to settings).
    """
    root = standardize_path(str(home if home is not None else get_settings().home))
    preferred = standardize_path(str(override)) if override is not None else get_store_path(root)
    candidates = [preferred] + get_legacy_store_paths(root)

    for candidate in candidates:
        if _exists(candidate):
            return candidate
    return preferred


def _exists(path: Path) -> bool:
    """Like Path.exists(), but a path the OS rejects (too long, no access) counts as absent."""
    try:
        return path.exists()
    except OSError as exc:
        log.debug("store_candidate_unusable", path=str(path), error=str(exc))
        return False


def _parse_record(key: str, raw: Any) -> SessionRecord:
    """Validate one entry, dropping individually invalid fields."""
    if not isinstance(raw, dict):
        log.warning("store_entry_not_object", key=key, type=type(raw).__name__)
        return SessionRecord()

    try:
        return SessionRecord.model_validate(raw)
    except ValidationError as exc:
        bad_fields = {err["loc"][0] for err in exc.errors() if err["loc"]}
        log.warning("store_entry_fields_dropped", key=key, fields=sorted(str(f) for f in bad_fields))

    salvaged = {name: value for name, value in raw.items() if name not in bad_fields}
    try:
        return SessionRecord.model_validate(salvaged)
    except ValidationError:
        return SessionRecord()


def load_store(path: Path) -> Dict[str, SessionRecord]:
    """Read the store at path and return its records keyed by session key.

    Raises:
        StoreMissingError: If no file exists at path.
        StoreDecodeError: If the file can't be read, isn't valid JSON, or isn't a JSON object.
    """
    try:
        found = path.exists()
    except OSError as exc:
        raise StoreDecodeError(str(exc), path) from exc
    if not found:
        raise StoreMissingError(path)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise StoreDecodeError(str(exc), path) from exc

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StoreDecodeError(str(exc), path) from exc

    if not isinstance(parsed, dict):
        raise StoreDecodeError(f"expected a JSON object, found {type(parsed).__name__}", path)

    return {key: _parse_record(key, raw) for key, raw in parsed.items()}


def models_in_store(path: Path, fallback: str = FALLBACK_MODEL) -> List[str]:
    """Return the fallback model followed by every distinct model in the store."""
    try:
        records = load_store(path)
    except (StoreMissingError, StoreDecodeError):
        return [fallback]

    models: List[str] = [fallback]
    for record in records.values():
        if record.model and record.model not in models:
            models.append(record.model)
    return models
