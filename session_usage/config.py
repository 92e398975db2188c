"""Process settings and config-file hints.

Settings come from ``CLAWDIS_*`` environment variables (or a ``.env`` file).
Hints come from the assistant's own JSON config file; every hint is optional
and a missing or malformed file simply yields no hints.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from session_usage.utils.numbers import coerce_int
from session_usage.utils.paths import standardize_path

CONFIG_FILE = "clawdis.json"


class Settings(BaseSettings):
    # Data
    home: Path = Field(default_factory=lambda: Path.home() / ".clawdis")
    config: Optional[Path] = None  # Falls back to <home>/clawdis.json
    store: Optional[Path] = None  # Beats the config file's store path

    # Main session lookup
    preferred_session: Optional[str] = None

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    model_config = {"env_prefix": "CLAWDIS_", "env_file": ".env", "extra": "ignore"}

    @property
    def config_path(self) -> Path:
        if self.config is not None:
            return standardize_path(str(self.config))
        return standardize_path(str(self.home)) / CONFIG_FILE


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()


@dataclass(frozen=True)
class ConfigHints:
    """Optional overrides read from the config file."""

    store_path: Optional[Path] = None
    model: Optional[str] = None
    context_tokens: Optional[int] = None


def _section(obj: Any, key: str) -> Dict[str, Any]:
    """Return obj[key] if it is a JSON object, else an empty dict."""
    if not isinstance(obj, dict):
        return {}
    value = obj.get(key)
    return value if isinstance(value, dict) else {}


def load_config_hints(path: Optional[Path] = None) -> ConfigHints:
    """Read store path, default model and context window from the config file.

    Looks under ``inbound.reply.session.store``, ``inbound.reply.agent.model``
    and ``inbound.reply.agent.contextTokens``. Absent file, invalid JSON or
    wrong-typed values all mean "no hint".
    """
    config_path = path if path is not None else get_settings().config_path

    try:
        text = config_path.read_text(encoding="utf-8")
        parsed = json.loads(text)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return ConfigHints()

    reply = _section(_section(parsed, "inbound"), "reply")
    session = _section(reply, "session")
    agent = _section(reply, "agent")

    store = session.get("store")
    model = agent.get("model")

    return ConfigHints(
        store_path=standardize_path(store) if isinstance(store, str) and store else None,
        model=model if isinstance(model, str) and model else None,
        context_tokens=coerce_int(agent.get("contextTokens"), allow_strings=False),
    )
