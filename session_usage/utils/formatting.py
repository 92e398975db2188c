"""Formatting helpers for timestamps, token counts and text display."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from session_usage.utils.numbers import round_half_up

_BAR_FILLED = "█"
_BAR_EMPTY = "░"


def ms_to_datetime(timestamp_ms: float) -> datetime:
    """Convert Unix milliseconds timestamp to local datetime."""
    return datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc).astimezone()


def format_datetime(dt: datetime) -> str:
    """Format datetime as 'YYYY-MM-DD HH:MM'."""
    return dt.strftime("%Y-%m-%d %H:%M")


def truncate(text: str, max_length: int) -> str:
    """Truncate text to max_length, appending '…' if truncated."""
    if len(text) <= max_length:
        return text
    return text[: max_length - 1] + "…"


def format_k_tokens(value: int) -> str:
    """Format a token count as '950', '1.5k' or '200k'."""
    if value < 1000:
        return str(value)
    decimals = 0 if value >= 10_000 else 1
    return f"{value / 1000:.{decimals}f}k"


def relative_age(dt: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Describe how long ago dt was: 'just now', '5m ago', '3h ago', '2d ago'."""
    if dt is None:
        return "unknown"
    if now is None:
        now = datetime.now(timezone.utc)
    delta = (now - dt).total_seconds()
    if delta < 60:
        return "just now"
    minutes = round_half_up(delta / 60)
    if minutes < 60:
        return f"{minutes}m ago"
    hours = round_half_up(minutes / 60)
    if hours < 48:
        return f"{hours}h ago"
    days = round_half_up(hours / 24)
    return f"{days}d ago"


def usage_bar(fraction: float, width: int) -> str:
    """Render a fill bar of the given width; a non-empty bar shows at least one filled cell."""
    if width <= 0:
        return ""
    fraction = min(1.0, max(0.0, fraction))
    filled = max(1, min(width, round_half_up(fraction * width)))
    return _BAR_FILLED * filled + _BAR_EMPTY * (width - filled)
