"""Colour theme for the TUI.

Maps semantic roles (header, dim, error, session kinds, context-usage levels)
to curses attributes. Uses true colour when the terminal can redefine colours
and falls back to the eight basic colours otherwise.
"""

from __future__ import annotations

import curses
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from session_usage.data.models import SessionKind

# name -> (hex, basic-colour fallback)
PALETTE: Dict[str, Tuple[str, int]] = {
    "text": ("#E4DFD2", curses.COLOR_WHITE),
    "dim": ("#80848C", curses.COLOR_WHITE),
    "accent": ("#F3C15A", curses.COLOR_YELLOW),
    "accent_soft": ("#EFA35E", curses.COLOR_YELLOW),
    "border": ("#40454F", curses.COLOR_WHITE),
    "ink": ("#1C2027", curses.COLOR_BLACK),
    "blue": ("#8AC4F8", curses.COLOR_BLUE),
    "orange": ("#F0953F", curses.COLOR_YELLOW),
    "purple": ("#C38BD6", curses.COLOR_MAGENTA),
    "green": ("#7FD0A3", curses.COLOR_GREEN),
    "yellow": ("#EAD56B", curses.COLOR_YELLOW),
    "red": ("#F4736A", curses.COLOR_RED),
}


@dataclass(frozen=True)
class Style:
    fg: str
    bg: Optional[str] = None
    bold: bool = False
    dim: bool = False  # only applied on basic-colour terminals


STYLES: Dict[str, Style] = {
    "text": Style("text"),
    "dim": Style("dim", dim=True),
    "accent": Style("accent"),
    "accent_soft": Style("accent_soft"),
    "header": Style("accent", bold=True),
    "border": Style("border", dim=True),
    "error": Style("red"),
    "success": Style("green"),
    "selected": Style("ink", bg="accent", bold=True),
    "status": Style("ink", bg="accent_soft", bold=True),
    "kind_direct": Style("blue"),
    "kind_group": Style("orange"),
    "kind_global": Style("purple"),
    "kind_unknown": Style("dim", dim=True),
    "usage_ok": Style("green"),
    "usage_elevated": Style("yellow"),
    "usage_high": Style("orange"),
    "usage_critical": Style("red", bold=True),
    "usage_unknown": Style("dim", dim=True),
}

_FIRST_COLOR_ID = 16


def hex_to_curses_rgb(value: str) -> Tuple[int, int, int]:
    """Convert '#RRGGBB' to the 0-1000 scale curses.init_color expects."""
    value = value.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected a #RRGGBB colour, got {value!r}")
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return r * 1000 // 255, g * 1000 // 255, b * 1000 // 255


def usage_role(percent: Optional[int]) -> str:
    """Return the theme role for a context-usage percentage."""
    if percent is None:
        return "usage_unknown"
    if percent >= 95:
        return "usage_critical"
    if percent >= 80:
        return "usage_high"
    if percent >= 60:
        return "usage_elevated"
    return "usage_ok"


def kind_role(kind: SessionKind) -> str:
    """Return the theme role used to tint a session kind badge."""
    return f"kind_{kind.value}"


class Theme:
    """Role -> curses attribute lookup."""

    def __init__(self, attrs: Dict[str, int]) -> None:
        self._attrs = attrs

    def attr(self, role: str) -> int:
        return self._attrs.get(role, self._attrs.get("text", 0))


def plain_theme() -> Theme:
    """Theme for terminals without colour: only bold survives."""
    return Theme({role: curses.A_BOLD if style.bold else 0 for role, style in STYLES.items()})


def init_theme() -> Theme:
    """Initialize curses colours and build the role table. Call after initscr()."""
    if not curses.has_colors():
        return plain_theme()

    curses.start_color()
    curses.use_default_colors()

    true_color = curses.can_change_color() and curses.COLORS >= _FIRST_COLOR_ID + len(PALETTE)
    color_ids: Dict[str, int] = {}
    for offset, (name, (hex_value, fallback)) in enumerate(PALETTE.items()):
        if true_color:
            color_id = _FIRST_COLOR_ID + offset
            curses.init_color(color_id, *hex_to_curses_rgb(hex_value))
            color_ids[name] = color_id
        else:
            color_ids[name] = fallback

    pairs: Dict[Tuple[int, int], int] = {}
    attrs: Dict[str, int] = {}
    for role, style in STYLES.items():
        fg = color_ids[style.fg]
        # Plain text keeps the terminal's own foreground
        if role == "text":
            fg = -1
        bg = color_ids[style.bg] if style.bg is not None else -1
        if (fg, bg) not in pairs:
            pair_id = len(pairs) + 1
            curses.init_pair(pair_id, fg, bg)
            pairs[(fg, bg)] = pair_id

        attr = curses.color_pair(pairs[(fg, bg)])
        if style.bold:
            attr |= curses.A_BOLD
        if style.dim and not true_color:
            attr |= curses.A_DIM
        attrs[role] = attr

    return Theme(attrs)
