"""Right pane renderer for the TUI.

Draws session details: kind, age, flags, context-window fill with a
usage bar, the token breakdown, model and session ID. Updates when the
cursor moves.
"""

from __future__ import annotations

import curses

from session_usage.data.models import UsageSummary
from session_usage.tui.theme import Theme, kind_role, usage_role
from session_usage.utils.formatting import format_datetime, truncate, usage_bar


def _draw_line(stdscr: curses.window, row: int, col: int, text: str,
               width: int, attr: int) -> int:
    """Draw a single line, truncating to fit. Returns next row."""
    text = text[:width]
    try:
        stdscr.addstr(row, col, text.ljust(width), attr)
    except curses.error:
        pass
    return row + 1


def draw(stdscr: curses.window, summary: UsageSummary, theme: Theme,
         x: int, y: int, width: int, height: int) -> None:
    """Render the detail view for the highlighted session.

    Args:
        stdscr: The curses window to draw on.
        summary: The session to display details for.
        theme: Role -> attribute table.
        x: Starting column of the pane.
        y: Starting row of the pane.
        width: Width of the pane in columns.
        height: Height of the pane in rows.
    """
    content_width = width - 2  # 1-char padding on each side
    col = x + 1
    row = y
    max_row = y + height

    def _line(text: str = "", role: str = "text") -> None:
        """Draw one line and advance the row counter."""
        nonlocal row
        if row >= max_row:
            return
        row = _draw_line(stdscr, row, col, text, content_width, theme.attr(role))

    tokens = summary.tokens

    _line(truncate(summary.key, content_width), "header")
    _line(f"  {summary.kind.label}", kind_role(summary.kind))
    _line()

    _line("Updated:", "dim")
    if summary.updated_at is not None:
        _line(f"  {summary.age_text} ({format_datetime(summary.updated_at)})")
    else:
        _line("  unknown")
    _line()

    _line("Flags:", "dim")
    _line(f"  {', '.join(summary.flag_labels) or '(none)'}")
    _line()

    _line("Context:", "dim")
    _line(f"  {tokens.context_summary_short}")
    if tokens.context_tokens > 0:
        percent = tokens.percent_used
        bar_width = max(1, content_width - 8)
        _line(f"  {usage_bar(tokens.fraction_used, bar_width)} {percent or 0}%", usage_role(percent))
    else:
        _line("  Unknown context window", "usage_unknown")
    _line()

    _line("Tokens:", "dim")
    _line(f"  {tokens.input} in · {tokens.output} out · {tokens.total} total")
    _line()

    _line("Model:", "dim")
    _line(f"  {summary.model or '(default)'}")
    _line()

    _line("Session ID:", "dim")
    _line(f"  {summary.session_id or '(none)'}")

    while row < max_row:
        _line()
