"""Left pane renderer for the TUI.

Draws a flat, scrollable session list. Each row shows the session key,
its kind, how long ago it was updated, the context short form and the
model. The highlighted row uses the selection colour; elsewhere the
context column is tinted by how full the window is.
"""

from __future__ import annotations

import curses
from typing import List

from session_usage.data.models import UsageSummary
from session_usage.tui.theme import Theme, usage_role
from session_usage.utils.formatting import truncate

_GAP = 2
_KEY_MAX = 28


def draw(stdscr: curses.window, summaries: List[UsageSummary], cursor: int,
         scroll_offset: int, theme: Theme,
         x: int, y: int, width: int, height: int) -> None:
    """Render the session list in the left pane area.

    Args:
        stdscr: The curses window to draw on.
        summaries: Full list of session summaries.
        cursor: Index of the currently highlighted session.
        scroll_offset: First visible row index.
        theme: Role -> attribute table.
        x: Starting column of the pane.
        y: Starting row of the pane.
        width: Width of the pane in columns.
        height: Height of the pane in rows.
    """
    # Header takes 1 row; data rows fill the rest
    data_height = height - 1
    headers = ["Session", "Kind", "Updated", "Context", "Model"]

    visible: List[tuple] = []  # (index, key, kind, age, context, model)
    for row_idx in range(data_height):
        idx = scroll_offset + row_idx
        if idx >= len(summaries):
            break
        s = summaries[idx]
        visible.append((
            idx,
            truncate(s.key, _KEY_MAX),
            s.kind.label,
            s.age_text,
            s.tokens.context_summary_short,
            s.model or "",
        ))

    # Last column (model) gets whatever space remains
    col_widths = [len(headers[i]) for i in range(4)]
    for _, key, kind, age, context, _ in visible:
        col_widths[0] = max(col_widths[0], len(key))
        col_widths[1] = max(col_widths[1], len(kind))
        col_widths[2] = max(col_widths[2], len(age))
        col_widths[3] = max(col_widths[3], len(context))
    context_col = x + sum(col_widths[:3]) + _GAP * 3

    def _format(cells: tuple) -> str:
        line = "".join(f"{cell:<{col_widths[i]}}" + " " * _GAP for i, cell in enumerate(cells[:4]))
        line += cells[4]
        return line[:width].ljust(width)

    try:
        stdscr.addstr(y, x, _format(tuple(headers)), theme.attr("header"))
    except curses.error:
        pass

    for row_idx in range(data_height):
        screen_y = y + 1 + row_idx

        if row_idx >= len(visible):
            # Clear remaining rows
            try:
                stdscr.addstr(screen_y, x, " " * width, theme.attr("text"))
            except curses.error:
                pass
            continue

        idx, key, kind, age, context, model = visible[row_idx]
        is_cursor = idx == cursor
        attr = theme.attr("selected") if is_cursor else theme.attr("text")

        try:
            stdscr.addstr(screen_y, x, _format((key, kind, age, context, model)), attr)
            if not is_cursor and context_col + len(context) <= x + width:
                role = usage_role(summaries[idx].tokens.percent_used)
                stdscr.addstr(screen_y, context_col, context, theme.attr(role))
        except curses.error:
            pass
