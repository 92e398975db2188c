"""Status bar renderer for the TUI.

Draws a single line at the bottom showing the available keybindings,
or a progress note while a refresh is running.
"""

from __future__ import annotations

import curses

from session_usage.tui.theme import Theme

_HINTS = " ↑/↓ Navigate  |  R: Refresh  |  Q: Quit"
_LOADING = " Refreshing..."


def draw(stdscr: curses.window, theme: Theme, width: int, y: int,
         loading: bool = False) -> None:
    """Render the status bar at the given row.

    Args:
        stdscr: The curses window to draw on.
        theme: Theme providing the status attribute.
        width: Terminal width in columns.
        y: Row number where the status bar should be drawn.
        loading: Whether a refresh is in flight.
    """
    if loading:
        text = _LOADING
    else:
        text = _HINTS

    # Pad or truncate to fill the full width
    text = text[:width].ljust(width)

    try:
        stdscr.addstr(y, 0, text, theme.attr("status"))
    except curses.error:
        # Writing to the very last cell can raise on some terminals
        pass
