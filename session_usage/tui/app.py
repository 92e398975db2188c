"""Main TUI application loop.

Manages curses setup/teardown, state (cursor, scroll, last load), input
dispatch, and the render loop. Loading runs on a worker thread so a slow
disk never freezes the screen; the loop polls the pending future on each
tick.
"""

from __future__ import annotations

import curses
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from session_usage.data import SessionLoadError, SessionView, UsageSummary, load_session_view
from session_usage.tui import left_pane, right_pane, status_bar
from session_usage.tui.theme import Theme, init_theme
from session_usage.utils.formatting import relative_age
from session_usage.utils.logger import get_logger

log = get_logger("tui")

_EMPTY_MESSAGE = "No sessions yet. They appear after the first inbound message or heartbeat."


class _State:
    """Mutable state container for the TUI."""

    def __init__(self, store_override: Optional[Path]) -> None:
        self.store_override = store_override
        self.summaries: List[UsageSummary] = []
        self.store_path: Optional[Path] = None
        self.loaded_at: Optional[datetime] = None
        self.error: Optional[str] = None
        self.cursor = 0
        self.scroll_offset = 0
        self.pending: Optional[Future] = None


def _ensure_cursor_visible(state: _State, pane_height: int) -> None:
    """Adjust scroll_offset so the cursor is visible in the pane."""
    # Header row takes 1 line, so data rows = pane_height - 1
    data_height = pane_height - 1
    if state.cursor < state.scroll_offset:
        state.scroll_offset = state.cursor
    elif state.cursor >= state.scroll_offset + data_height:
        state.scroll_offset = state.cursor - data_height + 1


def _start_refresh(state: _State, executor: ThreadPoolExecutor) -> None:
    """Queue a background reload unless one is already running."""
    if state.pending is not None:
        return
    state.pending = executor.submit(load_session_view, state.store_override)


def _show_error(state: _State, message: str, store_path: Optional[Path] = None) -> None:
    state.summaries = []
    state.store_path = store_path or state.store_path
    state.error = message
    state.cursor = 0
    state.scroll_offset = 0


def _collect_refresh(state: _State) -> None:
    """Apply a finished background reload to the state."""
    if state.pending is None or not state.pending.done():
        return
    future, state.pending = state.pending, None

    try:
        view: SessionView = future.result()
    except SessionLoadError as exc:
        log.info("store_load_failed", error=str(exc))
        _show_error(state, str(exc), getattr(exc, "path", None))
        return
    except Exception as exc:
        # Keep the viewer up; the next refresh may succeed
        log.error("refresh_failed", error=str(exc), exc_info=True)
        _show_error(state, str(exc) or type(exc).__name__)
        return

    current_key = state.summaries[state.cursor].key if state.summaries else None
    state.summaries = view.summaries
    state.store_path = view.store_path
    state.loaded_at = view.loaded_at
    state.error = None

    # Keep the cursor on the same session across reloads
    keys = [s.key for s in state.summaries]
    state.cursor = keys.index(current_key) if current_key in keys else 0


def _draw_title(stdscr: curses.window, state: _State, theme: Theme, max_x: int) -> None:
    """Draw the store location and last load time on the top row."""
    parts = [" Sessions"]
    if state.store_path is not None:
        parts.append(str(state.store_path))
    if state.loaded_at is not None:
        parts.append(f"Updated {relative_age(state.loaded_at)}")
    text = "  ·  ".join(parts)[:max_x - 1]
    try:
        stdscr.addstr(0, 0, text.ljust(max_x - 1), theme.attr("header"))
    except curses.error:
        pass


def _draw_centered(stdscr: curses.window, text: str, row: int, max_x: int, attr: int) -> None:
    text = text[:max_x - 1]
    try:
        stdscr.addstr(row, max(0, (max_x - len(text)) // 2), text, attr)
    except curses.error:
        pass


def _draw_divider(stdscr: curses.window, col: int, y: int, height: int, attr: int) -> None:
    """Draw a vertical divider line between the two panes."""
    for row in range(height):
        try:
            stdscr.addstr(y + row, col, "│", attr)
        except curses.error:
            pass


def _render(stdscr: curses.window, state: _State, theme: Theme) -> None:
    """Perform a full render of the TUI."""
    stdscr.erase()
    max_y, max_x = stdscr.getmaxyx()

    if max_y < 4 or max_x < 20:
        try:
            stdscr.addstr(0, 0, "Terminal too small")
        except curses.error:
            pass
        stdscr.noutrefresh()
        curses.doupdate()
        return

    # Layout: title at top, status bar at bottom, panes in between
    content_y = 1
    status_y = max_y - 1
    pane_height = max_y - 2
    loading = state.pending is not None

    _draw_title(stdscr, state, theme, max_x)

    if not state.summaries:
        middle = content_y + pane_height // 2
        if state.error is not None:
            _draw_centered(stdscr, state.error, middle, max_x, theme.attr("error"))
        elif state.loaded_at is not None:
            _draw_centered(stdscr, _EMPTY_MESSAGE, middle, max_x, theme.attr("dim"))
        status_bar.draw(stdscr, theme, max_x, status_y, loading=loading)
        stdscr.noutrefresh()
        curses.doupdate()
        return

    # Pane widths: left ~55%, divider 1 col, right the rest
    left_width = max(20, int(max_x * 0.55))
    divider_col = left_width
    right_x = left_width + 1
    right_width = max_x - right_x

    # Hide right pane on narrow terminals
    show_right = max_x >= 70
    if not show_right:
        left_width = max_x

    _ensure_cursor_visible(state, pane_height)

    left_pane.draw(
        stdscr, state.summaries, state.cursor, state.scroll_offset, theme,
        x=0, y=content_y, width=left_width, height=pane_height,
    )

    if show_right:
        _draw_divider(stdscr, divider_col, content_y, pane_height, theme.attr("border"))
        right_pane.draw(
            stdscr, state.summaries[state.cursor], theme,
            x=right_x, y=content_y, width=right_width, height=pane_height,
        )

    status_bar.draw(stdscr, theme, max_x, status_y, loading=loading)

    stdscr.noutrefresh()
    curses.doupdate()


def _handle_key(key: int, state: _State, executor: ThreadPoolExecutor) -> Optional[str]:
    """Handle a keypress. Returns 'quit' or None."""
    if key in (curses.KEY_UP, ord("k")):
        if state.cursor > 0:
            state.cursor -= 1
    elif key in (curses.KEY_DOWN, ord("j")):
        if state.cursor < len(state.summaries) - 1:
            state.cursor += 1
    elif key in (curses.KEY_HOME, ord("g")):
        state.cursor = 0
    elif key in (curses.KEY_END, ord("G")):
        state.cursor = max(0, len(state.summaries) - 1)
    elif key in (ord("R"), ord("r")):
        _start_refresh(state, executor)
    elif key in (ord("Q"), ord("q")):
        return "quit"
    return None


def _main(stdscr: curses.window, store_override: Optional[Path]) -> None:
    """Curses main function, runs inside curses.wrapper."""
    curses.curs_set(0)  # hide cursor
    stdscr.keypad(True)
    stdscr.timeout(100)  # 100ms tick: resize handling and refresh polling
    theme = init_theme()

    state = _State(store_override)

    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="session-load") as executor:
        _start_refresh(state, executor)

        while True:
            _collect_refresh(state)
            _render(stdscr, state, theme)

            try:
                key = stdscr.getch()
            except curses.error:
                continue

            if key == -1:
                continue

            if key == curses.KEY_RESIZE:
                stdscr.clear()
                continue

            if _handle_key(key, state, executor) == "quit":
                break


def run(store: Optional[Path] = None) -> None:
    """Entry point for the TUI. Sets up curses and runs the main loop."""
    curses.wrapper(_main, store)


if __name__ == "__main__":
    run()
