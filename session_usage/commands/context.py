"""Handler for the 'context' subcommand.

Prints the context-window fill of the main session: its key, the
'used/context' short form, a usage bar and the token breakdown.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from session_usage.config import get_settings
from session_usage.data import SessionLoadError, load_session_view, pick_main_session
from session_usage.utils.formatting import usage_bar

DEFAULT_BAR_WIDTH = 30


def run(store: Optional[Path] = None, key: Optional[str] = None, width: int = DEFAULT_BAR_WIDTH) -> None:
    """Print the main session's context row.

    Args:
        store: Optional override for the session store path.
        key: Session key to prefer when there is no 'main' session.
        width: Width of the usage bar in columns.
    """
    preferred = key if key is not None else get_settings().preferred_session

    try:
        view = load_session_view(store)
    except SessionLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    summary = pick_main_session(view.summaries, preferred)
    if summary is None:
        print("Context (main): —")
        return

    tokens = summary.tokens
    print(f"Context ({summary.key}): {tokens.context_summary_short}")
    if tokens.context_tokens > 0:
        percent = tokens.percent_used or 0
        print(f"  {usage_bar(tokens.fraction_used, width)} {percent}%")
    else:
        print("  Unknown context window")
    print(f"  {tokens.summary}")
    print(f"  {summary.model} · {summary.age_text}")


if __name__ == "__main__":
    run(key=sys.argv[1] if len(sys.argv) > 1 else None)
