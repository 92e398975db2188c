"""Handler for the 'ls' subcommand.

Prints an aligned table of all sessions to stdout, most recently
updated first.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from session_usage.data import SessionLoadError, load_session_view
from session_usage.utils.formatting import truncate


def run(store: Optional[Path] = None) -> None:
    """Print all sessions as an aligned table to stdout.

    Args:
        store: Optional override for the session store path.
    """
    try:
        view = load_session_view(store)
    except SessionLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    if not view.summaries:
        print("No sessions yet. They appear after the first inbound message or heartbeat.", file=sys.stderr)
        return

    headers = ["Session", "Kind", "Updated", "Context", "Used", "Model", "Flags"]

    rows = []
    for summary in view.summaries:
        percent = summary.tokens.percent_used
        rows.append([
            truncate(summary.key, 32),
            summary.kind.label,
            summary.age_text,
            summary.tokens.context_summary_short,
            f"{percent}%" if percent is not None else "-",
            summary.model or "",
            ", ".join(summary.flag_labels),
        ])

    # Compute column widths from headers and data
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    fmt = "  ".join(f"{{:<{w}}}" for w in col_widths)
    print(fmt.format(*headers).rstrip())
    for row in rows:
        print(fmt.format(*row).rstrip())


if __name__ == "__main__":
    run()
