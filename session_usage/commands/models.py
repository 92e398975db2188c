"""Handler for the 'models' subcommand.

Prints the default model followed by every model mentioned in the
session store, one per line.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from session_usage.data import available_models


def run(store: Optional[Path] = None) -> None:
    """Print the models known to the session store."""
    for model in available_models(store):
        print(model)


if __name__ == "__main__":
    run()
