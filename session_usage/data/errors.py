"""Errors raised while loading the session store."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class SessionLoadError(Exception):
    """Base class for store-level failures. str(exc) is the user-facing message."""


class StoreMissingError(SessionLoadError):
    """The store file does not exist yet."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"No session store found at {path} yet. Send or receive a message to create it.")


class StoreDecodeError(SessionLoadError):
    """The store file exists but could not be read or parsed."""

    def __init__(self, reason: str, path: Optional[Path] = None) -> None:
        self.reason = reason
        self.path = path
        super().__init__(f"Could not read the session store: {reason}")
