"""Browse per-session token usage from the session store."""

__version__ = "0.1.0"
