"""Path, formatting and logging helpers."""
