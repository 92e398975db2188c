"""Curses session browser."""
