import curses

import pytest

from session_usage.data.models import SessionKind
from session_usage.tui.theme import STYLES, PALETTE, hex_to_curses_rgb, kind_role, plain_theme, usage_role


@pytest.mark.parametrize("percent,role", [
    (None, "usage_unknown"),
    (0, "usage_ok"),
    (59, "usage_ok"),
    (60, "usage_elevated"),
    (79, "usage_elevated"),
    (80, "usage_high"),
    (94, "usage_high"),
    (95, "usage_critical"),
    (100, "usage_critical"),
])
def test_usage_role(percent, role):
    assert usage_role(percent) == role


def test_every_kind_has_a_style():
    for kind in SessionKind:
        assert kind_role(kind) in STYLES


def test_styles_reference_palette_colours():
    for style in STYLES.values():
        assert style.fg in PALETTE
        assert style.bg is None or style.bg in PALETTE


def test_hex_to_curses_rgb():
    assert hex_to_curses_rgb("#FFFFFF") == (1000, 1000, 1000)
    assert hex_to_curses_rgb("000000") == (0, 0, 0)
    with pytest.raises(ValueError):
        hex_to_curses_rgb("#FFF")


def test_plain_theme_keeps_bold_only():
    theme = plain_theme()
    assert theme.attr("header") == curses.A_BOLD
    assert theme.attr("dim") == 0
    assert theme.attr("no-such-role") == theme.attr("text")
