from datetime import datetime, timedelta, timezone

import pytest

from session_usage.utils.formatting import format_k_tokens, ms_to_datetime, relative_age, truncate, usage_bar
from session_usage.utils.numbers import coerce_int, round_half_up

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("value,expected", [
    (0, "0"),
    (150, "150"),
    (999, "999"),
    (1000, "1.0k"),
    (1500, "1.5k"),
    (9_900, "9.9k"),
    (10_000, "10k"),
    (200_000, "200k"),
])
def test_format_k_tokens(value, expected):
    assert format_k_tokens(value) == expected


class TestRelativeAge:
    def test_unknown(self):
        assert relative_age(None, now=NOW) == "unknown"

    def test_just_now(self):
        assert relative_age(NOW - timedelta(seconds=59), now=NOW) == "just now"

    def test_future_is_just_now(self):
        assert relative_age(NOW + timedelta(minutes=5), now=NOW) == "just now"

    def test_minutes_round_half_up(self):
        assert relative_age(NOW - timedelta(seconds=90), now=NOW) == "2m ago"
        assert relative_age(NOW - timedelta(minutes=5), now=NOW) == "5m ago"

    def test_hours(self):
        assert relative_age(NOW - timedelta(hours=3), now=NOW) == "3h ago"
        assert relative_age(NOW - timedelta(hours=47), now=NOW) == "47h ago"

    def test_days(self):
        assert relative_age(NOW - timedelta(days=3), now=NOW) == "3d ago"


def test_ms_to_datetime_is_aware():
    dt = ms_to_datetime(1_700_000_000_000)
    assert dt.tzinfo is not None
    assert dt.timestamp() == 1_700_000_000


def test_truncate():
    assert truncate("short", 10) == "short"
    assert truncate("a much longer key", 8) == "a much …"


class TestUsageBar:
    def test_half(self):
        assert usage_bar(0.5, 10) == "█" * 5 + "░" * 5

    def test_empty_still_shows_one_cell(self):
        assert usage_bar(0.0, 4) == "█░░░"

    def test_overfull_is_clamped(self):
        assert usage_bar(1.7, 4) == "████"

    def test_zero_width(self):
        assert usage_bar(0.5, 0) == ""


@pytest.mark.parametrize("raw,expected", [
    (12, 12),
    (12.9, 12),
    ("42", 42),
    (" 7 ", 7),
    ("4.5", None),
    ("many", None),
    (True, None),
    (None, None),
    ([1], None),
    (float("nan"), None),
])
def test_coerce_int(raw, expected):
    assert coerce_int(raw) == expected


def test_coerce_int_without_strings():
    assert coerce_int("42", allow_strings=False) is None


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
