"""Unit tests for relative time windows."""

from datetime import timedelta

import pytest

from konnect_mcp.analytics.time_window import DEFAULT_TIME_WINDOW, RelativeTimeWindow, TimeWindowDescriptor, resolve


class TestRelativeTimeWindow:
    """Test cases for RelativeTimeWindow enum."""

    def test_window_values(self):
        assert [w.value for w in RelativeTimeWindow] == ["15M", "1H", "6H", "12H", "24H", "7D"]

    def test_durations(self):
        assert RelativeTimeWindow("15M").duration == timedelta(minutes=15)
        assert RelativeTimeWindow("12H").duration == timedelta(hours=12)
        assert RelativeTimeWindow("7D").duration == timedelta(days=7)

    def test_default_is_one_hour(self):
        assert DEFAULT_TIME_WINDOW == RelativeTimeWindow.HOUR_1

    def test_symbols_are_case_sensitive(self):
        with pytest.raises(ValueError):
            RelativeTimeWindow("1h")


class TestResolve:
    """Test cases for resolve()."""

    def test_resolve_to_wire(self):
        descriptor = resolve("24H")
        assert descriptor == TimeWindowDescriptor(window=RelativeTimeWindow.HOURS_24)
        assert descriptor.to_wire() == {"type": "relative", "time_range": "24H"}

    def test_resolve_accepts_enum_members(self):
        assert resolve(RelativeTimeWindow.MINUTES_15).to_wire()["time_range"] == "15M"

    def test_describe(self):
        assert resolve("6H").describe() == {"range": "6H", "label": "last 6 hours", "durationSeconds": 21600}

    def test_unknown_symbol(self):
        with pytest.raises(ValueError):
            resolve("30D")

    def test_descriptor_is_immutable(self):
        descriptor = resolve("1H")
        with pytest.raises(AttributeError):
            descriptor.window = RelativeTimeWindow.DAYS_7
