"""Tests for timezone entries and their derived values."""

from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from teamclock.models import (
    SAME_OFFSET,
    UNKNOWN_OFFSET,
    TimeOfDay,
    TimezoneEntry,
    format_offset_hours,
    status_for_hour,
)

WINTER = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)
NEW_YORK = ZoneInfo("America/New_York")


class TestStatusForHour:
    """Tests for the time-of-day bands."""

    @pytest.mark.parametrize(
        ("hours", "expected"),
        [
            (range(0, 6), TimeOfDay.NIGHT),
            (range(6, 9), TimeOfDay.EARLY),
            (range(9, 12), TimeOfDay.MORNING),
            (range(12, 17), TimeOfDay.AFTERNOON),
            (range(17, 21), TimeOfDay.EVENING),
            (range(21, 24), TimeOfDay.NIGHT),
        ],
    )
    def test_bands(self, hours: range, expected: TimeOfDay) -> None:
        for hour in hours:
            assert status_for_hour(hour) is expected

    def test_boundaries(self) -> None:
        assert status_for_hour(9).label == "Morning"
        assert status_for_hour(8).label == "Early"
        assert status_for_hour(23).label == "Night"
        assert status_for_hour(0).label == "Night"

    def test_every_hour_has_exactly_one_band(self) -> None:
        labels = [status_for_hour(hour) for hour in range(24)]
        assert len(labels) == 24
        assert set(labels) == set(TimeOfDay)

    @pytest.mark.parametrize("hour", [-1, 24, 100])
    def test_out_of_range_hour_raises(self, hour: int) -> None:
        with pytest.raises(ValueError):
            status_for_hour(hour)

    def test_display_includes_glyph(self) -> None:
        assert TimeOfDay.NIGHT.display() == "🌙 Night"


class TestFormatOffsetHours:
    def test_zero_is_same(self) -> None:
        assert format_offset_hours(0) == SAME_OFFSET

    def test_less_than_an_hour_is_same(self) -> None:
        assert format_offset_hours(1800) == SAME_OFFSET
        assert format_offset_hours(-1800) == SAME_OFFSET

    def test_truncates_toward_zero(self) -> None:
        assert format_offset_hours(5.5 * 3600) == "+5h"
        assert format_offset_hours(-3.5 * 3600) == "-3h"


class TestOffsetLabel:
    """Tests for offsets relative to the viewer."""

    def test_ahead_of_viewer(self) -> None:
        entry = TimezoneEntry("Kenji", "kenji", "Asia/Tokyo")
        assert entry.offset_label(WINTER, NEW_YORK) == "+14h"

    def test_behind_viewer(self) -> None:
        entry = TimezoneEntry("Grace", "grace", "America/New_York")
        assert entry.offset_label(WINTER, ZoneInfo("Asia/Tokyo")) == "-14h"

    def test_same_offset(self) -> None:
        entry = TimezoneEntry("Ada", "ada", "Europe/London")
        assert entry.offset_label(WINTER, UTC) == "Same"

    def test_unresolvable_zone(self) -> None:
        entry = TimezoneEntry("Ghost", "ghost", "Not/A_Zone")
        assert entry.offset_label(WINTER, UTC) == UNKNOWN_OFFSET

    def test_malformed_zone(self) -> None:
        entry = TimezoneEntry("Ghost", "ghost", "../etc/passwd")
        assert entry.offset_label(WINTER, UTC) == UNKNOWN_OFFSET

    def test_half_hour_zones_truncate(self) -> None:
        kolkata = TimezoneEntry("Priya", "priya", "Asia/Kolkata")
        st_johns = TimezoneEntry("Mary", "mary", "America/St_Johns")
        assert kolkata.offset_label(WINTER, UTC) == "+5h"
        assert st_johns.offset_label(WINTER, UTC) == "-3h"

    def test_uses_offsets_at_the_given_instant(self) -> None:
        """US and EU switch to summer time on different dates."""
        entry = TimezoneEntry("Grace", "grace", "America/New_York")
        berlin = ZoneInfo("Europe/Berlin")
        between_switches = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)

        assert entry.offset_label(WINTER, berlin) == "-6h"
        assert entry.offset_label(between_switches, berlin) == "-5h"

    def test_defaults_to_system_local_zone(self) -> None:
        entry = TimezoneEntry("Ada", "ada", "UTC")
        local_offset = WINTER.astimezone().utcoffset() or timedelta()
        expected = format_offset_hours(-local_offset.total_seconds())
        assert entry.offset_label(WINTER) == expected


class TestCurrentLocalTime:
    def test_converts_to_entry_zone(self) -> None:
        entry = TimezoneEntry("Kenji", "kenji", "Asia/Tokyo")
        local = entry.current_local_time(WINTER)
        assert local.hour == 21
        assert local.utcoffset() == timedelta(hours=9)

    def test_unresolvable_zone_falls_back_to_utc(self) -> None:
        entry = TimezoneEntry("Ghost", "ghost", "Mars/Olympus_Mons")
        local = entry.current_local_time(WINTER)
        assert local == WINTER
        assert local.utcoffset() == timedelta(0)

    def test_naive_instant_is_utc(self) -> None:
        entry = TimezoneEntry("Kenji", "kenji", "Asia/Tokyo")
        local = entry.current_local_time(datetime(2026, 1, 15, 12, 0))
        assert local.hour == 21

    def test_defaults_to_now(self) -> None:
        entry = TimezoneEntry("Ada", "ada", "UTC")
        before = datetime.now(UTC)
        local = entry.current_local_time()
        assert before <= local <= datetime.now(UTC)


class TestStatusLabel:
    def test_status_follows_entry_local_hour(self) -> None:
        assert TimezoneEntry("K", "k", "Asia/Tokyo").status_label(WINTER) == "Night"
        assert TimezoneEntry("G", "g", "America/New_York").status_label(
            WINTER
        ) == "Early"
        assert TimezoneEntry("A", "a", "Europe/London").status_label(
            WINTER
        ) == "Afternoon"

    def test_unresolvable_zone_uses_utc_hour(self) -> None:
        entry = TimezoneEntry("Ghost", "ghost", "Nowhere/Special")
        assert entry.status_label(WINTER) == "Afternoon"


class TestTimezoneEntry:
    def test_default_timezone_is_utc(self) -> None:
        assert TimezoneEntry("Ada", "ada").timezone_id == "UTC"

    def test_is_immutable(self) -> None:
        entry = TimezoneEntry("Ada", "ada")
        with pytest.raises(AttributeError):
            entry.name = "Other"  # type: ignore[misc]

    def test_matches_is_case_insensitive(self) -> None:
        entry = TimezoneEntry("Ada Lovelace", "ada", "Europe/London")
        assert entry.matches("LOVE")
        assert entry.matches("ADA")
        assert entry.matches("london")
        assert not entry.matches("tokyo")
