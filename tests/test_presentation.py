"""Tests for dashboard view formatting."""

from dataclasses import replace
from datetime import UTC, datetime

from teamclock.models import TimezoneEntry
from teamclock.tui.presentation import (
    SPINNER_FRAMES,
    DisplayConfig,
    build_view,
    entry_row,
    format_clock,
    format_day,
    help_line,
    spinner_glyph,
)
from teamclock.tui.session import (
    FetchFailed,
    FetchSucceeded,
    KeyInput,
    advance,
    initial_state,
)

T0 = datetime(2026, 1, 2, 12, 0, tzinfo=UTC)
CONFIG = DisplayConfig()

Roster = tuple[TimezoneEntry, ...]


class TestFormatting:
    def test_format_clock(self) -> None:
        assert format_clock(datetime(2026, 1, 2, 15, 4)) == "3:04 PM"
        assert format_clock(datetime(2026, 1, 2, 0, 5)) == "12:05 AM"
        assert format_clock(datetime(2026, 1, 2, 12, 0)) == "12:00 PM"
        assert format_clock(datetime(2026, 1, 2, 9, 30)) == "9:30 AM"

    def test_format_day(self) -> None:
        assert format_day(datetime(2026, 1, 2)) == "Jan 2"
        assert format_day(datetime(2026, 11, 30)) == "Nov 30"

    def test_spinner_cycles(self) -> None:
        assert spinner_glyph(0) == SPINNER_FRAMES[0]
        assert spinner_glyph(len(SPINNER_FRAMES)) == SPINNER_FRAMES[0]
        assert spinner_glyph(3) == SPINNER_FRAMES[3]

    def test_entry_row(self) -> None:
        entry = TimezoneEntry("Kenji Sato", "kenji", "Asia/Tokyo")
        assert entry_row(entry, T0, UTC) == (
            "Kenji Sato",
            "kenji",
            "Asia/Tokyo",
            "9:00 PM",
            "Jan 2",
            "🌙 Night",
            "+9h",
        )

    def test_entry_row_with_unknown_zone(self) -> None:
        entry = TimezoneEntry("Ghost", "ghost", "Atlantis/Capital")
        row = entry_row(entry, T0, UTC)
        assert row[3] == "12:00 PM"
        assert row[6] == "?"


class TestBuildView:
    def test_loading_shows_spinner(self) -> None:
        view = build_view(initial_state(T0), CONFIG, UTC)
        assert view.body == "spinner"
        assert view.rows == ()
        assert view.banner is not None
        assert CONFIG.loading_message in view.banner.plain
        assert view.search is not None
        assert CONFIG.search_placeholder in view.search.plain

    def test_ready_shows_table(self, roster: Roster) -> None:
        state = advance(initial_state(T0), FetchSucceeded(roster, 0)).state
        view = build_view(state, CONFIG, UTC)
        assert view.body == "table"
        assert view.banner is None
        assert [row[1] for row in view.rows] == ["ada", "grace", "kenji"]
        assert view.title.plain == CONFIG.title
        assert view.help.plain == "Press '/' to search, 'r' to refresh, 'q' to quit"

    def test_rows_follow_state_clock(self, roster: Roster) -> None:
        state = advance(initial_state(T0), FetchSucceeded(roster, 0)).state
        later = replace(state, now=datetime(2026, 1, 2, 13, 30, tzinfo=UTC))
        assert build_view(state, CONFIG, UTC).rows[0][3] == "12:00 PM"
        assert build_view(later, CONFIG, UTC).rows[0][3] == "1:30 PM"

    def test_fetch_error_shows_banner_only(self, roster: Roster) -> None:
        state = advance(initial_state(T0), FetchSucceeded(roster, 0)).state
        state = advance(state, KeyInput("r", "r")).state
        state = advance(state, FetchFailed("invalid_auth", state.generation)).state
        view = build_view(state, CONFIG, UTC)

        assert view.body == "error"
        assert view.rows == ()
        assert view.search is None
        assert view.banner is not None
        assert view.banner.plain == "Error: invalid_auth"
        assert view.help.plain == "Press 'r' to retry, 'q' to quit"

    def test_config_error_offers_quit_only(self) -> None:
        state = initial_state(T0, config_error="SLACK_BOT_TOKEN missing")
        view = build_view(state, CONFIG, UTC)
        assert view.body == "error"
        assert view.help.plain == "Press 'q' to quit"

    def test_search_box_while_editing(self, roster: Roster) -> None:
        state = advance(initial_state(T0), FetchSucceeded(roster, 0)).state
        state = advance(state, KeyInput("slash", "/")).state
        for character in "ken":
            state = advance(state, KeyInput(character, character)).state
        view = build_view(state, CONFIG, UTC)

        assert view.search is not None
        assert view.search.plain == f"{CONFIG.search_label}ken{CONFIG.search_cursor}"
        assert [row[1] for row in view.rows] == ["kenji"]
        assert help_line(state) == "Press 'enter' to apply search, 'esc' to cancel"

    def test_committed_search_has_no_cursor(self, roster: Roster) -> None:
        state = advance(initial_state(T0), FetchSucceeded(roster, 0)).state
        for key, character in [("slash", "/"), ("k", "k"), ("enter", None)]:
            state = advance(state, KeyInput(key, character)).state
        view = build_view(state, CONFIG, UTC)
        assert view.search is not None
        assert view.search.plain == f"{CONFIG.search_label}k"

    def test_custom_config_is_used(self) -> None:
        config = DisplayConfig(title="Team", loading_message="Fetching...")
        view = build_view(initial_state(T0), config, UTC)
        assert view.title.plain == "Team"
        assert view.banner is not None
        assert view.banner.plain.endswith("Fetching...")
