"""Pure formatting of session state into a dashboard view."""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Literal

from rich.text import Text

from teamclock.models import TimezoneEntry

from .session import ErrorKind, LoopState

SPINNER_FRAMES = ("⣾", "⣽", "⣻", "⢿", "⡿", "⣟", "⣯", "⣷")

BodyKind = Literal["table", "spinner", "error"]
Row = tuple[str, ...]


@dataclass(frozen=True)
class Column:
    """A table column heading and its width."""

    title: str
    width: int


DEFAULT_COLUMNS = (
    Column("Name", 20),
    Column("Username", 15),
    Column("Timezone", 25),
    Column("Current Time", 12),
    Column("Date", 10),
    Column("Status", 15),
    Column("Offset", 8),
)


@dataclass(frozen=True)
class DisplayConfig:
    """Text and style constants for the dashboard.

    Styles are Rich style strings. Built once at startup and passed to the
    screen and to ``build_view``.
    """

    title: str = "⏰ Coworker Timezones"
    subtitle: str = "Real-time timezone information from Slack"
    search_label: str = "🔍 Search: "
    search_placeholder: str = "Search by name, username, or timezone..."
    loading_message: str = "Loading coworker timezones..."
    search_cursor: str = "▏"
    columns: tuple[Column, ...] = DEFAULT_COLUMNS
    table_height: int = 15
    title_style: str = "bold #ff5faf"
    subtitle_style: str = "#626262"
    spinner_style: str = "#ff5faf"
    error_style: str = "bold #ff0000"
    help_style: str = "#626262"
    placeholder_style: str = "#585858"


@dataclass(frozen=True)
class DashboardView:
    """Everything the screen needs to draw one frame."""

    title: Text
    subtitle: Text
    search: Text | None
    body: BodyKind
    rows: tuple[Row, ...]
    banner: Text | None
    help: Text


def format_clock(moment: datetime) -> str:
    """Format a time like "3:04 PM"."""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {meridiem}"


def format_day(moment: datetime) -> str:
    """Format a date like "Jan 2"."""
    return f"{moment:%b} {moment.day}"


def entry_row(
    entry: TimezoneEntry, now: datetime, viewer_zone: tzinfo | None = None
) -> Row:
    """Build the table cells for one entry at an instant."""
    local = entry.current_local_time(now)
    return (
        entry.name,
        entry.handle,
        entry.timezone_id,
        format_clock(local),
        format_day(local),
        entry.time_of_day(now).display(),
        entry.offset_label(now, viewer_zone),
    )


def build_rows(
    roster: tuple[TimezoneEntry, ...],
    now: datetime,
    viewer_zone: tzinfo | None = None,
) -> tuple[Row, ...]:
    """Build table rows for a roster, recomputing every derived value."""
    return tuple(entry_row(entry, now, viewer_zone) for entry in roster)


def spinner_glyph(frame: int) -> str:
    return SPINNER_FRAMES[frame % len(SPINNER_FRAMES)]


def _search_text(state: LoopState, config: DisplayConfig) -> Text:
    text = Text(config.search_label)
    if state.search_term:
        text.append(state.search_term)
        if state.search_active:
            text.append(config.search_cursor)
    else:
        if state.search_active:
            text.append(config.search_cursor)
        text.append(config.search_placeholder, style=config.placeholder_style)
    return text


def help_line(state: LoopState) -> str:
    """Key hints for the current phase."""
    error = state.last_error
    if error is not None:
        if error.kind is ErrorKind.CONFIG or not state.can_refresh:
            return "Press 'q' to quit"
        return "Press 'r' to retry, 'q' to quit"
    if state.search_active:
        return "Press 'enter' to apply search, 'esc' to cancel"
    return "Press '/' to search, 'r' to refresh, 'q' to quit"


def build_view(
    state: LoopState,
    config: DisplayConfig,
    viewer_zone: tzinfo | None = None,
) -> DashboardView:
    """Format the session state for display.

    Errors replace both the search box and the table; loading shows the
    spinner in place of the table.
    """
    title = Text(config.title, style=config.title_style)
    subtitle = Text(config.subtitle, style=config.subtitle_style)
    hints = Text(help_line(state), style=config.help_style)

    if state.last_error is not None:
        return DashboardView(
            title=title,
            subtitle=subtitle,
            search=None,
            body="error",
            rows=(),
            banner=Text(
                f"Error: {state.last_error.message}", style=config.error_style
            ),
            help=hints,
        )

    search = _search_text(state, config)
    if state.loading:
        banner = Text.assemble(
            (spinner_glyph(state.spinner_frame), config.spinner_style),
            " ",
            config.loading_message,
        )
        return DashboardView(
            title=title,
            subtitle=subtitle,
            search=search,
            body="spinner",
            rows=(),
            banner=banner,
            help=hints,
        )

    return DashboardView(
        title=title,
        subtitle=subtitle,
        search=search,
        body="table",
        rows=build_rows(state.displayed_roster, state.now, viewer_zone),
        banner=None,
        help=hints,
    )
