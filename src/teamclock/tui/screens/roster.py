"""Roster screen - the live coworker clock table."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, tzinfo
from typing import Any

from textual import events, work
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import Static

from teamclock.directory import DirectoryClient, FetchError
from teamclock.tui.messages import RosterFetched, RosterFetchFailed
from teamclock.tui.presentation import DashboardView, DisplayConfig, build_view
from teamclock.tui.session import (
    Event,
    ExitSession,
    FetchFailed,
    FetchSucceeded,
    KeyInput,
    LoopState,
    NavigateTable,
    SessionStarted,
    SpinnerFrame,
    StartFetch,
    Tick,
    advance,
    initial_state,
)
from teamclock.tui.widgets import RosterTable

logger = logging.getLogger(__name__)

TICK_INTERVAL = 1.0
SPINNER_INTERVAL = 0.1


class RosterScreen(Screen):
    """
    Roster screen - owns the dashboard session.

    Every input becomes a session event applied on this screen's message
    pump, one at a time: the clock and spinner timers, fetch results posted
    back from the worker thread, and key presses. The widgets are redrawn
    from the resulting state.
    """

    DEFAULT_CSS = """
    RosterScreen {
        overflow: hidden;
        padding: 0 2;
    }

    RosterScreen #title {
        margin: 1 0;
    }

    RosterScreen #subtitle {
        margin: 0 0 1 0;
    }

    RosterScreen #search {
        border: solid $surface-lighten-2;
        padding: 0 1;
        margin: 0 0 1 0;
        height: 3;
    }

    RosterScreen #search.active {
        border: solid $accent;
    }

    RosterScreen #banner.error {
        margin: 1 0;
    }

    RosterScreen #help {
        margin: 1 0;
    }
    """

    def __init__(
        self,
        client: DirectoryClient | None,
        *,
        config: DisplayConfig | None = None,
        config_error: str | None = None,
        viewer_zone: tzinfo | None = None,
        tick_interval: float = TICK_INTERVAL,
        spinner_interval: float = SPINNER_INTERVAL,
        clock: Callable[[], datetime] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.client = client
        self.config = config or DisplayConfig()
        self.viewer_zone = viewer_zone
        self.tick_interval = tick_interval
        self.spinner_interval = spinner_interval
        self._clock = clock or (lambda: datetime.now(UTC))
        if client is None and config_error is None:
            config_error = "no directory client configured"
        self.state: LoopState = initial_state(self._clock(), config_error)
        self._tick_timer: Timer | None = None
        self._spinner_timer: Timer | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="dashboard"):
            yield Static(id="title")
            yield Static(id="subtitle")
            yield Static(id="search")
            yield RosterTable(self.config.columns, id="roster")
            yield Static(id="banner")
            yield Static(id="help")

    def on_mount(self) -> None:
        """Start the timers and the first fetch."""
        self.query_one("#roster", RosterTable).styles.max_height = (
            self.config.table_height + 2
        )
        self._tick_timer = self.set_interval(self.tick_interval, self._on_tick)
        self._spinner_timer = self.set_interval(
            self.spinner_interval, self._on_spinner
        )
        self.apply_event(SessionStarted())
        self._render_state()

    # --- Event sources ---

    def _on_tick(self) -> None:
        self.apply_event(Tick(self._clock()))

    def _on_spinner(self) -> None:
        self.apply_event(SpinnerFrame())

    def on_key(self, event: events.Key) -> None:
        """Route every key through the session."""
        event.stop()
        event.prevent_default()
        self.apply_event(KeyInput(event.key, event.character))

    def on_roster_fetched(self, message: RosterFetched) -> None:
        self.apply_event(FetchSucceeded(message.roster, message.generation))

    def on_roster_fetch_failed(self, message: RosterFetchFailed) -> None:
        self.apply_event(FetchFailed(message.error, message.generation))

    # --- Session ---

    def apply_event(self, event: Event) -> None:
        """Apply one event, carry out its effects and redraw if needed."""
        transition = advance(self.state, event)
        changed = transition.state != self.state
        self.state = transition.state
        if changed:
            self._render_state()
        for effect in transition.effects:
            if isinstance(effect, StartFetch):
                self._fetch_roster(effect.generation)
            elif isinstance(effect, NavigateTable):
                self.query_one("#roster", RosterTable).navigate(effect.key)
            elif isinstance(effect, ExitSession):
                logger.info("Quit requested")
                self.app.exit()

    @work(thread=True, group="directory-fetch")
    def _fetch_roster(self, generation: int) -> None:
        """Fetch the roster off the render path and post the result back."""
        assert self.client is not None, "client not configured"
        logger.info("Fetching roster (generation %d)", generation)
        try:
            roster = self.client.fetch_roster()
        except FetchError as e:
            logger.warning("Roster fetch failed: %s", e)
            self.app.call_from_thread(
                self.post_message, RosterFetchFailed(str(e), generation)
            )
            return
        except Exception as e:
            logger.exception("Unexpected error fetching roster: %s", e)
            self.app.call_from_thread(
                self.post_message, RosterFetchFailed(str(e), generation)
            )
            return
        self.app.call_from_thread(
            self.post_message, RosterFetched(roster, generation)
        )

    # --- Rendering ---

    @property
    def dashboard_view(self) -> DashboardView:
        """The view for the current state."""
        return build_view(self.state, self.config, self.viewer_zone)

    def _render_state(self) -> None:
        """Push the current view into the widgets."""
        view = self.dashboard_view
        self.query_one("#title", Static).update(view.title)
        self.query_one("#subtitle", Static).update(view.subtitle)

        search = self.query_one("#search", Static)
        search.display = view.search is not None
        if view.search is not None:
            search.update(view.search)
        search.set_class(self.state.search_active, "active")

        table = self.query_one("#roster", RosterTable)
        table.display = view.body == "table"
        if view.body == "table":
            table.show_rows(view.rows)

        banner = self.query_one("#banner", Static)
        banner.display = view.banner is not None
        if view.banner is not None:
            banner.update(view.banner)
        banner.set_class(view.body == "error", "error")

        self.query_one("#help", Static).update(view.help)
