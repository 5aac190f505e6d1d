"""Refresh/render/filter state machine for the roster dashboard.

All session state lives in one immutable ``LoopState``. Every input (clock
ticks, spinner frames, fetch results and key presses) is an event, and
``advance`` maps (state, event) to a new state plus the effects the host
must carry out. The host applies events one at a time from a single message
pump, so nothing here needs locking.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum

from teamclock.models import Roster, filter_roster

SEARCH_CHAR_LIMIT = 156

# Keys forwarded to the table when navigation is allowed
NAVIGATION_KEYS = frozenset({"up", "down", "pageup", "pagedown", "home", "end"})

QUIT_KEYS = frozenset({"q", "ctrl+c"})


class SessionPhase(Enum):
    """Phases of the dashboard session."""

    LOADING = "loading"
    READY = "ready"
    SEARCH_EDITING = "search_editing"
    ERRORED = "errored"


class ErrorKind(Enum):
    """Session-level error kinds."""

    CONFIG = "config"  # missing credential; fixed outside the app
    FETCH = "fetch"  # directory failure; fixed by a manual refresh


@dataclass(frozen=True)
class SessionError:
    """An error shown in place of the roster."""

    kind: ErrorKind
    message: str


# --- Events ---


@dataclass(frozen=True)
class SessionStarted:
    """The dashboard has been mounted."""


@dataclass(frozen=True)
class Tick:
    """Once-per-second clock tick."""

    now: datetime


@dataclass(frozen=True)
class SpinnerFrame:
    """Advance the loading animation."""


@dataclass(frozen=True)
class FetchSucceeded:
    """A directory fetch completed."""

    roster: Roster
    generation: int


@dataclass(frozen=True)
class FetchFailed:
    """A directory fetch failed."""

    message: str
    generation: int


@dataclass(frozen=True)
class KeyInput:
    """A key press from the terminal."""

    key: str
    character: str | None = None


Event = SessionStarted | Tick | SpinnerFrame | FetchSucceeded | FetchFailed | KeyInput


# --- Effects ---


@dataclass(frozen=True)
class StartFetch:
    """Run a directory fetch off the render path."""

    generation: int


@dataclass(frozen=True)
class NavigateTable:
    """Move the table cursor."""

    key: str


@dataclass(frozen=True)
class ExitSession:
    """End the session."""


Effect = StartFetch | NavigateTable | ExitSession


@dataclass(frozen=True)
class LoopState:
    """Snapshot of the dashboard session."""

    now: datetime
    authoritative_roster: Roster = ()
    displayed_roster: Roster = ()
    search_term: str = ""
    search_active: bool = False
    loading: bool = True
    last_error: SessionError | None = None
    spinner_frame: int = 0
    generation: int = 0
    can_refresh: bool = True

    @property
    def phase(self) -> SessionPhase:
        """The phase derived from the loading/error/search flags."""
        if self.last_error is not None:
            return SessionPhase.ERRORED
        if self.loading:
            return SessionPhase.LOADING
        if self.search_active:
            return SessionPhase.SEARCH_EDITING
        return SessionPhase.READY

    def with_search(self, term: str) -> LoopState:
        """Replace the search term and recompute the displayed roster."""
        return replace(
            self,
            search_term=term,
            displayed_roster=filter_roster(self.authoritative_roster, term),
        )

    def with_roster(self, roster: Roster) -> LoopState:
        """Replace the authoritative roster and recompute the displayed one."""
        return replace(
            self,
            authoritative_roster=roster,
            displayed_roster=filter_roster(roster, self.search_term),
        )


@dataclass(frozen=True)
class Transition:
    """Result of applying one event."""

    state: LoopState
    effects: tuple[Effect, ...] = field(default_factory=tuple)


def initial_state(
    now: datetime | None = None, config_error: str | None = None
) -> LoopState:
    """Build the startup state.

    Without a credential the session starts errored and refresh is disabled.
    """
    now = now or datetime.now(UTC)
    if config_error is not None:
        return LoopState(
            now=now,
            loading=False,
            last_error=SessionError(ErrorKind.CONFIG, config_error),
            can_refresh=False,
        )
    return LoopState(now=now)


def advance(state: LoopState, event: Event) -> Transition:
    """Apply one event to the session state."""
    if isinstance(event, SessionStarted):
        if state.can_refresh and state.loading:
            return Transition(state, (StartFetch(state.generation),))
        return Transition(state)

    if isinstance(event, Tick):
        return Transition(replace(state, now=event.now))

    if isinstance(event, SpinnerFrame):
        if not state.loading:
            return Transition(state)
        return Transition(replace(state, spinner_frame=state.spinner_frame + 1))

    if isinstance(event, FetchSucceeded):
        if event.generation != state.generation:
            return Transition(state)
        loaded = state.with_roster(tuple(event.roster))
        return Transition(replace(loaded, loading=False, last_error=None))

    if isinstance(event, FetchFailed):
        if event.generation != state.generation:
            return Transition(state)
        return Transition(
            replace(
                state,
                loading=False,
                search_active=False,
                last_error=SessionError(ErrorKind.FETCH, event.message),
            )
        )

    if isinstance(event, KeyInput):
        return _handle_key(state, event)

    raise TypeError(f"Unknown event: {event!r}")


def _handle_key(state: LoopState, event: KeyInput) -> Transition:
    """Route a key press according to the current phase."""
    key = event.key
    if key == "ctrl+c":
        return Transition(state, (ExitSession(),))

    if state.search_active:
        return _handle_search_key(state, event)

    if key in QUIT_KEYS:
        return Transition(state, (ExitSession(),))

    if key == "r":
        return _request_refresh(state)

    if key == "slash" or event.character == "/":
        if state.last_error is not None:
            return Transition(state)
        return Transition(replace(state, search_active=True))

    if key in NAVIGATION_KEYS and state.phase == SessionPhase.READY:
        return Transition(state, (NavigateTable(key),))

    return Transition(state)


def _handle_search_key(state: LoopState, event: KeyInput) -> Transition:
    """Apply a key press while the search field has focus."""
    if event.key == "escape":
        return Transition(replace(state.with_search(""), search_active=False))
    if event.key == "enter":
        return Transition(replace(state, search_active=False))
    if event.key == "backspace":
        return Transition(state.with_search(state.search_term[:-1]))

    character = event.character
    if character and character.isprintable() and len(character) == 1:
        if len(state.search_term) >= SEARCH_CHAR_LIMIT:
            return Transition(state)
        return Transition(state.with_search(state.search_term + character))

    return Transition(state)


def _request_refresh(state: LoopState) -> Transition:
    """Start a new fetch unless one is outstanding or no credential exists."""
    if state.loading or not state.can_refresh:
        return Transition(state)
    generation = state.generation + 1
    refreshed = replace(
        state,
        loading=True,
        last_error=None,
        generation=generation,
        spinner_frame=0,
    )
    return Transition(refreshed, (StartFetch(generation),))

