"""Custom Textual messages posted from the fetch worker."""

from textual.message import Message

from teamclock.models import Roster


class RosterFetched(Message):
    """A directory fetch returned a roster."""

    def __init__(self, roster: Roster, generation: int) -> None:
        self.roster = roster
        self.generation = generation
        super().__init__()


class RosterFetchFailed(Message):
    """A directory fetch failed."""

    def __init__(self, error: str, generation: int) -> None:
        self.error = error
        self.generation = generation
        super().__init__()
