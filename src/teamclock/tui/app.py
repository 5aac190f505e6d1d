"""Main teamclock TUI application."""

import logging
from datetime import tzinfo
from typing import Any

from textual.app import App

from teamclock.directory import DirectoryClient
from teamclock.tui.presentation import DisplayConfig
from teamclock.tui.screens.roster import RosterScreen

logger = logging.getLogger(__name__)


class TeamClockApp(App[None]):
    """Full-screen coworker clock dashboard."""

    TITLE = "teamclock"
    SUB_TITLE = "Coworker timezones"

    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: $surface;
    }
    """

    def __init__(
        self,
        client: DirectoryClient | None,
        *,
        config: DisplayConfig | None = None,
        config_error: str | None = None,
        viewer_zone: tzinfo | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.client = client
        self.display_config = config or DisplayConfig()
        self.config_error = config_error
        self.viewer_zone = viewer_zone

    def on_mount(self) -> None:
        """Show the roster screen."""
        if self.config_error:
            logger.warning("Starting without credentials: %s", self.config_error)
        self.push_screen(
            RosterScreen(
                self.client,
                config=self.display_config,
                config_error=self.config_error,
                viewer_zone=self.viewer_zone,
            )
        )
