"""Screens for the teamclock TUI."""

from .roster import RosterScreen

__all__ = ["RosterScreen"]
