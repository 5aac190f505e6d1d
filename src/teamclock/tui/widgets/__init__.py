"""Custom widgets for the teamclock TUI."""

from .roster_table import RosterTable

__all__ = ["RosterTable"]
