"""Workspace directory access."""

from .client import (
    DirectoryClient,
    FetchError,
    SlackDirectoryClient,
    entry_from_member,
    is_active_human,
)

__all__ = [
    "DirectoryClient",
    "FetchError",
    "SlackDirectoryClient",
    "entry_from_member",
    "is_active_human",
]
