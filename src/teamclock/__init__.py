"""teamclock - coworker local times in the terminal."""

__version__ = "0.1.0"
