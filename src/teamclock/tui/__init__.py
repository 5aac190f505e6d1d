"""Terminal UI for teamclock."""
