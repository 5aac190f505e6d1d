"""Timezone entries and their wall-clock derivations.

Entries store only what the directory returned. Local time, offset and
time-of-day are computed from an instant on every call so a render never
shows a value cached across a daylight-saving change.
"""

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from enum import Enum
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "UTC"
UNKNOWN_OFFSET = "?"
SAME_OFFSET = "Same"


class TimeOfDay(Enum):
    """Coarse time-of-day bands as (label, glyph)."""

    EARLY = ("Early", "🌄")
    MORNING = ("Morning", "🌅")
    AFTERNOON = ("Afternoon", "☀️")
    EVENING = ("Evening", "🌆")
    NIGHT = ("Night", "🌙")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def glyph(self) -> str:
        return self.value[1]

    def display(self) -> str:
        """Glyph and label, e.g. "🌙 Night"."""
        return f"{self.glyph} {self.label}"


def status_for_hour(hour: int) -> TimeOfDay:
    """Classify a local hour of day (0-23) into its band.

    Raises:
        ValueError: If hour is outside 0-23.
    """
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be in 0-23, got {hour}")
    if 9 <= hour < 12:
        return TimeOfDay.MORNING
    if 12 <= hour < 17:
        return TimeOfDay.AFTERNOON
    if 17 <= hour < 21:
        return TimeOfDay.EVENING
    if hour >= 21 or hour < 6:
        return TimeOfDay.NIGHT
    return TimeOfDay.EARLY


@lru_cache(maxsize=512)
def resolve_zone(timezone_id: str) -> ZoneInfo | None:
    """Look up an IANA zone, returning None if it is unknown or malformed.

    Cached so an unresolvable identifier is logged once, not once per tick.
    """
    try:
        return ZoneInfo(timezone_id)
    except (ZoneInfoNotFoundError, ValueError, OSError) as e:
        logger.warning("Error loading timezone %s: %s", timezone_id, e)
        return None


def _instant(at: datetime | None) -> datetime:
    if at is None:
        return datetime.now(UTC)
    if at.tzinfo is None:
        # Naive instants are taken as UTC
        return at.replace(tzinfo=UTC)
    return at


def format_offset_hours(diff_seconds: float) -> str:
    """Format an offset difference as "Same", "+Nh" or "-Nh".

    Hours are truncated toward zero, so a 30 minute difference is "Same".
    """
    hours = math.trunc(diff_seconds / 3600)
    if hours == 0:
        return SAME_OFFSET
    if hours > 0:
        return f"+{hours}h"
    return f"{hours}h"


@dataclass(frozen=True)
class TimezoneEntry:
    """One coworker's directory record."""

    name: str
    handle: str
    timezone_id: str = DEFAULT_TIMEZONE
    raw_offset_seconds: int = 0

    @property
    def zone(self) -> ZoneInfo | None:
        """The resolved zone, or None if the identifier is unusable."""
        return resolve_zone(self.timezone_id)

    def current_local_time(self, at: datetime | None = None) -> datetime:
        """Get the entry's local time at an instant (default: now).

        Falls back to UTC when the zone cannot be resolved.
        """
        instant = _instant(at)
        zone = self.zone
        if zone is None:
            return instant.astimezone(UTC)
        return instant.astimezone(zone)

    def offset_label(
        self, at: datetime | None = None, viewer_zone: tzinfo | None = None
    ) -> str:
        """Describe the entry's offset relative to the viewer's zone.

        Args:
            at: Instant to evaluate both offsets at (default: now).
            viewer_zone: The viewer's zone (default: the system local zone).

        Returns:
            "Same", "+Nh", "-Nh", or "?" if the entry zone is unresolvable.
        """
        zone = self.zone
        if zone is None:
            return UNKNOWN_OFFSET
        instant = _instant(at)
        entry_offset = instant.astimezone(zone).utcoffset()
        if viewer_zone is None:
            viewer_offset = instant.astimezone().utcoffset()
        else:
            viewer_offset = instant.astimezone(viewer_zone).utcoffset()
        if entry_offset is None or viewer_offset is None:
            return UNKNOWN_OFFSET
        return format_offset_hours((entry_offset - viewer_offset).total_seconds())

    def time_of_day(self, at: datetime | None = None) -> TimeOfDay:
        """Get the time-of-day band for the entry's local hour."""
        return status_for_hour(self.current_local_time(at).hour)

    def status_label(self, at: datetime | None = None) -> str:
        """Get the time-of-day label, e.g. "Morning"."""
        return self.time_of_day(at).label

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match over name, handle and timezone."""
        needle = term.lower()
        return (
            needle in self.name.lower()
            or needle in self.handle.lower()
            or needle in self.timezone_id.lower()
        )
