"""Formatting utility functions for clockiReport."""
from datetime import datetime, timedelta, tzinfo
from typing import Iterable, List

TIME_FORMAT_SIMPLE = "%H:%M:%S"
TIME_FORMAT_FULL = "%Y-%m-%d %H:%M:%S"

TIME_FORMAT_ALIASES = {
    "simple": TIME_FORMAT_SIMPLE,
    "full": TIME_FORMAT_FULL,
}


def format_duration(duration: timedelta) -> str:
    """Format a duration as H:MM:SS.

    Hours are not wrapped at 24 and sub-second parts are dropped.

    Args:
        duration: Duration to format

    Returns:
        Formatted duration, e.g. ``"26:05:09"``
    """
    seconds = int(duration.total_seconds())
    sign = "-" if seconds < 0 else ""
    h, rest = divmod(abs(seconds), 3600)
    m, s = divmod(rest, 60)
    return f"{sign}{h}:{m:02}:{s:02}"


def format_hours(duration: timedelta) -> str:
    """Format a duration as decimal hours with six decimals."""
    return f"{duration.total_seconds() / 3600:f}"


def format_local(value: datetime, layout: str, tz: tzinfo) -> str:
    """Format an aware datetime in the given timezone.

    Args:
        value: Datetime to format
        layout: strftime layout
        tz: Timezone to convert to before formatting

    Returns:
        Formatted datetime string
    """
    return value.astimezone(tz).strftime(layout)


def resolve_time_format(value: str) -> str:
    """Resolve ``simple``/``full`` aliases to a strftime layout."""
    if not value:
        return TIME_FORMAT_SIMPLE
    return TIME_FORMAT_ALIASES.get(value.lower(), value)


def tags_to_strings(tags: Iterable) -> List[str]:
    """Format tags as ``name (id)``."""
    return [f"{t.name} ({t.id})" for t in tags]
