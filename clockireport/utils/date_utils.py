"""Date utility functions for clockiReport."""
from datetime import datetime, date, time, timezone, timedelta
from typing import Tuple
import calendar

MODES = ("day", "week", "month", "year")


def iso_datetime(dt: date, is_end: bool = False) -> str:
    """Convert a date to the ISO datetime string the Clockify API expects.

    Args:
        dt: Date to convert
        is_end: Whether this is an end date (last instant of the day)

    Returns:
        ISO datetime string in UTC, e.g. ``2024-05-01T00:00:00Z``
    """
    t = time(23, 59, 59) if is_end else time.min
    return datetime.combine(dt, t, tzinfo=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD string."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def get_range(mode: str, ref_date: date, week_start: int = 0) -> Tuple[date, date]:
    """Get the first and last day of the period containing ``ref_date``.

    Args:
        mode: One of day, week, month or year
        ref_date: Date within the period
        week_start: Day of week to start on (0=Monday, 6=Sunday)

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        ValueError: If the mode is unknown
    """
    if mode == "day":
        return ref_date, ref_date
    if mode == "week":
        start = ref_date - timedelta(days=(ref_date.weekday() - week_start) % 7)
        return start, start + timedelta(days=6)
    if mode == "month":
        last_day = calendar.monthrange(ref_date.year, ref_date.month)[1]
        return ref_date.replace(day=1), ref_date.replace(day=last_day)
    if mode == "year":
        return date(ref_date.year, 1, 1), date(ref_date.year, 12, 31)
    raise ValueError(f"unknown mode: {mode}")
