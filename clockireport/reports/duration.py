"""Elapsed time of time entries.

Running entries have no end, so their duration is measured against ``now``.
Callers sample ``now`` once per report and pass the same instant to every
call so per-row durations and totals agree.
"""
from datetime import datetime, timedelta
from typing import Iterable, Optional

from .time_entry import TimeEntry
from ..utils.format_utils import format_duration, format_hours


def interval_duration(start: datetime, end: Optional[datetime], now: datetime) -> timedelta:
    """Elapsed time from ``start`` to ``end``, or to ``now`` when there is no end."""
    return (end or now) - start


def entry_duration(entry: TimeEntry, now: datetime) -> timedelta:
    """Duration of a single entry, using ``now`` as the end of running entries."""
    return interval_duration(entry.time_interval.start, entry.time_interval.end, now)


def total_duration(entries: Iterable[TimeEntry], now: datetime) -> timedelta:
    """Sum of the durations of all entries."""
    total = timedelta(0)
    for entry in entries:
        total += entry_duration(entry, now)
    return total


def total_hours(entries: Iterable[TimeEntry], now: datetime) -> str:
    """Total duration as decimal hours, e.g. ``"1.500000"``."""
    return format_hours(total_duration(entries, now))


def total_formatted(entries: Iterable[TimeEntry], now: datetime) -> str:
    """Total duration as ``H:MM:SS``."""
    return format_duration(total_duration(entries, now))
