"""Utility modules for clockiReport."""

from .date_utils import iso_datetime, parse_date, get_range
from .file_utils import open_output
from .format_utils import (
    TIME_FORMAT_SIMPLE, TIME_FORMAT_FULL, format_duration, format_hours,
    format_local, resolve_time_format, tags_to_strings,
)

__all__ = [
    'iso_datetime', 'parse_date', 'get_range', 'open_output',
    'TIME_FORMAT_SIMPLE', 'TIME_FORMAT_FULL', 'format_duration', 'format_hours',
    'format_local', 'resolve_time_format', 'tags_to_strings',
]
