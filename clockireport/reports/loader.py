"""Loading time entries from JSON exports and filtering them by options."""
import json
import logging
from typing import List, TextIO

from .options import ReportOptions
from .time_entry import TimeEntry
from ..errors import EntryLoadError

logger = logging.getLogger(__name__)


def load_entries(stream: TextIO) -> List[TimeEntry]:
    """Read time entries from a JSON array in the Clockify API shape.

    Args:
        stream: File-like object holding the JSON; empty input means no entries

    Returns:
        Parsed entries in the order they appear

    Raises:
        EntryLoadError: If the JSON is malformed or an entry is invalid
    """
    payload = stream.read()
    if not payload.strip():
        return []
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise EntryLoadError(f"invalid JSON: {e}") from e
    if not isinstance(data, list):
        raise EntryLoadError("expected a JSON array of time entries")

    entries = []
    for idx, raw in enumerate(data):
        try:
            entries.append(TimeEntry.from_dict(raw))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise EntryLoadError(f"invalid time entry at position {idx}: {e}") from e
    logger.debug("loaded %d entries", len(entries))
    return entries


def _matches(value: str, ref_id: str, ref_name: str) -> bool:
    return value == ref_id or value.lower() == ref_name.lower()


def filter_entries(entries: List[TimeEntry], options: ReportOptions) -> List[TimeEntry]:
    """Keep only the entries matching the billable, project and client options.

    Projects and clients match either by ID or by case-insensitive name.
    """
    result = []
    for entry in entries:
        if options.billable and not entry.billable:
            continue
        if options.not_billable and entry.billable:
            continue
        project = entry.project
        if options.project:
            if project is None:
                if entry.project_id != options.project:
                    continue
            elif not _matches(options.project, project.id, project.name):
                continue
        if options.client:
            if project is None or not _matches(options.client, project.client_id, project.client_name):
                continue
        result.append(entry)
    logger.debug("%d of %d entries left after filtering", len(result), len(entries))
    return result
