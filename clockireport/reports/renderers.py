"""Renderers turning a list of time entries into one output format each."""
import csv
import json
import logging
from typing import List, Optional, TextIO

import jinja2
from rich.color import ColorParseError, ColorSystem
from rich.style import Style
from tabulate import tabulate

from .duration import entry_duration, interval_duration, total_formatted, total_hours
from .environment import RenderEnvironment
from .time_entry import TimeEntry, Project, Task, User
from ..errors import TemplateEvalError, TemplateSyntaxError, WriteError
from ..utils.format_utils import (
    TIME_FORMAT_FULL, TIME_FORMAT_SIMPLE, format_duration, format_local, tags_to_strings,
)

logger = logging.getLogger(__name__)

TABLE_HEADERS = ["ID", "Start", "End", "Dur", "Project", "Description", "Tags"]

CSV_HEADERS = [
    "id",
    "description",
    "project.id",
    "project.name",
    "task.id",
    "task.name",
    "start",
    "end",
    "duration",
    "user.id",
    "user.email",
    "user.name",
    "tags...",
]

MARKDOWN_TEMPLATE = "time_entry.md.j2"


class Renderer:
    """Base class for all output formats.

    Subclasses implement ``_render``; ``render`` adds flushing and turns
    failing writes into :class:`WriteError`.
    """

    def __init__(self, environment: RenderEnvironment):
        self.environment = environment

    def render(self, entries: List[TimeEntry], out: TextIO) -> None:
        """Write ``entries`` to ``out``.

        Raises:
            WriteError: If the stream rejects a write
        """
        logger.debug("rendering %d entries with %s", len(entries), type(self).__name__)
        self._render(entries, out)
        try:
            out.flush()
        except (OSError, ValueError) as e:
            raise WriteError(f"failed to flush output: {e}") from e

    def _render(self, entries: List[TimeEntry], out: TextIO) -> None:
        raise NotImplementedError

    @staticmethod
    def _write(out: TextIO, text: str) -> None:
        try:
            out.write(text)
        except (OSError, ValueError) as e:
            raise WriteError(f"failed to write output: {e}") from e


class JSONRenderer(Renderer):
    """The whole collection as one JSON array."""

    def _render(self, entries, out):
        self._write(out, json.dumps([e.to_dict() for e in entries]) + "\n")


class QuietRenderer(Renderer):
    """Only the IDs, one per line."""

    def _render(self, entries, out):
        for entry in entries:
            self._write(out, f"{entry.id}\n")


class DurationFloatRenderer(Renderer):
    """Total duration in decimal hours."""

    def _render(self, entries, out):
        self._write(out, total_hours(entries, self.environment.now) + "\n")


class DurationFormattedRenderer(Renderer):
    """Total duration as H:MM:SS."""

    def _render(self, entries, out):
        self._write(out, total_formatted(entries, self.environment.now) + "\n")


def colorize(text: str, hex_color: str) -> str:
    """Wrap ``text`` in a 24-bit ANSI color; unparsable colors leave it as is."""
    if not hex_color or not text:
        return text
    try:
        style = Style(color=hex_color)
    except ColorParseError:
        return text
    return style.render(text, color_system=ColorSystem.TRUECOLOR)


class TableRenderer(Renderer):
    """Bordered table with one row per entry and an optional TOTAL footer."""

    def __init__(self, environment: RenderEnvironment, time_format: Optional[str] = None,
                 show_tasks: bool = False, show_total_duration: bool = False):
        super().__init__(environment)
        self.time_format = time_format or TIME_FORMAT_SIMPLE
        self.show_tasks = show_tasks
        self.show_total_duration = show_total_duration

    def headers(self) -> List[str]:
        headers = list(TABLE_HEADERS)
        if self.show_tasks:
            headers.insert(5, "Task")
        return headers

    def _project_cell(self, project: Optional[Project]) -> str:
        if project is None:
            return ""
        if self.environment.is_terminal:
            return colorize(project.name, project.color)
        return project.name

    def to_row(self, entry: TimeEntry) -> List[str]:
        env = self.environment
        end = entry.end or env.now
        row = [
            entry.id,
            format_local(entry.start, self.time_format, env.tz),
            format_local(end, self.time_format, env.tz),
            format_duration(entry_duration(entry, env.now)),
            self._project_cell(entry.project),
            entry.description,
            ", ".join(tags_to_strings(entry.tags)),
        ]
        if self.show_tasks:
            row.insert(5, f"{entry.task.name} ({entry.task.id})" if entry.task else "")
        return row

    def _render(self, entries, out):
        headers = self.headers()
        rows = [self.to_row(e) for e in entries]

        if self.show_total_duration:
            total = [""] * len(headers)
            total[0] = "TOTAL"
            total[3] = total_formatted(entries, self.environment.now)
            rows.append(total)

        kwargs = {}
        width = self.environment.width
        if rows and width and width // 3 > 0:
            kwargs["maxcolwidths"] = width // 3

        table = tabulate(rows, headers=headers, tablefmt="grid", disable_numparse=True, **kwargs)
        self._write(out, table + "\n")


class CSVRenderer(Renderer):
    """CSV with a fixed header; tags trail as one column each."""

    def to_row(self, entry: TimeEntry) -> List[str]:
        env = self.environment
        project = entry.project or Project()
        task = entry.task or Task()
        user = entry.user or User()
        end = entry.end
        return [
            entry.id,
            entry.description,
            project.id,
            project.name,
            task.id,
            task.name,
            format_local(entry.start, TIME_FORMAT_FULL, env.tz),
            format_local(end, TIME_FORMAT_FULL, env.tz) if end else "",
            format_duration(entry_duration(entry, env.now)),
            user.id,
            user.email,
            user.name,
        ] + tags_to_strings(entry.tags)

    def _render(self, entries, out):
        writer = csv.writer(out, lineterminator="\n")
        try:
            writer.writerow(CSV_HEADERS)
            for entry in entries:
                writer.writerow(self.to_row(entry))
        except (OSError, ValueError) as e:
            raise WriteError(f"failed to write output: {e}") from e


def template_environment(environment: RenderEnvironment,
                         time_format: Optional[str] = None) -> jinja2.Environment:
    """Build the Jinja2 environment shared by the markdown and user templates.

    Filters:
        format_datetime: full local date and time
        format_time: local time using ``time_format``
        duration: H:MM:SS of a time interval or entry, running ones against now
        format_tags: tags as ``name (id)`` joined by commas
    """
    layout = time_format or TIME_FORMAT_SIMPLE

    def _format_datetime(value):
        return format_local(value, TIME_FORMAT_FULL, environment.tz) if value else ""

    def _format_time(value):
        return format_local(value, layout, environment.tz) if value else ""

    def _duration(value):
        interval = getattr(value, "time_interval", value)
        return format_duration(interval_duration(interval.start, interval.end, environment.now))

    def _format_tags(tags):
        return ", ".join(tags_to_strings(tags))

    env = jinja2.Environment(
        loader=jinja2.PackageLoader("clockireport.reports", "resources"),
        undefined=jinja2.StrictUndefined,
        autoescape=False,
    )
    env.filters.update(
        format_datetime=_format_datetime,
        format_time=_format_time,
        duration=_duration,
        format_tags=_format_tags,
    )
    return env


class TemplateRenderer(Renderer):
    """Renders every entry through a Jinja2 template.

    Besides the entry attributes the template sees ``First`` and ``Last``,
    marking the first and the last entry of the report; ``first`` and
    ``last`` are accepted as aliases.
    """

    def __init__(self, environment: RenderEnvironment, template: str,
                 time_format: Optional[str] = None):
        super().__init__(environment)
        self.template = template
        self.time_format = time_format

    def load_template(self, env: jinja2.Environment) -> jinja2.Template:
        try:
            return env.from_string(self.template)
        except jinja2.TemplateSyntaxError as e:
            raise TemplateSyntaxError(f"invalid template: {e}") from e

    def _render(self, entries, out):
        template = self.load_template(template_environment(self.environment, self.time_format))

        last = len(entries) - 1
        for i, entry in enumerate(entries):
            view = entry.template_view()
            view["First"] = view["first"] = i == 0
            view["Last"] = view["last"] = i == last
            try:
                text = template.render(view)
            except (jinja2.TemplateError, TypeError, ValueError, AttributeError) as e:
                raise TemplateEvalError(
                    f"failed to render time entry {entry.id}: {e}", entry.id
                ) from e
            self._write(out, text + "\n")


class MarkdownRenderer(TemplateRenderer):
    """One markdown block per entry from the bundled template."""

    def __init__(self, environment: RenderEnvironment, time_format: Optional[str] = None):
        super().__init__(environment, "", time_format)

    def load_template(self, env):
        return env.get_template(MARKDOWN_TEMPLATE)
