"""Picks the renderer for a set of report options."""
import logging
from typing import List, Optional, TextIO

from .environment import RenderEnvironment
from .options import ReportOptions
from .renderers import (
    Renderer, CSVRenderer, DurationFloatRenderer, DurationFormattedRenderer, JSONRenderer,
    MarkdownRenderer, QuietRenderer, TableRenderer, TemplateRenderer,
)
from .time_entry import TimeEntry

logger = logging.getLogger(__name__)


def select_renderer(options: ReportOptions, environment: RenderEnvironment) -> Renderer:
    """Return the renderer for the selected output format.

    At most one output format should be set (see :meth:`ReportOptions.check`);
    if several are, the first match in the order below wins. Without any the
    report is printed as a table.

    Args:
        options: Validated report options
        environment: Environment the report is rendered against

    Returns:
        Renderer instance
    """
    if options.format:
        renderer = TemplateRenderer(environment, options.format, options.time_format)
    elif options.quiet:
        renderer = QuietRenderer(environment)
    elif options.duration_float:
        renderer = DurationFloatRenderer(environment)
    elif options.duration_formatted:
        renderer = DurationFormattedRenderer(environment)
    elif options.json:
        renderer = JSONRenderer(environment)
    elif options.csv:
        renderer = CSVRenderer(environment)
    elif options.markdown:
        renderer = MarkdownRenderer(environment, options.time_format)
    else:
        renderer = TableRenderer(
            environment,
            time_format=options.time_format,
            show_tasks=options.show_tasks,
            show_total_duration=options.show_total_duration,
        )
    logger.debug("selected %s", type(renderer).__name__)
    return renderer


def render_report(entries: List[TimeEntry], options: ReportOptions, out: TextIO,
                  environment: Optional[RenderEnvironment] = None) -> None:
    """Validate ``options`` and render ``entries`` to ``out``.

    Validation happens before anything is written. The environment is
    sampled from ``out`` when not given.

    Raises:
        ValidationError: If the options are an invalid combination
        ReportError: If rendering or writing fails
    """
    options.check()
    if environment is None:
        environment = RenderEnvironment.detect(out)
    select_renderer(options, environment).render(list(entries), out)
