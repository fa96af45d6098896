"""Main module for the clockiReport package."""
import argparse
import logging
import sys
from datetime import date
from typing import List, Optional, TextIO, Tuple

from .api.client import ClockifyClient
from .config import load_environment, get_setting, configure_logging
from .errors import ReportError, ValidationError
from .reports.dispatcher import render_report
from .reports.loader import load_entries, filter_entries
from .reports.options import ReportOptions
from .reports.time_entry import TimeEntry
from .utils.date_utils import MODES, parse_date, get_range
from .utils.file_utils import open_output
from .utils.format_utils import resolve_time_format

logger = logging.getLogger(__name__)


# --- CLI Logic ---
def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description="Print Clockify time entries as a table, CSV, JSON, Markdown or a custom template.",
        epilog="""
Examples:
    # Table of today's entries with a total row
  clockireport --with-total
    ---
    # This week's entries as CSV, including the date in start/end
  clockireport --mode week --csv
    ---
    # Only billable entries of a project in May, as hours
  clockireport --start 2025-05-01 --end 2025-05-31 --billable --project "Project One" --duration-float
    ---
    # Render a JSON export with a custom template
  clockireport --input entries.json --format '{{ id }}: {{ description }}{% if Last %} (last){% endif %}'
""",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        prog="clockireport"
    )
    parser.add_argument('-l', '--list', action='store_true', help='List user and workspaces with their IDs')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log debug information to stderr')

    source = parser.add_argument_group('entries')
    source.add_argument('--start', help='Start date (YYYY-MM-DD, default: today)')
    source.add_argument('--end', help='End date (YYYY-MM-DD, default: the start date)')
    source.add_argument('--mode', choices=MODES, help='Report the whole day, week, month or year containing --start')
    source.add_argument('--weekstart', type=int, choices=range(0, 7), default=0, help='Custom week start day: 0=Mon, 6=Sun (default: 0)')
    source.add_argument('--input', help='Read entries from a JSON export instead of the API ("-" for stdin)')
    source.add_argument('--description', help='Only entries whose description contains this text (API only)')

    filters = parser.add_argument_group('filters')
    filters.add_argument('--billable', action='store_true', help='Only billable entries')
    filters.add_argument('--not-billable', action='store_true', help='Only non-billable entries')
    filters.add_argument('--client', default='', help='Only entries of this client (ID or name, requires --project)')
    filters.add_argument('-p', '--project', default='', help='Only entries of this project (ID or name)')

    output = parser.add_argument_group('output')
    output.add_argument('-f', '--format', default='', help='Jinja2 template printed for each entry')
    output.add_argument('--json', action='store_true', help='Print as JSON')
    output.add_argument('--csv', action='store_true', help='Print as CSV')
    output.add_argument('-q', '--quiet', action='store_true', help='Only print the IDs')
    output.add_argument('--md', action='store_true', help='Print as Markdown blocks')
    output.add_argument('--duration-float', action='store_true', help='Only print the total duration in hours')
    output.add_argument('--duration-formatted', action='store_true', help='Only print the total duration as H:MM:SS')
    output.add_argument('--show-tasks', action='store_true', help='Add a Task column to the table')
    output.add_argument('--with-total', action='store_true', help='Add a TOTAL row to the table')
    output.add_argument('--time-format', help='Start/end layout: simple, full or a strftime pattern')
    output.add_argument('-o', '--output', help='Write the report to this file instead of stdout')
    output.add_argument('--overwrite', action='store_true', help='Overwrite the --output file instead of appending')
    return parser.parse_args(argv)


def build_options(args: argparse.Namespace) -> ReportOptions:
    """Map parsed arguments onto ReportOptions."""
    time_format = args.time_format or get_setting("CLOCKIREPORT_TIME_FORMAT")
    return ReportOptions(
        billable=args.billable,
        not_billable=args.not_billable,
        client=args.client,
        project=args.project,
        format=args.format,
        json=args.json,
        csv=args.csv,
        quiet=args.quiet,
        markdown=args.md,
        duration_float=args.duration_float,
        duration_formatted=args.duration_formatted,
        show_tasks=args.show_tasks,
        show_total_duration=args.with_total,
        time_format=resolve_time_format(time_format) if time_format else None,
    )


def resolve_dates(args: argparse.Namespace, today: Optional[date] = None) -> Tuple[date, date]:
    """Determine the reported date range from --start, --end and --mode."""
    today = today or date.today()
    start = parse_date(args.start) if args.start else today
    if args.mode:
        return get_range(args.mode, start, args.weekstart)
    end = parse_date(args.end) if args.end else start
    return start, end


def make_client() -> ClockifyClient:
    return ClockifyClient(
        get_setting("CLOCKIFY_API_KEY", required=True),
        get_setting("CLOCKIFY_WORKSPACE_ID", required=True),
        get_setting("CLOCKIFY_USER_ID", required=True),
    )


def fetch_entries(args: argparse.Namespace, stdin: TextIO) -> List[TimeEntry]:
    """Read entries from --input, or fetch them from the API sorted by start."""
    if args.input == '-':
        return load_entries(stdin)
    if args.input:
        with open(args.input, encoding='utf-8') as f:
            return load_entries(f)

    start_date, end_date = resolve_dates(args)
    logger.info("fetching entries from %s to %s", start_date, end_date)
    entries = make_client().get_time_entries(start_date, end_date, description=args.description)
    return sorted(entries, key=lambda e: e.start)


def list_user_and_workspaces(out: TextIO) -> None:
    """Print user information and workspaces."""
    user, workspaces = make_client().get_user_and_workspaces()

    print("User Info:", file=out)
    print(f"  Name: {user.get('name')}", file=out)
    print(f"  Email: {user.get('email')}", file=out)
    print(f"  ID: {user.get('id')}", file=out)

    print("\nWorkspaces:", file=out)
    for ws in workspaces:
        print(f"  Name: {ws.get('name')}, ID: {ws.get('id')}", file=out)


def run(argv: Optional[List[str]] = None, stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None, stdin: Optional[TextIO] = None) -> int:
    """Run the CLI and return its exit status.

    Returns:
        0 on success, 2 for invalid flag combinations, 1 for any other error
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    stdin = stdin or sys.stdin

    load_environment()
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.list:
            list_user_and_workspaces(stdout)
            return 0

        options = build_options(args)
        options.check()

        entries = filter_entries(fetch_entries(args, stdin), options)
        if args.output:
            with open_output(args.output, args.overwrite) as out:
                render_report(entries, options, out)
        else:
            render_report(entries, options, stdout)
    except ValidationError as e:
        print(f"Error: {e}", file=stderr)
        return 2
    except (ReportError, OSError) as e:
        print(f"Error: {e}", file=stderr)
        return 1
    return 0


def main() -> None:
    """Main entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
