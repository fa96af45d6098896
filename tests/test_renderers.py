import sys
import os
import unittest

# Add the parent directory to sys.path to import the clockireport package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
import csv
import time
from datetime import datetime, timedelta, timezone
import json
from io import StringIO

from clockireport.errors import TemplateEvalError, TemplateSyntaxError, WriteError
from clockireport.reports.environment import RenderEnvironment
from clockireport.reports.renderers import (
    CSV_HEADERS, CSVRenderer, DurationFloatRenderer, DurationFormattedRenderer, JSONRenderer,
    MarkdownRenderer, QuietRenderer, TableRenderer, TemplateRenderer, colorize,
)
from clockireport.reports.time_entry import TimeEntry
from clockireport.utils.format_utils import TIME_FORMAT_FULL
from fixtures import at, fixed_environment, make_entry, sample_entries


class BrokenPipe:
    """Output stream whose reader went away."""

    def write(self, text):
        raise BrokenPipeError("broken pipe")

    def flush(self):
        pass


def render(renderer, entries):
    out = StringIO()
    renderer.render(entries, out)
    return out.getvalue()


class TestSimpleRenderers(unittest.TestCase):
    """JSON, quiet and duration-only output."""

    def setUp(self):
        self.env = fixed_environment()
        self.entries = sample_entries()

    def test_json_round_trip(self):
        output = render(JSONRenderer(self.env), self.entries)
        data = json.loads(output)
        self.assertEqual(len(data), 2)
        self.assertEqual([d["id"] for d in data], ["a", "b"])
        self.assertEqual([TimeEntry.from_dict(d) for d in data], self.entries)
        self.assertIsNone(data[1]["timeInterval"]["end"])
        self.assertIsNone(data[1]["project"])

    def test_quiet(self):
        self.assertEqual(render(QuietRenderer(self.env), self.entries), "a\nb\n")

    def test_duration_only(self):
        self.assertEqual(render(DurationFormattedRenderer(self.env), self.entries), "0:45:00\n")
        self.assertEqual(render(DurationFloatRenderer(self.env), self.entries), "0.750000\n")

    def test_empty_collection(self):
        self.assertEqual(render(JSONRenderer(self.env), []), "[]\n")
        self.assertEqual(render(QuietRenderer(self.env), []), "")
        self.assertEqual(render(DurationFormattedRenderer(self.env), []), "0:00:00\n")
        self.assertEqual(render(DurationFloatRenderer(self.env), []), "0.000000\n")
        self.assertEqual(render(TemplateRenderer(self.env, "{{ id }}"), []), "")
        self.assertEqual(render(MarkdownRenderer(self.env), []), "")

    def test_write_error(self):
        for renderer in [JSONRenderer(self.env), QuietRenderer(self.env), CSVRenderer(self.env),
                         TableRenderer(self.env), DurationFloatRenderer(self.env),
                         TemplateRenderer(self.env, "{{ id }}")]:
            with self.assertRaises(WriteError):
                renderer.render(self.entries, BrokenPipe())

    def test_closed_stream(self):
        for renderer in [QuietRenderer(self.env), CSVRenderer(self.env), JSONRenderer(self.env)]:
            out = StringIO()
            out.close()
            with self.assertRaises(WriteError):
                renderer.render(self.entries, out)


class TestTableRenderer(unittest.TestCase):
    """Bordered table output."""

    def test_rows(self):
        output = render(TableRenderer(fixed_environment()), sample_entries())
        lines = output.splitlines()
        header = lines[1]
        for name in ["ID", "Start", "End", "Dur", "Project", "Description", "Tags"]:
            self.assertIn(name, header)
        self.assertNotIn("Task", header)
        self.assertIn("10:00:00", output)
        self.assertIn("10:30:00", output)
        self.assertIn("0:30:00", output)
        self.assertIn("Tag One (tag1), Tag Two (tag2)", output)
        # running entry ends "now"
        running = [line for line in lines if line.startswith("| b ")][0]
        self.assertIn("11:15:00", running)
        self.assertIn("0:15:00", running)
        self.assertNotIn("TOTAL", output)

    def test_empty_table_has_only_header(self):
        output = render(TableRenderer(fixed_environment()), [])
        rows = [line for line in output.splitlines() if line.startswith("|")]
        self.assertEqual(len(rows), 1)
        self.assertIn("Description", rows[0])

    def test_total_row(self):
        renderer = TableRenderer(fixed_environment(), show_total_duration=True)
        output = render(renderer, sample_entries())
        total = [line for line in output.splitlines() if "TOTAL" in line][0]
        cells = [c.strip() for c in total.strip("|").split("|")]
        self.assertEqual(cells, ["TOTAL", "", "", "0:45:00", "", "", ""])

    def test_show_tasks(self):
        renderer = TableRenderer(fixed_environment(), show_tasks=True)
        output = render(renderer, sample_entries())
        header = [c.strip() for c in output.splitlines()[1].strip("|").split("|")]
        self.assertEqual(header, ["ID", "Start", "End", "Dur", "Project", "Task", "Description", "Tags"])
        self.assertIn("Docs (t1)", output)

    def test_time_format(self):
        renderer = TableRenderer(fixed_environment(), time_format=TIME_FORMAT_FULL)
        output = render(renderer, sample_entries())
        self.assertIn("2023-01-01 10:00:00", output)

    def test_no_color_when_not_a_terminal(self):
        output = render(TableRenderer(fixed_environment(is_terminal=False)), sample_entries())
        self.assertNotIn("\x1b[", output)
        self.assertIn("Project One", output)

    def test_color_on_terminal(self):
        output = render(TableRenderer(fixed_environment(is_terminal=True)), sample_entries())
        self.assertIn("\x1b[38;2;3;169;244mProject One\x1b[0m", output)

    def test_colorize_ignores_bad_colors(self):
        self.assertEqual(colorize("Name", ""), "Name")
        self.assertEqual(colorize("Name", "#nothex"), "Name")

    def test_width_limits_columns(self):
        description = "word " * 12
        entries = [make_entry("a", at(10), at(11), description=description.strip())]
        wrapped = render(TableRenderer(fixed_environment(width=60)), entries)
        self.assertNotIn(description.strip(), wrapped)
        unwrapped = render(TableRenderer(fixed_environment()), entries)
        self.assertIn(description.strip(), unwrapped)


class TestCSVRenderer(unittest.TestCase):
    """CSV output."""

    def test_header_only_for_empty(self):
        output = render(CSVRenderer(fixed_environment()), [])
        self.assertEqual(output, ",".join(CSV_HEADERS) + "\n")

    def test_rows(self):
        output = render(CSVRenderer(fixed_environment()), sample_entries())
        rows = list(csv.reader(StringIO(output)))
        self.assertEqual(rows[0], CSV_HEADERS)
        self.assertEqual(rows[1], [
            "a", "Write docs", "p1", "Project One", "t1", "Docs",
            "2023-01-01 10:00:00", "2023-01-01 10:30:00", "0:30:00",
            "u1", "jane@example.com", "Jane", "Tag One (tag1)", "Tag Two (tag2)",
        ])
        # missing associations stay as empty fields, running entries have no end
        self.assertEqual(rows[2], [
            "b", "Review", "", "", "", "",
            "2023-01-01 11:00:00", "", "0:15:00", "", "", "",
        ])

    def test_fixed_column_count(self):
        output = render(CSVRenderer(fixed_environment()), sample_entries())
        rows = list(csv.reader(StringIO(output)))[1:]
        for row, entry in zip(rows, sample_entries()):
            self.assertEqual(len(row), 12 + len(entry.tags))


class TestTemplateRenderer(unittest.TestCase):
    """User supplied and markdown templates."""

    def setUp(self):
        self.env = fixed_environment()

    def test_first_and_last_single_entry(self):
        renderer = TemplateRenderer(self.env, "{{ id }} {{ first }} {{ last }}")
        output = render(renderer, [make_entry("a", at(10), at(11))])
        self.assertEqual(output, "a True True\n")

    def test_first_and_last_three_entries(self):
        entries = [make_entry(i, at(10), at(11)) for i in ["a", "b", "c"]]
        renderer = TemplateRenderer(self.env, "{{ id }} {{ first }} {{ last }}")
        self.assertEqual(render(renderer, entries), "a True False\nb False False\nc False True\n")

    def test_capitalized_first_and_last(self):
        renderer = TemplateRenderer(self.env, "{{ id }} {{ First }} {{ Last }}")
        self.assertEqual(render(renderer, [make_entry("a", at(10), at(11))]), "a True True\n")
        entries = [make_entry(i, at(10), at(11)) for i in ["a", "b", "c"]]
        template = "{% if First %}[{% endif %}{{ id }}{% if not Last %},{% else %}]{% endif %}"
        self.assertEqual(render(TemplateRenderer(self.env, template), entries), "[a,\nb,\nc]\n")

    def test_entry_fields_and_filters(self):
        template = ("{{ description }}|{{ project.name }}|{{ time_interval | duration }}|"
                    "{{ time_interval.start | format_time }}|{{ tags | format_tags }}")
        output = render(TemplateRenderer(self.env, template), sample_entries()[:1])
        self.assertEqual(output, "Write docs|Project One|0:30:00|10:00:00|Tag One (tag1), Tag Two (tag2)\n")

    def test_syntax_error_renders_nothing(self):
        out = StringIO()
        with self.assertRaises(TemplateSyntaxError):
            TemplateRenderer(self.env, "{{ id ").render(sample_entries(), out)
        self.assertEqual(out.getvalue(), "")

    def test_eval_error_keeps_partial_output(self):
        entries = [make_entry(i, at(10), at(11)) for i in ["a", "b", "c"]]
        template = "{% if last %}{{ unknown_field }}{% else %}{{ id }}{% endif %}"
        out = StringIO()
        with self.assertRaises(TemplateEvalError) as ctx:
            TemplateRenderer(self.env, template).render(entries, out)
        self.assertEqual(ctx.exception.entry_id, "c")
        self.assertEqual(out.getvalue(), "a\nb\n")

    def test_markdown(self):
        output = render(MarkdownRenderer(self.env), sample_entries())
        blocks = output.split("## _Time Entry_: ")
        self.assertEqual(len(blocks), 3)
        self.assertTrue(blocks[1].startswith("a\n"))
        self.assertIn("**0:30:00** | 2023-01-01 10:00:00 - 2023-01-01 10:30:00", blocks[1])
        self.assertIn("**Project One** - Client One", blocks[1])
        self.assertIn("Tag One (tag1), Tag Two (tag2)", blocks[1])
        self.assertIn("Jane <jane@example.com>", blocks[1])
        self.assertIn("Start Time: _2023-01-01 11:00:00_ (running)", blocks[2])
        self.assertIn("No Project", blocks[2])
        self.assertTrue(blocks[1].endswith("\n\n"))
        self.assertTrue(output.endswith("\n\n"))

class TestLocalTimezone(unittest.TestCase):
    """Timestamps follow the local zone's daylight saving rules for each entry."""

    def setUp(self):
        if not hasattr(time, "tzset"):
            self.skipTest("time.tzset is not available on this platform")
        self.saved_tz = os.environ.get("TZ")
        os.environ["TZ"] = "Europe/Berlin"
        time.tzset()
        self.addCleanup(self.restore_tz)
        if time.timezone != -3600:
            self.skipTest("Europe/Berlin zone data is not installed")

    def restore_tz(self):
        if self.saved_tz is None:
            os.environ.pop("TZ", None)
        else:
            os.environ["TZ"] = self.saved_tz
        time.tzset()

    def entries(self):
        winter = datetime(2026, 1, 15, 10, tzinfo=timezone.utc)
        summer = datetime(2026, 7, 15, 10, tzinfo=timezone.utc)
        return [
            make_entry("winter", winter, winter + timedelta(hours=1)),
            make_entry("summer", summer, summer + timedelta(hours=1)),
        ]

    def test_csv_uses_offset_of_each_entry(self):
        env = RenderEnvironment.detect(StringIO())
        rows = list(csv.reader(StringIO(render(CSVRenderer(env), self.entries()))))
        self.assertEqual(rows[1][6:8], ["2026-01-15 11:00:00", "2026-01-15 12:00:00"])
        self.assertEqual(rows[2][6:8], ["2026-07-15 12:00:00", "2026-07-15 13:00:00"])

    def test_table_and_template_use_offset_of_each_entry(self):
        env = RenderEnvironment.detect(StringIO())
        lines = render(TableRenderer(env), self.entries()).splitlines()
        winter = [line for line in lines if line.startswith("| winter ")][0]
        summer = [line for line in lines if line.startswith("| summer ")][0]
        self.assertIn("11:00:00", winter)
        self.assertIn("12:00:00", summer)

        template = "{{ time_interval.start | format_datetime }}"
        self.assertEqual(render(TemplateRenderer(env, template), self.entries()),
                         "2026-01-15 11:00:00\n2026-07-15 12:00:00\n")



if __name__ == "__main__":
    unittest.main()
