"""Shared time entry fixtures for the tests."""
from datetime import datetime, timezone

from clockireport.reports.environment import RenderEnvironment
from clockireport.reports.time_entry import TimeEntry, TimeInterval, Project, Task, User, Tag

NOW = datetime(2023, 1, 1, 11, 15, 0, tzinfo=timezone.utc)


def at(hour, minute=0, second=0):
    return datetime(2023, 1, 1, hour, minute, second, tzinfo=timezone.utc)


def fixed_environment(is_terminal=False, width=None):
    return RenderEnvironment(now=NOW, tz=timezone.utc, is_terminal=is_terminal, width=width)


def make_entry(id, start, end=None, **kwargs):
    return TimeEntry(id=id, time_interval=TimeInterval(start=start, end=end), **kwargs)


def sample_entries():
    """A closed entry with every association and a running one with none."""
    return [
        make_entry(
            "a", at(10), at(10, 30),
            description="Write docs",
            billable=True,
            project=Project(id="p1", name="Project One", color="#03a9f4",
                            client_id="c1", client_name="Client One"),
            task=Task(id="t1", name="Docs"),
            user=User(id="u1", email="jane@example.com", name="Jane"),
            tags=[Tag(id="tag1", name="Tag One"), Tag(id="tag2", name="Tag Two")],
            project_id="p1",
            task_id="t1",
            user_id="u1",
            workspace_id="w1",
        ),
        make_entry("b", at(11), None, description="Review"),
    ]
