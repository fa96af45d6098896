"""Report rendering for clockiReport."""

from .time_entry import TimeEntry, TimeInterval, Project, Task, User, Tag
from .options import ReportOptions, check
from .environment import RenderEnvironment
from .dispatcher import select_renderer, render_report

__all__ = [
    'TimeEntry', 'TimeInterval', 'Project', 'Task', 'User', 'Tag',
    'ReportOptions', 'check', 'RenderEnvironment', 'select_renderer', 'render_report',
]
