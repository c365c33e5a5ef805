"""
TaskView core — task records, loader, filter, paginator and view session.

Pure Python: nothing here imports Reflex, so the engine can be driven from
the CLI and tests as well as from the UI state.
"""

from taskview.tasks.filtering import filter_tasks  # noqa: F401
from taskview.tasks.loader import LoadResult, LoadStatus, TaskLoader  # noqa: F401
from taskview.tasks.models import Task, parse_tasks  # noqa: F401
from taskview.tasks.pagination import Page, paginate, page_window, total_pages  # noqa: F401
from taskview.tasks.session import TaskListSession  # noqa: F401

__all__ = [
    "filter_tasks",
    "LoadResult",
    "LoadStatus",
    "TaskLoader",
    "Task",
    "parse_tasks",
    "Page",
    "paginate",
    "page_window",
    "total_pages",
    "TaskListSession",
]
