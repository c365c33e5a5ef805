"""
TaskView UI — Reflex state, components and pages.

Public API:
    State:  ThemeState, TaskListState
    Pages:  task_list_page
"""

from taskview.ui.pages import task_list_page
from taskview.ui.state import TaskListState, ThemeState

__all__ = [
    "TaskListState",
    "ThemeState",
    "task_list_page",
]
