"""
TaskView UI — Task list page.

Routes: / and /tasks
"""

import reflex as rx

from taskview.engine.config import get_config
from taskview.ui.components import header, task_list_view, themed
from taskview.ui.state import TaskListState, ThemeState


def task_list_page() -> rx.Component:
    """Task list page — fetch once on mount, then search and page locally."""
    config = get_config()
    return rx.box(
        header(config.ui.title),
        rx.container(
            rx.vstack(
                rx.heading("Tasks", size="5"),
                task_list_view(),
                spacing="5",
                width="100%",
                padding_y="6",
            ),
            size="4",
        ),
        min_height="100vh",
        background=themed("var(--gray-2)", "var(--gray-12)"),
        color=themed("var(--gray-12)", "var(--gray-1)"),
        on_mount=[ThemeState.init_theme, TaskListState.activate],
        on_unmount=TaskListState.deactivate,
    )
