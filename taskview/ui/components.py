"""
TaskView UI — Reflex components for the task-list view.

Pure presentation: every value comes from TaskListState / ThemeState and
every interaction is bound to one of their event handlers.
"""

import reflex as rx

from taskview.ui.state import TaskListState, ThemeState

PRIORITY_COLORS = {
    "high": "red",
    "critical": "red",
    "medium": "orange",
    "low": "green",
}


def themed(light: str, dark: str):
    """Pick a color from the root-owned theme flag."""
    return rx.cond(ThemeState.dark_mode, dark, light)


def header(title: str) -> rx.Component:
    """Title bar with the theme toggle."""
    return rx.hstack(
        rx.heading(title, size="6"),
        rx.spacer(),
        rx.button(
            rx.cond(ThemeState.dark_mode, rx.icon("sun", size=16), rx.icon("moon", size=16)),
            rx.cond(ThemeState.dark_mode, "Light mode", "Dark mode"),
            variant="ghost",
            size="2",
            on_click=ThemeState.toggle_theme,
        ),
        width="100%",
        align="center",
        padding="4",
        border_bottom=themed("1px solid var(--gray-5)", "1px solid var(--gray-8)"),
    )


def search_box() -> rx.Component:
    return rx.card(
        rx.input(
            placeholder="Search tasks...",
            value=TaskListState.search_term,
            on_change=TaskListState.set_search_term,
            width="100%",
            size="3",
        ),
        width="100%",
    )


def loading_panel() -> rx.Component:
    return rx.card(
        rx.vstack(
            rx.spinner(size="3"),
            rx.text("Loading tasks...", color="gray"),
            align="center",
            spacing="3",
            padding="6",
        ),
        width="100%",
    )


def error_panel() -> rx.Component:
    """Failure message plus a manual retry."""
    return rx.card(
        rx.vstack(
            rx.icon("triangle-alert", color="red", size=28),
            rx.text("Error: ", TaskListState.error_message, color="red"),
            rx.button("Try Again", on_click=TaskListState.retry, size="2"),
            align="center",
            spacing="3",
            padding="6",
        ),
        width="100%",
    )


def empty_panel() -> rx.Component:
    return rx.card(
        rx.vstack(
            rx.icon("inbox", color="gray", size=28),
            rx.cond(
                TaskListState.search_term != "",
                rx.text("No tasks match your search.", color="gray"),
                rx.text("No tasks yet.", color="gray"),
            ),
            align="center",
            spacing="2",
            padding="6",
        ),
        width="100%",
    )


def task_card(task: dict) -> rx.Component:
    """Render a single task."""
    return rx.card(
        rx.vstack(
            rx.hstack(
                rx.badge(task["priority"], color_scheme=_priority_color(task["priority"]), radius="full"),
                rx.spacer(),
                rx.text("Due: ", task["dueDate"], size="1", color="gray"),
                width="100%",
                align="center",
            ),
            rx.heading(task["title"], size="4"),
            rx.text(task["description"], size="2", color="gray"),
            rx.text("Status: ", task["status"], size="2", weight="medium", color="green"),
            spacing="3",
            align="start",
            width="100%",
        ),
        key=task["id"],
        width="100%",
    )


def _priority_color(priority) -> rx.Var:
    """Badge color for a priority value (a Var inside rx.foreach)."""
    return rx.match(
        priority.to(str).lower(),
        *[(name, color) for name, color in PRIORITY_COLORS.items()],
        "blue",
    )


def task_grid() -> rx.Component:
    return rx.grid(
        rx.foreach(TaskListState.visible_tasks, task_card),
        columns=rx.breakpoints(initial="1", sm="2", lg="3"),
        spacing="5",
        width="100%",
    )


def pagination_bar() -> rx.Component:
    """Previous / page window / Next. Hidden when there is a single page."""
    return rx.cond(
        TaskListState.page_count > 1,
        rx.hstack(
            rx.button(
                "Previous",
                variant="soft",
                size="1",
                on_click=TaskListState.previous_page,
                disabled=TaskListState.current_page <= 1,
            ),
            rx.hstack(
                rx.foreach(TaskListState.page_numbers, _page_button),
                spacing="1",
            ),
            rx.button(
                "Next",
                variant="soft",
                size="1",
                on_click=TaskListState.next_page,
                disabled=TaskListState.current_page >= TaskListState.page_count,
            ),
            spacing="2",
            justify="center",
            width="100%",
        ),
        rx.fragment(),
    )


def _page_button(number: rx.Var) -> rx.Component:
    return rx.button(
        number,
        variant=rx.cond(TaskListState.current_page == number, "solid", "soft"),
        size="1",
        width="2.5em",
        on_click=TaskListState.set_page(number),
    )


def summary_line() -> rx.Component:
    return rx.text(TaskListState.summary, size="2", color="gray", text_align="center", width="100%")


def task_list_view() -> rx.Component:
    """Loading indicator, error panel, or search + grid + pagination."""
    return rx.cond(
        TaskListState.is_loading,
        loading_panel(),
        rx.cond(
            TaskListState.has_error,
            error_panel(),
            rx.vstack(
                search_box(),
                rx.cond(TaskListState.is_empty, empty_panel(), task_grid()),
                pagination_bar(),
                summary_line(),
                spacing="5",
                width="100%",
            ),
        ),
    )
