"""
TaskView UI — Reflex State for the task-list view.

Provides:
- ThemeState: application-level light/dark flag owned by the root state
- TaskListState: loader tri-state, search term, current page and the
  derived values the renderer binds to

Derived values are computed vars over a TaskListSession rebuilt from the
plain fields, so they always equal a recomputation from scratch. The load
runs as a background event so unmount and user input are not queued
behind the request.
"""

from __future__ import annotations

import logging
from typing import Any

import reflex as rx

from taskview.engine.config import get_config
from taskview.tasks.loader import TaskLoader
from taskview.tasks.session import TaskListSession, is_current_activation

logger = logging.getLogger("taskview.ui.state")


def _view(
    rows: list[dict[str, Any]],
    search_term: str,
    current_page: int,
    loading: bool = False,
    error: str = "",
) -> TaskListSession:
    """Session over the state's plain fields, sized from the config."""
    pagination = get_config().pagination
    return TaskListSession.restore(
        rows,
        search_term=search_term,
        current_page=current_page,
        loading=loading,
        error=error,
        page_size=pagination.page_size,
        page_window_size=pagination.page_window,
    )


class ThemeState(rx.State):
    """
    Root-owned theme flag.

    Starts light (or whatever ui.theme says) and is flipped only by
    toggle_theme. Sub-states read dark_mode; they never write it.
    """

    dark_mode: bool = False
    _theme_initialized: bool = False

    def init_theme(self) -> None:
        """Apply the configured default once per client session."""
        if self._theme_initialized:
            return
        self._theme_initialized = True
        self.dark_mode = get_config().ui.theme == "dark"

    def toggle_theme(self) -> None:
        self.dark_mode = not self.dark_mode

    @rx.var
    def theme_name(self) -> str:
        return "dark" if self.dark_mode else "light"


class TaskListState(ThemeState):
    """
    State behind the task list.

    Manages:
    - One retrieval per activation (mount / retry), pending → ready | failed
    - Search term (resets the page to 1 on every edit)
    - Current page, always clamped to [1, max(total_pages, 1)]

    Fields stay plain so Reflex can sync them; every transition goes through
    a TaskListSession rebuilt from them.
    """

    # Loader
    tasks: list[dict[str, Any]] = []
    is_loading: bool = True
    error_message: str = ""

    # Filter / Paginator
    search_term: str = ""
    current_page: int = 1

    # Backend-only bookkeeping
    _activation: int = 0
    _mounted: bool = False

    def _session(self) -> TaskListSession:
        return _view(self.tasks, self.search_term, self.current_page, self.is_loading, self.error_message)

    def _store(self, session: TaskListSession) -> None:
        snapshot = session.snapshot()
        self.tasks = snapshot["tasks"]
        self.is_loading = snapshot["is_loading"]
        self.error_message = snapshot["error_message"]
        self.search_term = snapshot["search_term"]
        self.current_page = snapshot["current_page"]

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------

    def activate(self):
        """on_mount: fresh search/page state, then one load."""
        self._mounted = True
        self.search_term = ""
        self.current_page = 1
        return TaskListState.load_tasks

    def deactivate(self) -> None:
        """on_unmount: results still in flight are discarded."""
        self._mounted = False

    @rx.event(background=True)
    async def load_tasks(self):
        """Fetch the full collection once. Never raises into the UI."""
        async with self:
            self._activation += 1
            token = self._activation
            self.is_loading = True
            self.error_message = ""

        # The state lock is released while the request is outstanding
        result = await TaskLoader.from_config(get_config()).load()

        async with self:
            if not is_current_activation(token, self._activation, torn_down=not self._mounted):
                logger.debug(f"Dropping result of activation {token}")
                return
            session = _view(self.tasks, self.search_term, self.current_page)
            session.apply_result(result)
            self._store(session)

    def retry(self):
        """Try Again: restart the loader from pending."""
        return TaskListState.load_tasks

    # -------------------------------------------------------------------
    # User actions
    # -------------------------------------------------------------------

    def set_search_term(self, text: str) -> None:
        session = self._session()
        session.set_search_term(text)
        self._store(session)

    def set_page(self, page: int) -> None:
        session = self._session()
        session.set_page(int(page))
        self._store(session)

    def next_page(self) -> None:
        session = self._session()
        session.next_page()
        self._store(session)

    def previous_page(self) -> None:
        session = self._session()
        session.previous_page()
        self._store(session)

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------

    @rx.var
    def filtered_count(self) -> int:
        return len(_view(self.tasks, self.search_term, self.current_page).filtered)

    @rx.var
    def page_count(self) -> int:
        return _view(self.tasks, self.search_term, self.current_page).total_pages

    @rx.var
    def visible_tasks(self) -> list[dict[str, Any]]:
        session = _view(self.tasks, self.search_term, self.current_page)
        return [task.to_row() for task in session.visible]

    @rx.var
    def page_numbers(self) -> list[int]:
        return _view(self.tasks, self.search_term, self.current_page).page_numbers

    @rx.var
    def has_error(self) -> bool:
        return bool(self.error_message)

    @rx.var
    def is_empty(self) -> bool:
        """Loaded without error but nothing to show. Neutral, not a failure."""
        session = _view(self.tasks, self.search_term, self.current_page, self.is_loading, self.error_message)
        return session.is_empty

    @rx.var
    def summary(self) -> str:
        return _view(self.tasks, self.search_term, self.current_page).summary()
