"""
TaskListSession — derived state of one mounted task-list view.

Owns the loader result, the search term and the current page. Everything
the renderer needs (filtered tasks, visible page, page count, button
window) is recomputed from scratch on access.

Activations are numbered. A result is applied only when it belongs to the
newest activation of a session that has not been torn down; anything else
is discarded.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from taskview.tasks.filtering import filter_tasks
from taskview.tasks.loader import LoadResult, LoadStatus, TaskLoader
from taskview.tasks.models import Task, tasks_from_rows
from taskview.tasks.pagination import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_PAGE_WINDOW,
    Page,
    clamp_page,
    page_window,
    paginate,
    total_pages,
)

logger = logging.getLogger("taskview.tasks.session")


def summary_text(shown: int, matching: int) -> str:
    return f"Showing {shown} of {matching} tasks"


def is_current_activation(token: int, current: int, torn_down: bool = False) -> bool:
    """Whether a load started as ``token`` may still be applied."""
    return not torn_down and token == current


class TaskListSession:
    """Loader → Filter → Paginator for a single view instance."""

    def __init__(
        self,
        page_size: int = DEFAULT_PAGE_SIZE,
        page_window_size: int = DEFAULT_PAGE_WINDOW,
    ):
        if page_size < 1:
            raise ValueError(f"page_size must be >= 1, got {page_size}")
        self.page_size = page_size
        self.page_window_size = page_window_size

        self._result: LoadResult = LoadResult.pending()
        self._activation = 0
        self._torn_down = False

        self.search_term: str = ""
        self.current_page: int = 1

    @classmethod
    def restore(
        cls,
        rows: List[Dict[str, Any]],
        *,
        search_term: str = "",
        current_page: int = 1,
        loading: bool = False,
        error: str = "",
        page_size: int = DEFAULT_PAGE_SIZE,
        page_window_size: int = DEFAULT_PAGE_WINDOW,
    ) -> "TaskListSession":
        """
        Rebuild a session from flat, serializable fields.

        Used by the Reflex state, which can only hold plain values between
        events: ``rows`` are wire-format task dicts, a non-empty ``error``
        means failed, ``loading`` means pending.
        """
        session = cls(page_size=page_size, page_window_size=page_window_size)
        if loading:
            session._result = LoadResult.pending()
        elif error:
            session._result = LoadResult.failed(error)
        else:
            session._result = LoadResult.ready(tasks_from_rows(rows))
        session.search_term = search_term
        session.current_page = current_page
        return session

    def snapshot(self) -> Dict[str, Any]:
        """Flat fields for ``restore``; keys match the Reflex state vars."""
        return {
            "tasks": [task.to_row() for task in self._result.tasks],
            "is_loading": self.is_loading,
            "error_message": self.error or "",
            "search_term": self.search_term,
            "current_page": self.current_page,
        }

    # -------------------------------------------------------------------
    # Loader lifecycle
    # -------------------------------------------------------------------

    @property
    def status(self) -> LoadStatus:
        return self._result.status

    @property
    def result(self) -> LoadResult:
        return self._result

    @property
    def tasks(self) -> List[Task]:
        return list(self._result.tasks)

    @property
    def error(self) -> Optional[str]:
        return self._result.error

    @property
    def is_loading(self) -> bool:
        return self._result.is_pending

    @property
    def torn_down(self) -> bool:
        return self._torn_down

    def begin_load(self) -> int:
        """Enter pending for a new activation and return its token."""
        self._activation += 1
        self._result = LoadResult.pending()
        return self._activation

    def finish_load(self, token: int, result: LoadResult) -> bool:
        """Apply ``result`` if ``token`` is still current. Returns whether applied."""
        if not is_current_activation(token, self._activation, self._torn_down):
            logger.debug(
                f"Discarding load result (activation {token}, current {self._activation}, "
                f"torn down {self._torn_down})"
            )
            return False
        self.apply_result(result)
        return True

    def apply_result(self, result: LoadResult) -> None:
        """Replace the collection with a settled result and re-clamp the page."""
        if result.is_pending:
            raise ValueError("apply_result needs a ready or failed result")
        self._result = result
        self.current_page = clamp_page(self.current_page, self.total_pages)

    async def load(self, loader: TaskLoader) -> LoadResult:
        """Run one activation against ``loader``."""
        token = self.begin_load()
        result = await loader.load()
        self.finish_load(token, result)
        return self._result

    async def retry(self, loader: TaskLoader) -> LoadResult:
        """Manual retry: a fresh activation starting from pending."""
        return await self.load(loader)

    def teardown(self) -> None:
        self._torn_down = True

    # -------------------------------------------------------------------
    # User actions
    # -------------------------------------------------------------------

    def set_search_term(self, text: str) -> None:
        self.search_term = text or ""
        self.current_page = 1

    def set_page(self, page: int) -> int:
        self.current_page = clamp_page(page, self.total_pages)
        return self.current_page

    def next_page(self) -> int:
        return self.set_page(self.current_page + 1)

    def previous_page(self) -> int:
        return self.set_page(self.current_page - 1)

    # -------------------------------------------------------------------
    # Derived state
    # -------------------------------------------------------------------

    @property
    def filtered(self) -> List[Task]:
        return filter_tasks(self._result.tasks, self.search_term)

    @property
    def total_pages(self) -> int:
        return total_pages(len(self.filtered), self.page_size)

    @property
    def page(self) -> Page[Task]:
        return paginate(self.filtered, self.current_page, self.page_size)

    @property
    def visible(self) -> List[Task]:
        return self.page.items

    @property
    def page_numbers(self) -> List[int]:
        return page_window(self.current_page, self.total_pages, self.page_window_size)

    @property
    def is_empty(self) -> bool:
        """Ready but nothing to show. Not an error."""
        return self._result.is_ready and not self.filtered

    def summary(self) -> str:
        return summary_text(len(self.visible), len(self.filtered))
