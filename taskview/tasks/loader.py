"""
Task Loader — one asynchronous retrieval of the full task collection.

Pipeline (per activation):
    1. GET {base_url}{tasks_path} via httpx.AsyncClient, no query parameters
    2. Non-2xx status → TaskResponseError
    3. Transport failure, timeout, redirect loop or bad encoding → TaskTransportError
    4. Decode JSON and validate records → TaskPayloadError on bad bodies
    5. Log the outcome (stdlib logger + structured loader/execution entry)

``load()`` is the boundary: every TaskFetchError is turned into
``LoadResult.failed(reason)`` there. No retry, polling or caching happens
here; a manual retry is simply another ``load()`` call.
"""

from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from typing import Any, Optional, Tuple

import httpx

from taskview.engine.config import TaskViewConfig
from taskview.engine.errors import (
    TaskFetchError,
    TaskPayloadError,
    TaskResponseError,
    TaskTransportError,
)
from taskview.engine.logging import log, log_fetch_event, log_fetch_performance
from taskview.tasks.models import Task, parse_tasks

logger = logging.getLogger("taskview.tasks.loader")

FETCH_FAILED_MESSAGE = "Failed to fetch tasks"


class LoadStatus(str, enum.Enum):
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class LoadResult:
    """Loader tri-state: pending, ready(tasks) or failed(error)."""

    status: LoadStatus
    tasks: Tuple[Task, ...] = ()
    error: Optional[str] = None

    @classmethod
    def pending(cls) -> "LoadResult":
        return cls(LoadStatus.PENDING)

    @classmethod
    def ready(cls, tasks) -> "LoadResult":
        return cls(LoadStatus.READY, tasks=tuple(tasks))

    @classmethod
    def failed(cls, reason: str) -> "LoadResult":
        return cls(LoadStatus.FAILED, error=reason)

    @property
    def is_pending(self) -> bool:
        return self.status is LoadStatus.PENDING

    @property
    def is_ready(self) -> bool:
        return self.status is LoadStatus.READY

    @property
    def is_failed(self) -> bool:
        return self.status is LoadStatus.FAILED


class TaskLoader:
    """
    Fetches the task collection from the configured endpoint.

    A fresh httpx.AsyncClient is opened per call: the loader fires once per
    activation, so there is no pool worth keeping between calls.
    ``transport`` lets tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str,
        tasks_path: str = "/api/tasks",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._tasks_path = tasks_path
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(
        cls,
        config: TaskViewConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "TaskLoader":
        return cls(
            base_url=config.api.base_url,
            tasks_path=config.api.tasks_path,
            timeout=config.api.timeout,
            transport=transport,
        )

    @property
    def url(self) -> str:
        return self._base_url + self._tasks_path

    async def fetch(self) -> list[Task]:
        """
        Issue exactly one GET for the full collection.

        Raises:
            TaskTransportError, TaskResponseError or TaskPayloadError.
        """
        url = self.url
        try:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout, connect=min(self._timeout, 10.0)),
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(url, headers={"Accept": "application/json"})
        except httpx.RequestError as e:
            # Transport failures, redirect loops and undecodable bodies
            raise TaskTransportError(
                f"Network error while fetching tasks: {str(e) or type(e).__name__}",
                url=url,
            ) from e

        if not response.is_success:
            raise TaskResponseError(
                FETCH_FAILED_MESSAGE,
                url=url,
                status_code=response.status_code,
            )

        try:
            payload: Any = response.json()
        except ValueError as e:
            raise TaskPayloadError(
                "Task endpoint returned a body that is not JSON",
                url=url,
            ) from e

        try:
            return parse_tasks(payload)
        except TaskPayloadError as e:
            e.url = url
            raise

    async def load(self) -> LoadResult:
        """Run one activation and collapse any failure into the tri-state."""
        start = time.monotonic()
        try:
            tasks = await self.fetch()
        except TaskFetchError as e:
            duration_ms = (time.monotonic() - start) * 1000
            logger.warning(f"Task fetch from {self.url} failed: {e.message}")
            log(log_fetch_event(
                url=self.url,
                success=False,
                duration_ms=duration_ms,
                status_code=getattr(e, "status_code", None),
                error=e.message,
            ))
            return LoadResult.failed(e.message)

        duration_ms = (time.monotonic() - start) * 1000
        logger.info(f"Fetched {len(tasks)} task(s) from {self.url} in {duration_ms:.0f}ms")
        log(log_fetch_event(
            url=self.url,
            success=True,
            duration_ms=duration_ms,
            task_count=len(tasks),
        ))
        log(log_fetch_performance(self.url, duration_ms))
        return LoadResult.ready(tasks)
