"""
Demo Task API Server — Standalone FastAPI application.

Serves the read-only endpoint the task list fetches from:
  - GET /api/tasks  — full task collection as a JSON array
  - GET /health     — liveness + collection size

Tasks come from a JSON seed file (api.seed_file in taskview.yaml, or the
TASKVIEW_SEED_FILE override used by the CLI) or the built-in sample set.

Run:
    taskview serve-api --port 3000

Or:
    uvicorn taskview.api.server:app --port 3000 --reload
"""

from __future__ import annotations

import json
import logging
import os
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from taskview import __version__
from taskview.engine.config import get_config
from taskview.engine.errors import TaskPayloadError, TaskViewConfigError
from taskview.engine.logging import log, log_api_request
from taskview.tasks.models import Task, parse_tasks

logger = logging.getLogger("taskview.api.server")

SEED_ENV_VAR = "TASKVIEW_SEED_FILE"

SAMPLE_TASKS: List[Dict[str, Any]] = [
    {"id": 1, "title": "Set up project repository", "description": "Create the repo and push the initial scaffold",
     "status": "done", "priority": "High", "dueDate": "2025-06-02"},
    {"id": 2, "title": "Design task card", "description": "Sketch the card layout for the task grid",
     "status": "done", "priority": "Medium", "dueDate": "2025-06-04"},
    {"id": 3, "title": "Build search box", "description": "Filter tasks by title, description or status",
     "status": "open", "priority": "High", "dueDate": "2025-06-06"},
    {"id": 4, "title": "Add pagination", "description": "Show six tasks per page with previous and next",
     "status": "open", "priority": "Medium", "dueDate": "2025-06-08"},
    {"id": 5, "title": "Dark mode toggle", "description": "Let users switch between light and dark themes",
     "status": "in progress", "priority": "Low", "dueDate": "2025-06-10"},
    {"id": 6, "title": "Write API docs", "description": "Document the GET /api/tasks response format",
     "status": "open", "priority": "Low", "dueDate": "2025-06-12"},
    {"id": 7, "title": "Handle fetch errors", "description": "Show an error panel with a retry button",
     "status": "in progress", "priority": "High", "dueDate": "2025-06-14"},
    {"id": 8, "title": "Deploy preview", "description": "Publish a preview build for review",
     "status": "open", "priority": "Medium", "dueDate": "2025-06-16"},
]


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    uptime_seconds: float
    total_tasks: int


# ---------------------------------------------------------------------------
# Task source
# ---------------------------------------------------------------------------

def load_seed_tasks(seed_file: Optional[str] = None) -> List[Task]:
    """
    Load and validate the served collection.

    Raises:
        TaskViewConfigError if the seed file is missing, not JSON, or not a
        valid task collection.
    """
    if not seed_file:
        return parse_tasks(SAMPLE_TASKS)

    path = Path(seed_file)
    if not path.exists():
        raise TaskViewConfigError(f"Seed file not found: {path}", path=str(path))
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        return parse_tasks(payload)
    except json.JSONDecodeError as e:
        raise TaskViewConfigError(f"Seed file is not valid JSON: {path}", path=str(path)) from e
    except TaskPayloadError as e:
        raise TaskViewConfigError(f"Seed file {path}: {e.message}", path=str(path)) from e


def _configured_seed_file() -> Optional[str]:
    return os.environ.get(SEED_ENV_VAR) or get_config().api.seed_file


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------

def create_app(tasks: Optional[List[Task]] = None) -> FastAPI:
    """
    Build the demo API.

    Args:
        tasks: Collection to serve. Loaded from the configured seed when None.
    """
    served = tasks if tasks is not None else load_seed_tasks(_configured_seed_file())
    started_at = datetime.now(timezone.utc)

    api = FastAPI(
        title="TaskView Demo API",
        description="Read-only task collection for the TaskView task list",
        version=__version__,
    )
    # The task list runs on a different port in dev
    api.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @api.middleware("http")
    async def _log_requests(request: Request, call_next):
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        log(log_api_request(
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=duration_ms,
        ))
        return response

    @api.get("/api/tasks")
    async def list_tasks() -> List[Dict[str, Any]]:
        """Full collection. Query parameters are ignored."""
        logger.debug(f"Serving {len(served)} task(s)")
        return [task.to_row() for task in served]

    @api.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        uptime = (datetime.now(timezone.utc) - started_at).total_seconds()
        return HealthResponse(
            status="healthy",
            version=__version__,
            uptime_seconds=round(uptime, 1),
            total_tasks=len(served),
        )

    return api


def __getattr__(name: str) -> Any:
    # Lazy module-level ``app`` for ``uvicorn taskview.api.server:app``
    if name == "app":
        return create_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
