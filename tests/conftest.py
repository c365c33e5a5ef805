"""
TaskView Test Suite — Shared fixtures and configuration.

Run:  pytest tests/ -v
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List

import httpx
import pytest

from taskview.tasks.models import Task, parse_tasks


# ---------------------------------------------------------------------------
# Isolation: reset module-level singletons between tests
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _isolate_singletons(monkeypatch, tmp_path):
    """Reset config + file logger; never pick up a real taskview.yaml."""
    import taskview.engine.config as cfg_mod
    import taskview.engine.logging as log_mod

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TASKVIEW_SEED_FILE", raising=False)
    cfg_mod._config = None
    log_mod._file_logger = None
    yield
    cfg_mod._config = None
    log_mod._file_logger = None


# ---------------------------------------------------------------------------
# Task data
# ---------------------------------------------------------------------------

def make_task_rows(count: int, **overrides: Any) -> List[Dict[str, Any]]:
    """Build ``count`` distinct wire-format task dicts."""
    rows = []
    for i in range(1, count + 1):
        row = {
            "id": i,
            "title": f"Task {i}",
            "description": f"Description {i}",
            "status": "open",
            "priority": "Medium",
            "dueDate": f"2025-06-{i:02d}",
        }
        row.update(overrides)
        rows.append(row)
    return rows


@pytest.fixture
def task_rows() -> List[Dict[str, Any]]:
    """Eight tasks, one of which is the only 'deploy' match."""
    rows = make_task_rows(8)
    rows[0].update(title="Write README", description="Project overview", status="done")
    rows[1].update(title="Fix login bug", description="Users cannot sign in", status="open")
    rows[2].update(title="Review PR", description="Check the pagination change", status="In Progress")
    rows[7].update(title="Deploy release", description="Ship version 1.0", status="open")
    return rows


@pytest.fixture
def tasks(task_rows) -> List[Task]:
    return parse_tasks(task_rows)


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

class RecordingHandler:
    """MockTransport handler that records every request it answers."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self._respond = respond
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)


@pytest.fixture
def json_handler():
    """Factory: handler answering every request with ``payload`` and ``status``."""
    def _factory(payload: Any, status: int = 200) -> RecordingHandler:
        body = json.dumps(payload).encode("utf-8")
        return RecordingHandler(
            lambda request: httpx.Response(
                status, content=body, headers={"Content-Type": "application/json"}
            )
        )
    return _factory


@pytest.fixture
def config_file(tmp_path):
    """Write a taskview.yaml and return its path."""
    def _write(text: str):
        path = tmp_path / "taskview.yaml"
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def row_factory():
    """Expose make_task_rows to tests."""
    return make_task_rows


# ---------------------------------------------------------------------------
# Structured log files
# ---------------------------------------------------------------------------

def read_log_entries(log_dir, object_type: str, category: str) -> List[Dict[str, Any]]:
    """Today's JSONL entries for one object_type/category, in write order."""
    path = Path(log_dir) / object_type / category / f"{date.today().isoformat()}.jsonl"
    if not path.exists():
        return []
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]


@pytest.fixture
def log_entries():
    """Expose read_log_entries to tests."""
    return read_log_entries
