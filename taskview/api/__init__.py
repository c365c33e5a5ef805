"""TaskView demo API — serves GET /api/tasks for local development."""

from taskview.api.server import SAMPLE_TASKS, create_app, load_seed_tasks  # noqa: F401

__all__ = ["SAMPLE_TASKS", "create_app", "load_seed_tasks"]
