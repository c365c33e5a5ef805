"""
TaskView — Browser-rendered task list (Reflex).
Version: 1.0

Fetches the full task collection once, then filters and paginates it
client-side.

    taskview.tasks   — records, loader, filter, paginator, view session
    taskview.ui      — Reflex state, components, pages
    taskview.engine  — config, errors, logging
    taskview.api     — demo task API (FastAPI)
"""

__version__ = "1.0.0"
__all__ = ["engine", "tasks", "ui", "api"]
