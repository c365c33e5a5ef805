"""
TaskView — Main Reflex application entry point.

Boot sequence:
    1. _init_platform() — load taskview.yaml, set up console + JSONL logging
    2. Create rx.App() and register the task list routes
"""

import logging

import reflex as rx

from taskview.ui.pages import task_list_page

logger = logging.getLogger("taskview.startup")

# Guard: only initialize once, even if the module is re-imported
_platform_initialized = False


def _init_platform() -> None:
    """Load config and initialize logging."""
    global _platform_initialized
    if _platform_initialized:
        return
    _platform_initialized = True

    from taskview.engine.config import load_config
    from taskview.engine.logging import configure_logging, init_logging, log, log_system_event

    configure_logging()
    config = load_config(fallback=True)

    if config.logging.enabled:
        init_logging(log_dir=config.logging.directory, level=config.logging.level)
    else:
        configure_logging(config.logging.level)

    log(log_system_event(
        "startup",
        details={
            "environment": config.environment,
            "tasks_url": config.api.tasks_url,
            "page_size": config.pagination.page_size,
        },
    ))
    logger.info(f"{config.name} {config.version} ready — tasks from {config.api.tasks_url}")


# 1. Initialize config and logging
_init_platform()

# 2. Create the Reflex app
app = rx.App()

app.add_page(task_list_page, route="/", title="Tasks")
app.add_page(task_list_page, route="/tasks", title="Tasks")
