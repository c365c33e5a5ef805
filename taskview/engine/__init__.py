"""TaskView Engine — Configuration, error hierarchy, structured logging."""

from taskview.engine.config import TaskViewConfig, get_config, load_config  # noqa: F401
from taskview.engine.errors import (  # noqa: F401
    TaskFetchError,
    TaskViewConfigError,
    TaskViewError,
)

__all__ = [
    "TaskViewConfig",
    "get_config",
    "load_config",
    "TaskFetchError",
    "TaskViewConfigError",
    "TaskViewError",
]
