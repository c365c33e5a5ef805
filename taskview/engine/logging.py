"""
TaskView Logging — stdlib logging setup plus structured JSON event files.

Implements:
- configure_logging: root "taskview" logger level + console handler
- FileLogger: per-object-type, per-category JSONL files (daily rotation)
- Log entry builders for task fetches, API requests and system events
- Module-level singleton: init_logging / log / shutdown_logging

Files land in {log_dir}/{object_type}/{category}/{YYYY-MM-DD}.jsonl
"""

from __future__ import annotations

import json
import logging
import threading
from collections import defaultdict
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger("taskview.engine.logging")

# Object types and their permitted categories
OBJECT_TYPE_CATEGORIES = {
    "loader": ["execution", "performance"],
    "api": ["execution"],
    "system": ["execution"],
}

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach a console handler to the "taskview" logger. Idempotent."""
    root = logging.getLogger("taskview")
    root.setLevel(level.upper())
    if not any(getattr(h, "_taskview_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._taskview_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    return root


class LogEntry:
    """A structured log entry destined for a specific file."""

    __slots__ = ("object_type", "category", "data")

    def __init__(self, object_type: str, category: str, data: Dict[str, Any]):
        self.object_type = object_type
        self.category = category
        self.data = data

    def to_json(self) -> str:
        return json.dumps(self.data, default=str, separators=(",", ":"))


class FileLogger:
    """
    Writes structured JSON log entries to per-object-type, per-category files.
    Files rotate daily. Thread-safe — one lock per file path.
    """

    def __init__(self, log_dir: str = "logs"):
        self._log_dir = Path(log_dir)
        self._file_locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._ensure_directories()

    def _ensure_directories(self) -> None:
        for obj_type, categories in OBJECT_TYPE_CATEGORIES.items():
            for cat in categories:
                (self._log_dir / obj_type / cat).mkdir(parents=True, exist_ok=True)

    def write(self, entry: LogEntry) -> None:
        """Write a single log entry to the appropriate file."""
        if entry.category not in OBJECT_TYPE_CATEGORIES.get(entry.object_type, []):
            raise ValueError(
                f"Unknown log destination {entry.object_type}/{entry.category}"
            )
        file_path = self._resolve_path(entry.object_type, entry.category)

        with self._file_locks[str(file_path)]:
            with open(file_path, "a", encoding="utf-8") as f:
                f.write(entry.to_json())
                f.write("\n")

    def _resolve_path(self, object_type: str, category: str) -> Path:
        today = date.today().isoformat()
        return self._log_dir / object_type / category / f"{today}.jsonl"

    @property
    def log_dir(self) -> Path:
        return self._log_dir


# ---------------------------------------------------------------------------
# Log Entry Builders
# ---------------------------------------------------------------------------

def _base_entry(event: str, level: str, **extra: Any) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "level": level,
        "event": event,
    }
    entry.update(extra)
    return entry


def log_fetch_event(
    url: str,
    success: bool,
    duration_ms: float,
    status_code: Optional[int] = None,
    task_count: Optional[int] = None,
    error: Optional[str] = None,
) -> LogEntry:
    """Build a task fetch log entry (one per loader activation)."""
    data = _base_entry(
        event="tasks_fetched" if success else "tasks_fetch_failed",
        level="INFO" if success else "ERROR",
        url=url,
        success=success,
        duration_ms=round(duration_ms, 2),
    )
    if status_code is not None:
        data["status_code"] = status_code
    if task_count is not None:
        data["task_count"] = task_count
    if error:
        data["error"] = error
    return LogEntry("loader", "execution", data)


def log_fetch_performance(url: str, duration_ms: float) -> LogEntry:
    data = _base_entry(
        event="tasks_fetch_performance",
        level="INFO",
        url=url,
        duration_ms=round(duration_ms, 2),
    )
    return LogEntry("loader", "performance", data)


def log_api_request(
    method: str,
    path: str,
    status_code: int,
    duration_ms: float,
) -> LogEntry:
    """Build a demo API request log entry."""
    data = _base_entry(
        event="api_request",
        level="INFO" if status_code < 400 else "ERROR",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=round(duration_ms, 2),
    )
    return LogEntry("api", "execution", data)


def log_system_event(
    event: str,
    level: str = "INFO",
    details: Optional[Dict[str, Any]] = None,
) -> LogEntry:
    """Build a system event log entry (startup, shutdown, config changes)."""
    data = _base_entry(event=event, level=level)
    if details:
        data["details"] = details
    return LogEntry("system", "execution", data)


# ---------------------------------------------------------------------------
# Convenience: Global File Logger Singleton
# ---------------------------------------------------------------------------

_file_logger: Optional[FileLogger] = None


def init_logging(log_dir: str = "logs", level: str = "INFO") -> FileLogger:
    """Initialize console logging and the global structured file logger."""
    global _file_logger
    configure_logging(level)
    _file_logger = FileLogger(log_dir=log_dir)
    return _file_logger


def get_file_logger() -> Optional[FileLogger]:
    return _file_logger


def log(entry: LogEntry) -> bool:
    """Write an entry via the global file logger. Never raises."""
    if _file_logger is None:
        logger.debug("File logger not initialized — entry dropped")
        return False
    try:
        _file_logger.write(entry)
        return True
    except (OSError, ValueError) as e:
        logger.error(f"Failed to write log entry: {e}")
        return False


def shutdown_logging() -> None:
    global _file_logger
    _file_logger = None
