"""
TaskView Error Hierarchy — Structured exceptions with JSON-serializable context.

Retrieval errors are raised inside the loader and caught at its boundary;
the UI layer only ever sees the pending / ready / failed tri-state.

Hierarchy:
    TaskViewError
    ├── TaskViewConfigError     — Invalid taskview.yaml
    └── TaskFetchError          — Task retrieval failed
        ├── TaskTransportError  — Network unreachable, timeout
        ├── TaskResponseError   — Non-success status code
        └── TaskPayloadError    — Body is not a valid task collection
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class TaskViewError(Exception):
    """
    Base error for all TaskView failures.
    All context is serializable to JSON for the structured log files.
    """

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.error_type: str = self.__class__.__name__
        self.context: Dict[str, Any] = context
        self.timestamp: str = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error to a JSON-compatible dict for logging."""
        return {
            "error_type": self.error_type,
            "message": self.message,
            "timestamp": self.timestamp,
            "context": {k: str(v) for k, v in self.context.items()},
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)

    def __repr__(self) -> str:
        parts = [f"{self.error_type}: {self.message}"]
        for key, value in self.context.items():
            parts.append(f"{key}={value}")
        return " | ".join(parts)


class TaskViewConfigError(TaskViewError):
    """Configuration error — invalid taskview.yaml."""
    pass


class TaskFetchError(TaskViewError):
    """
    Task retrieval failed.
    Carries the endpoint URL so log entries can be correlated with requests.
    """

    def __init__(self, message: str, **context: Any):
        self.url: Optional[str] = context.get("url")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["url"] = self.url
        return d


class TaskTransportError(TaskFetchError):
    """Network unreachable, connection refused or timed out."""
    pass


class TaskResponseError(TaskFetchError):
    """Endpoint answered with a non-success status code."""

    def __init__(self, message: str, **context: Any):
        self.status_code: Optional[int] = context.get("status_code")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["status_code"] = self.status_code
        return d


class TaskPayloadError(TaskFetchError):
    """
    Response body is not a task collection (not JSON, not an array,
    invalid records or duplicate identifiers).
    """

    def __init__(self, message: str, **context: Any):
        self.validation_errors: Optional[list] = context.get("validation_errors")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["validation_errors"] = self.validation_errors
        return d
