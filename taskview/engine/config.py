"""
TaskView Configuration — Load and validate taskview.yaml at startup.

Usage:
    from taskview.engine.config import load_config, get_config
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from taskview.engine.errors import TaskViewConfigError

logger = logging.getLogger("taskview.engine.config")

CONFIG_FILENAME = "taskview.yaml"


# ---------------------------------------------------------------------------
# Pydantic models for taskview.yaml
# ---------------------------------------------------------------------------

class ApiConfig(BaseModel):
    base_url: str = "http://localhost:3000"
    tasks_path: str = "/api/tasks"
    timeout: float = Field(default=10.0, gt=0)
    # Used only by the demo API server
    seed_file: Optional[str] = None

    @field_validator("tasks_path")
    @classmethod
    def validate_tasks_path(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError(f"tasks_path must start with '/', got '{v}'")
        return v

    @property
    def tasks_url(self) -> str:
        return self.base_url.rstrip("/") + self.tasks_path


class PaginationConfig(BaseModel):
    page_size: int = Field(default=6, ge=1)
    page_window: int = Field(default=5, ge=1)


class UIConfig(BaseModel):
    title: str = "PLP Task Manager"
    theme: str = "light"

    @field_validator("theme")
    @classmethod
    def validate_theme(cls, v: str) -> str:
        if v not in ("light", "dark"):
            raise ValueError(f"theme must be light/dark, got '{v}'")
        return v


class LoggingConfig(BaseModel):
    enabled: bool = True
    level: str = "INFO"
    directory: str = ".taskview/logs"

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level '{v}'")
        return v


class TaskViewConfig(BaseModel):
    """Root model for taskview.yaml."""
    name: str = "TaskView"
    version: str = "1.0.0"
    environment: str = "dev"

    api: ApiConfig = ApiConfig()
    pagination: PaginationConfig = PaginationConfig()
    ui: UIConfig = UIConfig()
    logging: LoggingConfig = LoggingConfig()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ("dev", "staging", "prod"):
            raise ValueError(f"environment must be dev/staging/prod, got '{v}'")
        return v


# ---------------------------------------------------------------------------
# Config Loading Functions
# ---------------------------------------------------------------------------

_config: Optional[TaskViewConfig] = None


def _find_project_root() -> Path:
    """Find the project root by looking for taskview.yaml."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        if (parent / CONFIG_FILENAME).exists():
            return parent
    return current


def get_project_root() -> Path:
    """Return the project root directory."""
    return _find_project_root()


def load_config(config_path: Optional[str] = None, fallback: bool = False) -> TaskViewConfig:
    """
    Load and validate taskview.yaml.

    Args:
        config_path: Explicit path to taskview.yaml. If None, auto-discovers.
        fallback: Install the defaults instead of raising on an invalid file.

    Returns:
        Validated TaskViewConfig instance. Defaults if the file is missing.

    Raises:
        TaskViewConfigError if the file is not valid YAML or fails validation
        and fallback is False.
    """
    global _config

    if config_path is None:
        config_path = str(_find_project_root() / CONFIG_FILENAME)

    try:
        _config = _read_config(Path(config_path))
    except TaskViewConfigError as e:
        if not fallback:
            raise
        logger.error(f"{e.message}, falling back to defaults")
        _config = TaskViewConfig()
    return _config


def _read_config(path: Path) -> TaskViewConfig:
    if not path.exists():
        return TaskViewConfig()

    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise TaskViewConfigError(f"Invalid YAML in {path}: {e}", path=str(path)) from e

    if not isinstance(raw, dict):
        raise TaskViewConfigError(f"{path} must contain a mapping", path=str(path))

    # Top-level "app" block carries name/version/environment
    app_data: Dict[str, Any] = raw.get("app", {}) or {}
    config_data = {
        "name": app_data.get("name", raw.get("name", "TaskView")),
        "version": app_data.get("version", raw.get("version", "1.0.0")),
        "environment": app_data.get("environment", raw.get("environment", "dev")),
        "api": raw.get("api", {}) or {},
        "pagination": raw.get("pagination", {}) or {},
        "ui": raw.get("ui", {}) or {},
        "logging": raw.get("logging", {}) or {},
    }

    try:
        return TaskViewConfig(**config_data)
    except ValidationError as e:
        raise TaskViewConfigError(
            f"Invalid configuration in {path}",
            path=str(path),
            errors=e.errors(include_url=False),
        ) from e


def get_config() -> TaskViewConfig:
    """Get the currently loaded config, loading if necessary."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    global _config
    _config = None
