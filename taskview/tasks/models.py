"""Task record — the unit of retrieval, as served by GET /api/tasks."""

from __future__ import annotations

from typing import Any, Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from taskview.engine.errors import TaskPayloadError

# Fields the free-text search looks at
SEARCH_FIELDS = ("title", "description", "status")


class Task(BaseModel):
    """
    Immutable task record.

    Wire format uses camelCase ``dueDate``; either the alias or the field
    name is accepted on input. Unknown wire fields are ignored.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: Union[int, str]
    title: str
    description: str = ""
    status: str = ""
    priority: str = ""
    due_date: str = Field(default="", alias="dueDate")

    @field_validator("description", "status", "priority", "due_date", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match on title, description or status."""
        needle = term.lower()
        return any(needle in getattr(self, name).lower() for name in SEARCH_FIELDS)

    def to_row(self) -> Dict[str, Any]:
        """JSON-safe dict using wire names (used as Reflex state)."""
        return self.model_dump(by_alias=True)


def parse_tasks(payload: Any) -> List[Task]:
    """
    Validate a decoded JSON payload into an ordered list of tasks.

    Raises:
        TaskPayloadError if the payload is not an array, an item fails
        validation, or two records share an identifier.
    """
    if not isinstance(payload, list):
        raise TaskPayloadError(
            f"Expected a JSON array of tasks, got {type(payload).__name__}"
        )

    tasks: List[Task] = []
    seen: set = set()
    for index, item in enumerate(payload):
        try:
            task = Task.model_validate(item)
        except ValidationError as e:
            raise TaskPayloadError(
                f"Invalid task record at index {index}",
                index=index,
                validation_errors=e.errors(include_url=False),
            ) from e
        key = (type(task.id).__name__, task.id)
        if key in seen:
            raise TaskPayloadError(
                f"Duplicate task id {task.id!r} at index {index}",
                index=index,
                task_id=task.id,
            )
        seen.add(key)
        tasks.append(task)
    return tasks


def tasks_from_rows(rows: List[Dict[str, Any]]) -> List[Task]:
    """Rebuild tasks from rows previously produced by Task.to_row()."""
    return [Task.model_validate(row) for row in rows]
