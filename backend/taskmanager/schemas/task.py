from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError
from typing import Any, Dict, Optional
from datetime import datetime
from enum import Enum


class TaskStatus(str, Enum):
    pending = "pending"
    in_progress = "in-progress"
    completed = "completed"


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class TaskPayload(BaseModel):
    """Request body shared by create and update.

    Only ``title`` is required. Missing optional fields are filled in by
    ``to_fields`` so the store never sees a partial task.
    An explicit null is not the same as a missing field: status and
    priority reject it.
    """

    title: Optional[str] = Field(None, validate_default=True)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None

    @field_validator("title", mode="before")
    @classmethod
    def title_not_blank(cls, value: Any) -> str:
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("title_required", "Title is required")
        return value.strip()

    @field_validator("description", mode="before")
    @classmethod
    def strip_description(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        if not isinstance(value, str):
            raise PydanticCustomError("description_type", "Description must be a string")
        return value.strip()

    @field_validator("status", mode="before")
    @classmethod
    def status_in_set(cls, value: Any) -> Any:
        if value not in [s.value for s in TaskStatus]:
            raise PydanticCustomError("invalid_status", "Invalid status")
        return value

    @field_validator("priority", mode="before")
    @classmethod
    def priority_in_set(cls, value: Any) -> Any:
        if value not in [p.value for p in TaskPriority]:
            raise PydanticCustomError("invalid_priority", "Invalid priority")
        return value

    def to_fields(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description or "",
            "status": self.status or TaskStatus.pending,
            "priority": self.priority or TaskPriority.medium,
        }


class TaskResponse(BaseModel):
    id: int
    title: str
    description: Optional[str]
    status: TaskStatus
    priority: TaskPriority
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class TaskStats(BaseModel):
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0

    def as_summary(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "pending": self.pending,
            "in-progress": self.in_progress,
            "completed": self.completed,
        }

    @classmethod
    def from_counts(cls, counts: Dict[str, int]) -> "TaskStats":
        return cls(
            total=sum(counts.values()),
            pending=counts.get(TaskStatus.pending.value, 0),
            in_progress=counts.get(TaskStatus.in_progress.value, 0),
            completed=counts.get(TaskStatus.completed.value, 0),
        )
