"""Pydantic schemas for tf_task API.

Create and update share the same field constraints; update makes every
field optional and only writes the ones the client actually sent.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.tf_common.enums import TaskPriority
from src.tf_task.domain.models import Task


def _strip(v: object) -> object:
    return v.strip() if isinstance(v, str) else v


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class TaskCreateRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True, validate_default=True)

    title: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    completed: bool = False
    priority: TaskPriority = TaskPriority.MEDIUM
    due_date: datetime | None = None
    account_id: UUID | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return _strip(v)

    def to_fields(self) -> dict[str, Any]:
        fields = self.model_dump()
        if fields["account_id"] is not None:
            fields["account_id"] = str(fields["account_id"])
        return fields


class TaskUpdateRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    completed: bool | None = None
    priority: TaskPriority | None = None
    due_date: datetime | None = None
    account_id: UUID | None = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, v: object) -> object:
        return _strip(v)

    @field_validator("title", "completed", "priority")
    @classmethod
    def not_null(cls, v: object) -> object:
        if v is None:
            raise ValueError("must not be null")
        return v

    def to_fields(self) -> dict[str, Any]:
        """Only the fields present in the request body."""
        fields = self.model_dump(exclude_unset=True)
        if fields.get("account_id") is not None:
            fields["account_id"] = str(fields["account_id"])
        return fields


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class TaskResponse(BaseModel):
    id: str
    title: str
    description: str | None
    completed: bool
    priority: str
    due_date: datetime | None
    account_id: str | None
    user_id: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            completed=task.completed,
            priority=task.priority,
            due_date=task.due_date,
            account_id=task.account_id,
            user_id=task.user_id,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
