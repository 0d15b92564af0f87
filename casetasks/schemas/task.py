# casetasks/schemas/task.py
import re
from datetime import datetime
from typing import List, Optional

from pydantic import ConfigDict, Field, field_serializer, field_validator

from casetasks.database import utcnow
from casetasks.models.task import TaskStatus
from casetasks.schemas.base import CamelModel, to_naive_utc, utc_isoformat

# pydantic would otherwise take numbers (and digit-only strings) as unix timestamps
ISO_DATE_PREFIX = re.compile(r"^\d{4}-\d{2}-\d{2}")


def require_iso_date(v):
    if v is None or isinstance(v, datetime):
        return v
    if not isinstance(v, str) or not ISO_DATE_PREFIX.match(v.strip()):
        raise ValueError("Due date must be a valid ISO 8601 date")
    return v


class TaskCreate(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    status: TaskStatus = TaskStatus.PENDING
    due_date: Optional[datetime] = None

    @field_validator("due_date", mode="before")
    @classmethod
    def due_date_is_iso(cls, v):
        return require_iso_date(v)

    @field_validator("due_date")
    @classmethod
    def due_date_must_be_in_future(cls, v):
        if v is None:
            return v
        v = to_naive_utc(v)
        if v <= utcnow():
            raise ValueError("Due date must be in the future")
        return v


class TaskUpdate(CamelModel):
    """Partial update: only fields present in the request body are applied."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    status: Optional[TaskStatus] = None
    due_date: Optional[datetime] = None

    @field_validator("title", "status")
    @classmethod
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name.capitalize()} cannot be null")
        return v

    @field_validator("due_date", mode="before")
    @classmethod
    def due_date_is_iso(cls, v):
        return require_iso_date(v)

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, v):
        return to_naive_utc(v) if v is not None else v


class TaskOut(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    due_date: Optional[datetime] = None
    user_id: int
    created_at: datetime
    updated_at: datetime

    @field_serializer("due_date", "created_at", "updated_at", when_used="json-unless-none")
    def serialize_as_utc(self, value: datetime) -> str:
        return utc_isoformat(value)


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class TaskListOut(CamelModel):
    tasks: List[TaskOut]
    pagination: Pagination


class TaskStats(CamelModel):
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    cancelled: int = 0
