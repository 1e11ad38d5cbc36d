"""Pydantic schemas for task request/response validation."""

from pydantic import BaseModel, ConfigDict, field_validator
from datetime import datetime
from typing import Optional, List

from taskdeck.models.task import Priority
from taskdeck.schemas.category import CategoryResponse
from taskdeck.schemas.subtask import SubtaskResponse


def _naive_local(value: Optional[datetime]) -> Optional[datetime]:
    # échéances stockées en heure locale naïve, comparées à date.today()
    if value is not None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class TaskCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    completed: bool = False
    priority: Priority = Priority.NORMAL
    due_date: Optional[datetime] = None
    category_id: Optional[int] = None

    @field_validator("due_date")
    @classmethod
    def naive_local_due_date(cls, value):
        return _naive_local(value)


class TaskUpdate(BaseModel):
    """Maj partielle: seuls les champs envoyés sont appliqués (exclude_unset)."""

    title: Optional[str] = None
    description: Optional[str] = None
    completed: Optional[bool] = None
    priority: Optional[Priority] = None
    due_date: Optional[datetime] = None
    category_id: Optional[int] = None

    @field_validator("due_date")
    @classmethod
    def naive_local_due_date(cls, value):
        return _naive_local(value)


class TaskResponse(BaseModel):
    """Tâche retournée, avec sa catégorie et ses sous-tâches."""

    id: int
    user_id: int
    category_id: Optional[int]
    title: str
    description: str
    completed: bool
    priority: Priority
    due_date: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    category: Optional[CategoryResponse] = None
    subtasks: List[SubtaskResponse] = []

    model_config = ConfigDict(from_attributes=True)
