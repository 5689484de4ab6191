# todoapp/schemas/task.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from todoapp.schemas.base import MAX_ID, CamelModel
from todoapp.utils.clock import to_naive_utc


class TaskCreate(CamelModel):
    user_id: int = Field(..., ge=1, le=MAX_ID)
    task_name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    created_by: int = Field(0, ge=0, le=MAX_ID)


class TaskUpdate(CamelModel):
    task_name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    completed_date: Optional[datetime] = None

    # True when the client means to write completed_date, including clearing it
    completed_date_provided: bool = False

    @field_validator("completed_date")
    @classmethod
    def normalize_completed_date(cls, v):
        return to_naive_utc(v)


class TaskDelete(CamelModel):
    task_id: int = Field(..., ge=1, le=MAX_ID)


class SubtaskCreate(CamelModel):
    task_id: int = Field(..., ge=1, le=MAX_ID)
    description: str = Field(..., min_length=1)
    created_by: int = Field(0, ge=0, le=MAX_ID)


class SubtaskUpdate(CamelModel):
    description: Optional[str] = Field(None, min_length=1)
    completed_date: Optional[datetime] = None

    @field_validator("completed_date")
    @classmethod
    def normalize_completed_date(cls, v):
        return to_naive_utc(v)


class SubtaskDelete(CamelModel):
    subtask_id: int = Field(..., ge=1, le=MAX_ID)


# For returning task data
class SubtaskOut(CamelModel):
    subtask_id: int
    task_id: int
    description: str
    completed_date: Optional[datetime] = None
    created_date: datetime


class TaskOut(CamelModel):
    task_id: int
    user_id: int
    task_name: str
    description: str
    completed_date: Optional[datetime] = None
    created_date: datetime


class TaskDetailOut(TaskOut):
    subtasks: List[SubtaskOut] = []


class TaskListOut(CamelModel):
    tasks: List[TaskDetailOut]
    total_count: int
    page_number: int
    page_size: int
    has_more: bool


class DeleteResult(CamelModel):
    success: bool
    message: str
