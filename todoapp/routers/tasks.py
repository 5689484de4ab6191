# todoapp/routers/tasks.py
from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from todoapp.handlers.subtasks import CreateSubtaskRequest, DeleteSubtaskRequest, UpdateSubtaskRequest
from todoapp.handlers.tasks import (
    MAX_PAGE_SIZE,
    CreateTaskRequest,
    DeleteTaskRequest,
    GetTaskRequest,
    GetTasksRequest,
    UpdateTaskRequest,
)
from todoapp.mediator import Mediator, get_mediator
from todoapp.schemas import (
    MAX_ID,
    DeleteResult,
    ProblemDetails,
    SubtaskCreate,
    SubtaskDelete,
    SubtaskOut,
    SubtaskUpdate,
    TaskCreate,
    TaskDelete,
    TaskDetailOut,
    TaskListOut,
    TaskOut,
    TaskUpdate,
)

router = APIRouter()

NOT_FOUND = {404: {"model": ProblemDetails}}
BAD_REQUEST = {400: {"model": ProblemDetails}}


@router.post("", response_model=TaskOut, responses={**BAD_REQUEST, **NOT_FOUND})
def create_task(task: TaskCreate, mediator: Mediator = Depends(get_mediator)):
    """Create a task owned by an existing user"""
    return mediator.send(CreateTaskRequest(
        user_id=task.user_id,
        task_name=task.task_name,
        description=task.description,
        created_by=task.created_by,
    ))


@router.get("/user/{user_id}", response_model=TaskListOut, responses=BAD_REQUEST)
def get_tasks(
    user_id: int = Path(..., ge=1, le=MAX_ID),
    page_number: Optional[int] = Query(None, alias="pageNumber", ge=1),
    page_size: Optional[int] = Query(None, alias="pageSize", ge=1, le=MAX_PAGE_SIZE),
    sort_by: Optional[str] = Query(
        None, alias="sortBy", pattern=r"(?i)^(createdDate|name|completedDate)$"
    ),
    sort_direction: Optional[str] = Query(None, alias="sortDirection", pattern=r"(?i)^(asc|desc)$"),
    search_term: Optional[str] = Query(None, alias="searchTerm", max_length=255),
    completed: Optional[bool] = Query(None),
    mediator: Mediator = Depends(get_mediator),
):
    """
    List a user's tasks.

    - searchTerm: case-insensitive match on name or description
    - completed: true for completed tasks only, false for incomplete only
    - sortBy / sortDirection: defaults to createdDate desc
    - pageNumber / pageSize: paging applies only when both are given
    """
    return mediator.send(GetTasksRequest(
        user_id=user_id,
        page_number=page_number,
        page_size=page_size,
        sort_by=sort_by,
        sort_direction=sort_direction,
        search_term=search_term,
        completed=completed,
    ))


@router.post("/delete", response_model=DeleteResult, responses={**BAD_REQUEST, **NOT_FOUND})
def delete_task(body: TaskDelete, mediator: Mediator = Depends(get_mediator)):
    """Delete a task and all of its subtasks"""
    return mediator.send(DeleteTaskRequest(task_id=body.task_id))


@router.post("/subtask", response_model=SubtaskOut, responses={**BAD_REQUEST, **NOT_FOUND})
def create_subtask(subtask: SubtaskCreate, mediator: Mediator = Depends(get_mediator)):
    return mediator.send(CreateSubtaskRequest(
        task_id=subtask.task_id,
        description=subtask.description,
        created_by=subtask.created_by,
    ))


@router.post("/subtask/delete", response_model=DeleteResult, responses={**BAD_REQUEST, **NOT_FOUND})
def delete_subtask(body: SubtaskDelete, mediator: Mediator = Depends(get_mediator)):
    return mediator.send(DeleteSubtaskRequest(subtask_id=body.subtask_id))


@router.patch("/subtask/{subtask_id}", response_model=SubtaskOut, responses={**BAD_REQUEST, **NOT_FOUND})
def update_subtask(
    subtask_update: SubtaskUpdate,
    subtask_id: int = Path(..., ge=1, le=MAX_ID),
    mediator: Mediator = Depends(get_mediator),
):
    """Update a subtask. completedDate is always written; send null to mark it incomplete."""
    return mediator.send(UpdateSubtaskRequest(
        subtask_id=subtask_id,
        description=subtask_update.description,
        completed_date=subtask_update.completed_date,
    ))


@router.get("/{task_id}", response_model=TaskDetailOut, responses=NOT_FOUND)
def get_task(task_id: int = Path(..., ge=1, le=MAX_ID), mediator: Mediator = Depends(get_mediator)):
    """Get a task with its subtasks"""
    return mediator.send(GetTaskRequest(task_id=task_id))


@router.patch("/{task_id}", response_model=TaskOut, responses={**BAD_REQUEST, **NOT_FOUND})
def update_task(
    task_update: TaskUpdate,
    task_id: int = Path(..., ge=1, le=MAX_ID),
    mediator: Mediator = Depends(get_mediator),
):
    """
    Partially update a task. Set completedDateProvided to true to write
    completedDate, including null to clear it.
    """
    return mediator.send(UpdateTaskRequest(
        task_id=task_id,
        task_name=task_update.task_name,
        description=task_update.description,
        completed_date=task_update.completed_date,
        completed_date_provided=task_update.completed_date_provided,
    ))
