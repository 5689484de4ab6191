# todoapp/handlers/tasks.py
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy import asc, case, desc, or_
from sqlalchemy.orm import selectinload

from todoapp.errors import NotFoundError
from todoapp.mediator import RequestHandler, handles
from todoapp.models import Task, User
from todoapp.schemas import DeleteResult, TaskDetailOut, TaskListOut, TaskOut
from todoapp.utils.clock import utc_now

logger = logging.getLogger(__name__)

SORT_FIELDS = ("createddate", "name", "completeddate")
DEFAULT_SORT_FIELD = "createddate"
MAX_PAGE_SIZE = 100


@dataclass
class CreateTaskRequest:
    user_id: int
    task_name: str
    description: str = ""
    created_by: int = 0


@dataclass
class GetTasksRequest:
    user_id: int
    page_number: Optional[int] = None
    page_size: Optional[int] = None
    sort_by: Optional[str] = None
    sort_direction: Optional[str] = None
    search_term: Optional[str] = None
    completed: Optional[bool] = None


@dataclass
class GetTaskRequest:
    task_id: int


@dataclass
class UpdateTaskRequest:
    task_id: int
    task_name: Optional[str] = None
    description: Optional[str] = None
    completed_date: Optional[datetime] = None
    completed_date_provided: bool = False


@dataclass
class DeleteTaskRequest:
    task_id: int


def get_task_or_404(db, task_id: int) -> Task:
    task = db.query(Task).filter(Task.task_id == task_id).first()
    if not task:
        raise NotFoundError.for_entity("Task", task_id)
    return task


@handles(CreateTaskRequest)
class CreateTaskHandler(RequestHandler):

    def handle(self, request: CreateTaskRequest) -> TaskOut:
        user_exists = self.db.query(User.user_id).filter(User.user_id == request.user_id).first()
        if not user_exists:
            raise NotFoundError.for_entity("User", request.user_id)

        task = Task(
            user_id=request.user_id,
            task_name=request.task_name,
            description=request.description,
            created_by=request.created_by,
            created_date=utc_now(),
        )

        self.db.add(task)
        self.db.commit()
        self.db.refresh(task)

        logger.info("Created task %s for user %s", task.task_id, task.user_id)
        return TaskOut.model_validate(task)


@handles(GetTasksRequest)
class GetTasksHandler(RequestHandler):
    """
    Lists a user's tasks with optional search, completion filter, sorting
    and paging.

    Paging is applied only when both page_number and page_size are given;
    has_more is only computed in that case. A page past the end is empty.
    """

    def handle(self, request: GetTasksRequest) -> TaskListOut:
        query = self.db.query(Task).filter(Task.user_id == request.user_id)

        search = (request.search_term or "").strip()
        if search:
            query = query.filter(
                or_(
                    Task.task_name.icontains(search, autoescape=True),
                    Task.description.icontains(search, autoescape=True),
                )
            )

        if request.completed is True:
            query = query.filter(Task.completed_date.is_not(None))
        elif request.completed is False:
            query = query.filter(Task.completed_date.is_(None))

        total_count = query.count()

        query = query.order_by(*self._ordering(request.sort_by, request.sort_direction))

        paged = request.page_number is not None and request.page_size is not None
        if paged:
            offset = (request.page_number - 1) * request.page_size
            query = query.offset(offset).limit(request.page_size)

        if paged and offset >= total_count:
            # Past the last page; the offset may not even fit the database's integer type
            tasks = []
        else:
            tasks = query.options(selectinload(Task.subtasks)).all()

        return TaskListOut(
            tasks=[TaskDetailOut.model_validate(task) for task in tasks],
            total_count=total_count,
            page_number=request.page_number or 1,
            page_size=request.page_size if request.page_size is not None else total_count,
            has_more=paged and request.page_number * request.page_size < total_count,
        )

    @staticmethod
    def _ordering(sort_by: Optional[str], sort_direction: Optional[str]):
        field = (sort_by or DEFAULT_SORT_FIELD).lower()
        if field not in SORT_FIELDS:
            field = DEFAULT_SORT_FIELD
        direction = asc if (sort_direction or "").lower() == "asc" else desc

        if field == "name":
            columns = [Task.task_name]
        elif field == "completeddate":
            # Incomplete tasks first when ascending, last when descending
            is_completed = case((Task.completed_date.is_(None), 0), else_=1)
            columns = [is_completed, Task.completed_date]
        else:
            columns = [Task.created_date]

        # Task id breaks ties so pages stay stable
        return [direction(column) for column in columns] + [direction(Task.task_id)]


@handles(GetTaskRequest)
class GetTaskHandler(RequestHandler):

    def handle(self, request: GetTaskRequest) -> TaskDetailOut:
        task = (
            self.db.query(Task)
            .options(selectinload(Task.subtasks))
            .filter(Task.task_id == request.task_id)
            .first()
        )
        if not task:
            raise NotFoundError.for_entity("Task", request.task_id)
        return TaskDetailOut.model_validate(task)


@handles(UpdateTaskRequest)
class UpdateTaskHandler(RequestHandler):
    """
    Partial update. Name and description change only when supplied.
    completed_date is written when completed_date_provided is set (None
    clears it); without the flag only a non-null value is applied.
    """

    def handle(self, request: UpdateTaskRequest) -> TaskOut:
        task = get_task_or_404(self.db, request.task_id)

        if request.task_name is not None:
            task.task_name = request.task_name
        if request.description is not None:
            task.description = request.description

        if request.completed_date_provided or request.completed_date is not None:
            task.completed_date = request.completed_date

        self.db.commit()
        self.db.refresh(task)

        logger.info("Updated task %s", task.task_id)
        return TaskOut.model_validate(task)


@handles(DeleteTaskRequest)
class DeleteTaskHandler(RequestHandler):

    def handle(self, request: DeleteTaskRequest) -> DeleteResult:
        task = get_task_or_404(self.db, request.task_id)

        # Subtasks go with it (ORM cascade and ON DELETE CASCADE)
        self.db.delete(task)
        self.db.commit()

        logger.info("Deleted task %s", request.task_id)
        return DeleteResult(
            success=True,
            message=f"Task {request.task_id} and its subtasks have been deleted successfully.",
        )
