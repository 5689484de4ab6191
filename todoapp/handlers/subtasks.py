# todoapp/handlers/subtasks.py
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from todoapp.errors import NotFoundError
from todoapp.mediator import RequestHandler, handles
from todoapp.models import Subtask, Task
from todoapp.schemas import DeleteResult, SubtaskOut
from todoapp.utils.clock import utc_now

logger = logging.getLogger(__name__)


@dataclass
class CreateSubtaskRequest:
    task_id: int
    description: str
    created_by: int = 0


@dataclass
class UpdateSubtaskRequest:
    subtask_id: int
    description: Optional[str] = None
    completed_date: Optional[datetime] = None


@dataclass
class DeleteSubtaskRequest:
    subtask_id: int


def get_subtask_or_404(db, subtask_id: int) -> Subtask:
    subtask = db.query(Subtask).filter(Subtask.subtask_id == subtask_id).first()
    if not subtask:
        raise NotFoundError.for_entity("Subtask", subtask_id)
    return subtask


@handles(CreateSubtaskRequest)
class CreateSubtaskHandler(RequestHandler):

    def handle(self, request: CreateSubtaskRequest) -> SubtaskOut:
        task_exists = self.db.query(Task.task_id).filter(Task.task_id == request.task_id).first()
        if not task_exists:
            raise NotFoundError.for_entity("Task", request.task_id)

        subtask = Subtask(
            task_id=request.task_id,
            description=request.description,
            created_by=request.created_by,
            created_date=utc_now(),
        )

        self.db.add(subtask)
        self.db.commit()
        self.db.refresh(subtask)

        logger.info("Created subtask %s on task %s", subtask.subtask_id, subtask.task_id)
        return SubtaskOut.model_validate(subtask)


@handles(UpdateSubtaskRequest)
class UpdateSubtaskHandler(RequestHandler):
    """Description changes only when supplied; completed_date is always overwritten"""

    def handle(self, request: UpdateSubtaskRequest) -> SubtaskOut:
        subtask = get_subtask_or_404(self.db, request.subtask_id)

        if request.description is not None:
            subtask.description = request.description

        # None marks the subtask incomplete again
        subtask.completed_date = request.completed_date

        self.db.commit()
        self.db.refresh(subtask)
        return SubtaskOut.model_validate(subtask)


@handles(DeleteSubtaskRequest)
class DeleteSubtaskHandler(RequestHandler):

    def handle(self, request: DeleteSubtaskRequest) -> DeleteResult:
        subtask = get_subtask_or_404(self.db, request.subtask_id)

        self.db.delete(subtask)
        self.db.commit()

        logger.info("Deleted subtask %s", request.subtask_id)
        return DeleteResult(
            success=True,
            message=f"Subtask {request.subtask_id} has been deleted successfully.",
        )
