from .base import MAX_ID, CamelModel
from .user import UserCreate, UserLogin, UserProfile, UserOut
from .task import (
    TaskCreate, TaskUpdate, TaskDelete, TaskOut, TaskDetailOut, TaskListOut,
    SubtaskCreate, SubtaskUpdate, SubtaskDelete, SubtaskOut, DeleteResult,
)
from .problem import ProblemDetails
