from .user import User, RoleType, ROLE_CODES, ROLES_BY_CODE
from .task import Task, Subtask
