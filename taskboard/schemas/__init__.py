from .common import ErrorOut, FieldErrorOut, MessageOut
from .task import TaskCreate, TaskFilter, TaskOut, TaskUpdate
from .task_type import TaskTypeCreate, TaskTypeOut, TaskTypeUpdate
from .user import UserCreate, UserOut, UserUpdate

__all__ = [
    # Common schemas
    "ErrorOut", "FieldErrorOut", "MessageOut",
    # Task schemas
    "TaskCreate", "TaskFilter", "TaskOut", "TaskUpdate",
    # Task type schemas
    "TaskTypeCreate", "TaskTypeOut", "TaskTypeUpdate",
    # User schemas
    "UserCreate", "UserOut", "UserUpdate",
]
