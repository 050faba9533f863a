from taskboard.models.task import Task, TaskStatus, TaskPriority
from taskboard.models.task_type import TaskType
from taskboard.models.user import User

__all__ = ["Task", "TaskStatus", "TaskPriority", "TaskType", "User"]
