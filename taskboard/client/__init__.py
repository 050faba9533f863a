from taskboard.client.api import ApiError, TaskboardClient
from taskboard.client.board import KanbanBoard

__all__ = ["ApiError", "TaskboardClient", "KanbanBoard"]
