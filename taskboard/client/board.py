import logging
from typing import Any, Dict, List, Optional

from taskboard.client.api import ApiError, TaskboardClient
from taskboard.models.task import TaskStatus

logger = logging.getLogger(__name__)

# Порядок колонок на доске
COLUMNS = [TaskStatus.todo, TaskStatus.in_progress,
           TaskStatus.review, TaskStatus.done]

MOVE_FAILED_ALERT = "Failed to move task. Please try again."


class KanbanBoard:
    """
    Состояние доски: задачи, справочник типов и пользователи, загруженные с сервера.

    Источник истины всегда сервер: после любой мутации задачи перечитываются,
    при ошибке локальное состояние не подменяется, а просто загружается заново.
    Последнее сообщение для пользователя лежит в `alert`.
    """

    def __init__(self, client: TaskboardClient):
        self.client = client
        self.tasks: List[Dict[str, Any]] = []
        self.task_types: List[Dict[str, Any]] = []
        self.users: List[Dict[str, Any]] = []
        self.filters: Dict[str, Optional[str]] = {}
        self.alert: Optional[str] = None

    # --- Загрузка ---

    def load(self) -> None:
        """Аналог загрузки при открытии страницы: задачи, типы, пользователи."""
        self.load_tasks()
        self.load_task_types()
        self.load_users()

    def load_tasks(self) -> None:
        try:
            self.tasks = self.client.tasks.list(**self.filters)
        except ApiError as e:
            logger.error(f"Не удалось загрузить задачи: {e.message}")

    def load_task_types(self) -> None:
        try:
            self.task_types = self.client.task_types.list()
        except ApiError as e:
            logger.error(f"Не удалось загрузить типы задач: {e.message}")

    def load_users(self) -> None:
        try:
            self.users = self.client.users.list()
        except ApiError as e:
            logger.error(f"Не удалось загрузить пользователей: {e.message}")

    def set_filters(self, status: Optional[str] = None, priority: Optional[str] = None,
                    date: Optional[str] = None) -> None:
        self.filters = {"status": status, "priority": priority, "date": date}
        self.load_tasks()

    # --- Представление ---

    def columns(self) -> Dict[str, List[Dict[str, Any]]]:
        board = {column.value: [] for column in COLUMNS}
        for task in self.tasks:
            board.setdefault(task["status"], []).append(task)
        return board

    def find_task(self, task_id: int) -> Optional[Dict[str, Any]]:
        return next((t for t in self.tasks if t["id"] == task_id), None)

    def task_type_for(self, task: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        type_id = task.get("taskTypeId")
        return next((t for t in self.task_types if t["id"] == type_id), None)

    def assignee_for(self, task: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        user_id = task.get("assignedToUserId")
        return next((u for u in self.users if u["id"] == user_id), None)

    # --- Мутации ---

    def create_task(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Ошибки валидации пробрасываются вызывающему, как в форме задачи."""
        task = self.client.tasks.create(data)
        self.load_tasks()
        return task

    def update_task(self, task_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        task = self.client.tasks.update(task_id, data)
        self.load_tasks()
        return task

    def delete_task(self, task_id: int) -> bool:
        try:
            self.client.tasks.delete(task_id)
        except ApiError as e:
            logger.error(f"Не удалось удалить задачу {task_id}: {e.message}")
            return False
        finally:
            self.load_tasks()
        return True

    def move_task(self, task_id: int, new_status: str) -> bool:
        """
        Перенос карточки в другую колонку: на сервер уходит только status.
        Возвращает True, если статус изменился на сервере.
        """
        valid = {column.value for column in COLUMNS}
        if new_status not in valid:
            logger.error(f"Недопустимый статус: {new_status}")
            return False
        task = self.find_task(task_id)
        if task is None or task["status"] == new_status:
            return False
        self.alert = None
        try:
            self.client.tasks.update(task_id, {"status": new_status})
        except ApiError as e:
            logger.warning(f"Не удалось перенести задачу {task_id}: {e.message}")
            self.alert = MOVE_FAILED_ALERT
            self.load_tasks()
            return False
        self.load_tasks()
        return True
