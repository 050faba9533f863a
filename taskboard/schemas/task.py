from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from taskboard.models.task import TaskPriority, TaskStatus
from taskboard.schemas.common import (MAX_ID, CamelModel, check_iso_date,
                                      empty_to_none, reject_null)


# --- Схемы задачи ---
class TaskBase(CamelModel):
    title: str = Field(..., min_length=1, max_length=200,
                       description="Заголовок задачи", examples=["Настроить CI"])
    description: str = Field(..., min_length=1, max_length=1000,
                             description="Описание задачи", examples=["Добавить pytest в пайплайн"])
    status: TaskStatus = Field(
        TaskStatus.todo, description="Статус (колонка доски)", examples=["To Do"])
    priority: TaskPriority = Field(...,
                                   description="Приоритет", examples=["Medium"])
    task_type_id: Optional[int] = Field(
        None, gt=0, le=MAX_ID, description="ID типа задачи", examples=[1])
    assigned_to_user_id: Optional[int] = Field(
        None, gt=0, le=MAX_ID, description="ID исполнителя", examples=[1])
    due_date: Optional[str] = Field(
        None, description="Срок выполнения (ISO-8601)", examples=["2024-01-15"])

    @field_validator("due_date", mode="before")
    @classmethod
    def normalize_due_date(cls, value):
        return empty_to_none(value)

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, value):
        return check_iso_date(value)


class TaskCreate(TaskBase):
    pass


class TaskUpdate(CamelModel):
    """
    Частичное обновление: меняются только переданные поля.
    """
    title: Optional[str] = Field(
        None, min_length=1, max_length=200, description="Заголовок задачи")
    description: Optional[str] = Field(
        None, min_length=1, max_length=1000, description="Описание задачи")
    status: Optional[TaskStatus] = Field(None, description="Статус")
    priority: Optional[TaskPriority] = Field(None, description="Приоритет")
    task_type_id: Optional[int] = Field(
        None, gt=0, le=MAX_ID, description="ID типа задачи (null снимает тип)")
    assigned_to_user_id: Optional[int] = Field(
        None, gt=0, le=MAX_ID, description="ID исполнителя (null снимает исполнителя)")
    due_date: Optional[str] = Field(
        None, description="Срок выполнения (ISO-8601, пустая строка = null)")

    @field_validator("title", "description", "status", "priority", mode="before")
    @classmethod
    def not_null(cls, value, info):
        return reject_null(value, info.field_name.capitalize())

    @field_validator("due_date", mode="before")
    @classmethod
    def normalize_due_date(cls, value):
        return empty_to_none(value)

    @field_validator("due_date")
    @classmethod
    def validate_due_date(cls, value):
        return check_iso_date(value)

    def changes(self) -> dict:
        """Только явно переданные поля, значения перечислений как строки."""
        return self.model_dump(exclude_unset=True, mode="json")


class TaskFilter(CamelModel):
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    # Календарный день срока выполнения
    date: Optional[str] = None

    @field_validator("date")
    @classmethod
    def validate_date(cls, value):
        return check_iso_date(empty_to_none(value))


class TaskOut(CamelModel):
    id: int = Field(..., description="ID задачи", examples=[1])
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    task_type_id: Optional[int] = None
    assigned_to_user_id: Optional[int] = None
    due_date: Optional[str] = None
    created_at: datetime = Field(..., description="Дата создания (UTC)")
    updated_at: datetime = Field(...,
                                 description="Дата последнего изменения (UTC)")
