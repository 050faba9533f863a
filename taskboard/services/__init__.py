"""
Сервисный слой: выбирает хранилище (SQL или ORM), управляет транзакцией
и проверяет ссылки между сущностями до записи в базу.
"""
from taskboard.core.config import settings


class ConflictError(ValueError):
    """Нарушение уникальности (логин, название типа)."""


class ReferenceNotFoundError(ValueError):
    """Ссылка на несуществующую запись (тип задачи, исполнитель)."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


def use_orm() -> bool:
    return settings.STORAGE_BACKEND.lower() == "orm"
