import enum

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from taskboard.core.timeutils import utcnow_iso
from taskboard.db.base import Base

# --- Перечисление статусов задачи (колонки доски) ---


class TaskStatus(str, enum.Enum):
    todo = "To Do"               # К выполнению
    in_progress = "In Progress"  # В работе
    review = "Review"            # На проверке
    done = "Done"                # Готово

# --- Перечисление приоритетов задачи ---


class TaskPriority(str, enum.Enum):
    low = "Low"
    medium = "Medium"
    high = "High"

# --- Модель задачи ---


class Task(Base):
    __tablename__ = "tasks"
    # Уникальный идентификатор задачи
    id = Column(Integer, primary_key=True, autoincrement=True)
    # Заголовок задачи
    title = Column(String(200), nullable=False)
    # Описание задачи
    description = Column(Text, nullable=False)
    # Имена колонок в camelCase совпадают с файлами базы ранних версий
    # Статус хранится строкой, чтобы SQL- и ORM-слои видели одинаковые значения
    status = Column(String(16), nullable=False,
                    default=TaskStatus.todo.value)
    priority = Column(String(16), nullable=False)
    task_type_id = Column("taskTypeId", Integer, ForeignKey(
        "task_types.id", ondelete="SET NULL"), nullable=True)  # ID типа задачи
    assigned_to_user_id = Column("assignedToUserId", Integer, ForeignKey(
        "users.id", ondelete="SET NULL"), nullable=True)       # ID исполнителя
    # Срок выполнения (ISO-8601 строка)
    due_date = Column("dueDate", String(64), nullable=True)
    created_at = Column("createdAt", String(32), nullable=False, default=utcnow_iso)
    updated_at = Column("updatedAt", String(32), nullable=False, default=utcnow_iso)
    # --- Связи ---
    task_type = relationship("TaskType", back_populates="tasks")
    assignee = relationship("User", back_populates="tasks")
