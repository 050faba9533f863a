from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from taskboard.core.timeutils import utcnow_iso
from taskboard.db.base import Base

# --- Модель пользователя ---


class User(Base):
    __tablename__ = "users"

    # Уникальный идентификатор пользователя
    id = Column(Integer, primary_key=True, autoincrement=True)
    # Логин пользователя
    username = Column(String(50), unique=True, nullable=False)
    # Хэш пароля; колонка называется "password", как в ранних версиях базы
    hashed_password = Column("password", String, nullable=False)
    email = Column(String(254), nullable=True)
    # Полное имя
    full_name = Column("fullName", String(100), nullable=True)
    created_at = Column("createdAt", String(32), nullable=False, default=utcnow_iso)
    updated_at = Column("updatedAt", String(32), nullable=False, default=utcnow_iso)

    # --- Связи ---
    tasks = relationship("Task", back_populates="assignee",
                         passive_deletes=True)  # Задачи, назначенные пользователю
