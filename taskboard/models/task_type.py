from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from taskboard.core.timeutils import utcnow_iso
from taskboard.db.base import Base


class TaskType(Base):
    __tablename__ = "task_types"
    id = Column(Integer, primary_key=True, autoincrement=True)
    # уникальное название (например, "Bug")
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    # цвет карточки на доске, "#RRGGBB"
    color = Column(String(7), nullable=True)
    created_at = Column("createdAt", String(32), nullable=False, default=utcnow_iso)
    updated_at = Column("updatedAt", String(32), nullable=False, default=utcnow_iso)

    tasks = relationship("Task", back_populates="task_type",
                         passive_deletes=True)
