from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.timeutils import utcnow_iso
from taskboard.schemas.task_type import TaskTypeCreate
from taskboard.sql import (Row, build_set_clause, execute_rowcount, fetch_all,
                           fetch_one, insert_returning_id)

UPDATABLE_COLUMNS = {"name": "name", "description": "description", "color": "color"}

SELECT_TASK_TYPES = """
    SELECT id, name, description, color,
           createdAt AS created_at, updatedAt AS updated_at
    FROM task_types
"""

SELECT_BY_ID = SELECT_TASK_TYPES + " WHERE id = :id"


async def create_task_type(db: AsyncSession, type_in: TaskTypeCreate) -> Row:
    now = utcnow_iso()
    type_id = await insert_returning_id(
        db,
        """
        INSERT INTO task_types (name, description, color, createdAt, updatedAt)
        VALUES (:name, :description, :color, :created_at, :updated_at)
        """,
        {
            "name": type_in.name,
            "description": type_in.description,
            "color": type_in.color,
            "created_at": now,
            "updated_at": now,
        },
    )
    return await fetch_one(db, SELECT_BY_ID, {"id": type_id})


async def get_task_types(db: AsyncSession) -> List[Row]:
    return await fetch_all(db, SELECT_TASK_TYPES + " ORDER BY name ASC")


async def get_task_type(db: AsyncSession, type_id: int) -> Optional[Row]:
    return await fetch_one(db, SELECT_BY_ID, {"id": type_id})


async def get_task_type_by_name(db: AsyncSession, name: str) -> Optional[Row]:
    return await fetch_one(db, SELECT_TASK_TYPES + " WHERE name = :name", {"name": name})


async def update_task_type(db: AsyncSession, type_id: int, changes: dict) -> Optional[Row]:
    if not changes:
        return await get_task_type(db, type_id)
    set_clause = build_set_clause(changes, UPDATABLE_COLUMNS)
    params = dict(changes, updated_at=utcnow_iso(), id=type_id)
    await execute_rowcount(
        db, f"UPDATE task_types SET {set_clause}, updatedAt = :updated_at WHERE id = :id", params)
    return await get_task_type(db, type_id)


async def delete_task_type(db: AsyncSession, type_id: int) -> bool:
    # в старых файлах базы у taskTypeId нет внешнего ключа, ссылки снимаем сами
    await execute_rowcount(
        db, "UPDATE tasks SET taskTypeId = NULL WHERE taskTypeId = :id", {"id": type_id})
    deleted = await execute_rowcount(db, "DELETE FROM task_types WHERE id = :id", {"id": type_id})
    return deleted > 0
