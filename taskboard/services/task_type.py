from typing import Any, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.crud import task_type as crud_task_type
from taskboard.schemas.task_type import TaskTypeCreate, TaskTypeUpdate
from taskboard.services import ConflictError, use_orm
from taskboard.sql import task_type as sql_task_type


def _store():
    return crud_task_type if use_orm() else sql_task_type


async def _ensure_unique_name(db: AsyncSession, name: str, own_id: Optional[int] = None) -> None:
    existing = await _store().get_task_type_by_name(db, name)
    if existing is None:
        return
    existing_id = existing["id"] if isinstance(existing, dict) else existing.id
    if existing_id != own_id:
        raise ConflictError("Task type with this name already exists")


async def create_task_type(db: AsyncSession, type_in: TaskTypeCreate) -> Any:
    await _ensure_unique_name(db, type_in.name)
    try:
        task_type = await _store().create_task_type(db, type_in)
        await db.commit()
    except IntegrityError as e:
        # параллельный запрос успел записать то же название
        await db.rollback()
        raise ConflictError("Task type with this name already exists") from e
    return task_type


async def get_task_types(db: AsyncSession) -> List[Any]:
    return await _store().get_task_types(db)


async def get_task_type(db: AsyncSession, type_id: int) -> Optional[Any]:
    return await _store().get_task_type(db, type_id)


async def update_task_type(db: AsyncSession, type_id: int, type_in: TaskTypeUpdate) -> Optional[Any]:
    """
    None, если типа с таким ID нет.
    """
    store = _store()
    if await store.get_task_type(db, type_id) is None:
        return None
    changes = type_in.changes()
    if "name" in changes:
        await _ensure_unique_name(db, changes["name"], own_id=type_id)
    try:
        task_type = await store.update_task_type(db, type_id, changes)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError("Task type with this name already exists") from e
    return task_type


async def delete_task_type(db: AsyncSession, type_id: int) -> bool:
    deleted = await _store().delete_task_type(db, type_id)
    await db.commit()
    return deleted
