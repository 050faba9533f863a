from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.crud import task as crud_task
from taskboard.schemas.task import TaskCreate, TaskFilter, TaskUpdate
from taskboard.services import ReferenceNotFoundError, task_type, use_orm, user
from taskboard.sql import task as sql_task


def _store():
    return crud_task if use_orm() else sql_task


async def _check_references(db: AsyncSession, task_type_id: Optional[int], assigned_to_user_id: Optional[int]) -> None:
    """
    Внешние ключи должны указывать на существующие записи или быть null.
    """
    if task_type_id is not None and await task_type.get_task_type(db, task_type_id) is None:
        raise ReferenceNotFoundError("taskTypeId", "Task type not found")
    if assigned_to_user_id is not None and await user.get_user(db, assigned_to_user_id) is None:
        raise ReferenceNotFoundError("assignedToUserId", "User not found")


async def create_task(db: AsyncSession, task_in: TaskCreate) -> Any:
    await _check_references(db, task_in.task_type_id, task_in.assigned_to_user_id)
    task = await _store().create_task(db, task_in)
    await db.commit()
    return task


async def get_tasks(db: AsyncSession, filters: Optional[TaskFilter] = None) -> List[Any]:
    return await _store().get_tasks(db, filters)


async def get_task(db: AsyncSession, task_id: int) -> Optional[Any]:
    return await _store().get_task(db, task_id)


async def update_task(db: AsyncSession, task_id: int, task_in: TaskUpdate) -> Optional[Any]:
    """
    Частичное обновление задачи. None, если задачи нет.
    """
    store = _store()
    if await store.get_task(db, task_id) is None:
        return None
    changes = task_in.changes()
    await _check_references(db, changes.get("task_type_id"), changes.get("assigned_to_user_id"))
    task = await store.update_task(db, task_id, changes)
    await db.commit()
    return task


async def delete_task(db: AsyncSession, task_id: int) -> bool:
    deleted = await _store().delete_task(db, task_id)
    await db.commit()
    return deleted
