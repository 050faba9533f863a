from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import update
from sqlalchemy.future import select
from typing import Optional, List

from taskboard.core.timeutils import utcnow_iso
from taskboard.models.task import Task
from taskboard.models.task_type import TaskType
from taskboard.schemas.task_type import TaskTypeCreate

# --- CRUD-операции для справочника типов задач (ORM) ---


async def create_task_type(db: AsyncSession, type_in: TaskTypeCreate) -> TaskType:
    now = utcnow_iso()
    task_type = TaskType(
        name=type_in.name,
        description=type_in.description,
        color=type_in.color,
        created_at=now,
        updated_at=now,
    )
    db.add(task_type)
    await db.flush()
    await db.refresh(task_type)
    return task_type


async def get_task_types(db: AsyncSession) -> List[TaskType]:
    result = await db.execute(select(TaskType).order_by(TaskType.name.asc()))
    return list(result.scalars().all())


async def get_task_type(db: AsyncSession, type_id: int) -> Optional[TaskType]:
    return await db.get(TaskType, type_id)


async def get_task_type_by_name(db: AsyncSession, name: str) -> Optional[TaskType]:
    result = await db.execute(select(TaskType).where(TaskType.name == name))
    return result.scalars().first()


async def update_task_type(db: AsyncSession, type_id: int, changes: dict) -> Optional[TaskType]:
    """
    Частичное обновление типа задачи.
    """
    task_type = await db.get(TaskType, type_id)
    if task_type is None or not changes:
        return task_type
    for key, value in changes.items():
        setattr(task_type, key, value)
    task_type.updated_at = utcnow_iso()
    await db.flush()
    await db.refresh(task_type)
    return task_type


async def delete_task_type(db: AsyncSession, type_id: int) -> bool:
    """
    Удаляет тип; у задач этого типа ссылка обнуляется.
    """
    task_type = await db.get(TaskType, type_id)
    if task_type is None:
        return False
    # в старых файлах базы у taskTypeId нет внешнего ключа
    await db.execute(
        update(Task).where(Task.task_type_id == type_id).values({Task.task_type_id: None}))
    await db.delete(task_type)
    await db.flush()
    return True
