from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func
from typing import Optional, List

from taskboard.core.timeutils import utcnow_iso
from taskboard.models.task import Task, TaskStatus
from taskboard.schemas.task import TaskCreate, TaskFilter

# --- CRUD-операции для задач (ORM) ---


async def create_task(db: AsyncSession, task_in: TaskCreate) -> Task:
    """
    Создаёт задачу и перечитывает её из базы.
    """
    now = utcnow_iso()
    task = Task(
        title=task_in.title,
        description=task_in.description,
        status=(task_in.status or TaskStatus.todo).value,
        priority=task_in.priority.value,
        task_type_id=task_in.task_type_id,
        assigned_to_user_id=task_in.assigned_to_user_id,
        due_date=task_in.due_date,
        created_at=now,
        updated_at=now,
    )
    db.add(task)
    await db.flush()
    await db.refresh(task)
    return task


async def get_tasks(db: AsyncSession, filters: Optional[TaskFilter] = None) -> List[Task]:
    """
    Список задач с необязательными фильтрами (объединяются через AND).
    """
    query = select(Task)
    if filters is not None:
        if filters.status:
            query = query.where(Task.status == filters.status.value)
        if filters.priority:
            query = query.where(Task.priority == filters.priority.value)
        if filters.date:
            # Совпадение по календарному дню срока выполнения
            query = query.where(func.date(Task.due_date)
                                == func.date(filters.date))
    query = query.order_by(Task.created_at.desc(), Task.id.desc())
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_task(db: AsyncSession, task_id: int) -> Optional[Task]:
    return await db.get(Task, task_id)


async def update_task(db: AsyncSession, task_id: int, changes: dict) -> Optional[Task]:
    """
    Частичное обновление. Пустой набор изменений возвращает задачу без изменений.
    """
    task = await db.get(Task, task_id)
    if task is None or not changes:
        return task
    for key, value in changes.items():
        setattr(task, key, value)
    task.updated_at = utcnow_iso()
    await db.flush()
    await db.refresh(task)
    return task


async def delete_task(db: AsyncSession, task_id: int) -> bool:
    task = await db.get(Task, task_id)
    if task is None:
        return False
    await db.delete(task)
    await db.flush()
    return True
