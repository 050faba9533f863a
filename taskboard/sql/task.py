from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.timeutils import utcnow_iso
from taskboard.models.task import TaskStatus
from taskboard.schemas.task import TaskCreate, TaskFilter
from taskboard.sql import (Row, build_set_clause, execute_rowcount, fetch_all,
                           fetch_one, insert_returning_id)

UPDATABLE_COLUMNS = {
    "title": "title",
    "description": "description",
    "status": "status",
    "priority": "priority",
    "task_type_id": "taskTypeId",
    "assigned_to_user_id": "assignedToUserId",
    "due_date": "dueDate",
}

SELECT_TASKS = """
    SELECT id, title, description, status, priority,
           taskTypeId AS task_type_id, assignedToUserId AS assigned_to_user_id,
           dueDate AS due_date, createdAt AS created_at, updatedAt AS updated_at
    FROM tasks
"""

SELECT_BY_ID = SELECT_TASKS + " WHERE id = :id"


async def create_task(db: AsyncSession, task_in: TaskCreate) -> Row:
    now = utcnow_iso()
    task_id = await insert_returning_id(
        db,
        """
        INSERT INTO tasks (title, description, status, priority, taskTypeId,
                           assignedToUserId, dueDate, createdAt, updatedAt)
        VALUES (:title, :description, :status, :priority, :task_type_id,
                :assigned_to_user_id, :due_date, :created_at, :updated_at)
        """,
        {
            "title": task_in.title,
            "description": task_in.description,
            "status": (task_in.status or TaskStatus.todo).value,
            "priority": task_in.priority.value,
            "task_type_id": task_in.task_type_id,
            "assigned_to_user_id": task_in.assigned_to_user_id,
            "due_date": task_in.due_date,
            "created_at": now,
            "updated_at": now,
        },
    )
    return await fetch_one(db, SELECT_BY_ID, {"id": task_id})


async def get_tasks(db: AsyncSession, filters: Optional[TaskFilter] = None) -> List[Row]:
    sql = SELECT_TASKS + " WHERE 1=1"
    params = {}
    if filters is not None:
        if filters.status:
            sql += " AND status = :status"
            params["status"] = filters.status.value
        if filters.priority:
            sql += " AND priority = :priority"
            params["priority"] = filters.priority.value
        if filters.date:
            sql += " AND DATE(dueDate) = DATE(:date)"
            params["date"] = filters.date
    sql += " ORDER BY createdAt DESC, id DESC"
    return await fetch_all(db, sql, params)


async def get_task(db: AsyncSession, task_id: int) -> Optional[Row]:
    return await fetch_one(db, SELECT_BY_ID, {"id": task_id})


async def update_task(db: AsyncSession, task_id: int, changes: dict) -> Optional[Row]:
    if not changes:
        return await get_task(db, task_id)
    set_clause = build_set_clause(changes, UPDATABLE_COLUMNS)
    params = dict(changes, updated_at=utcnow_iso(), id=task_id)
    await execute_rowcount(
        db, f"UPDATE tasks SET {set_clause}, updatedAt = :updated_at WHERE id = :id", params)
    return await get_task(db, task_id)


async def delete_task(db: AsyncSession, task_id: int) -> bool:
    deleted = await execute_rowcount(db, "DELETE FROM tasks WHERE id = :id", {"id": task_id})
    return deleted > 0
