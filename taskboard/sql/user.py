from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.timeutils import utcnow_iso
from taskboard.schemas.user import UserCreate
from taskboard.security import get_password_hash
from taskboard.sql import (Row, build_set_clause, execute_rowcount, fetch_all,
                           fetch_one, insert_returning_id)

UPDATABLE_COLUMNS = {
    "username": "username",
    "hashed_password": "password",
    "email": "email",
    "full_name": "fullName",
}

SELECT_USERS = """
    SELECT id, username, password AS hashed_password, email, fullName AS full_name,
           createdAt AS created_at, updatedAt AS updated_at
    FROM users
"""

SELECT_BY_ID = SELECT_USERS + " WHERE id = :id"


async def create_user(db: AsyncSession, user_in: UserCreate) -> Row:
    now = utcnow_iso()
    user_id = await insert_returning_id(
        db,
        """
        INSERT INTO users (username, password, email, fullName, createdAt, updatedAt)
        VALUES (:username, :hashed_password, :email, :full_name, :created_at, :updated_at)
        """,
        {
            "username": user_in.username,
            "hashed_password": get_password_hash(user_in.password),
            "email": user_in.email,
            "full_name": user_in.full_name,
            "created_at": now,
            "updated_at": now,
        },
    )
    return await fetch_one(db, SELECT_BY_ID, {"id": user_id})


async def get_users(db: AsyncSession) -> List[Row]:
    return await fetch_all(db, SELECT_USERS + " ORDER BY username ASC")


async def get_user(db: AsyncSession, user_id: int) -> Optional[Row]:
    return await fetch_one(db, SELECT_BY_ID, {"id": user_id})


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[Row]:
    return await fetch_one(db, SELECT_USERS + " WHERE username = :username", {"username": username})


async def update_user(db: AsyncSession, user_id: int, changes: dict) -> Optional[Row]:
    if not changes:
        return await get_user(db, user_id)
    changes = dict(changes)
    if "password" in changes:
        changes["hashed_password"] = get_password_hash(changes.pop("password"))
    set_clause = build_set_clause(changes, UPDATABLE_COLUMNS)
    params = dict(changes, updated_at=utcnow_iso(), id=user_id)
    await execute_rowcount(
        db, f"UPDATE users SET {set_clause}, updatedAt = :updated_at WHERE id = :id", params)
    return await get_user(db, user_id)


async def delete_user(db: AsyncSession, user_id: int) -> bool:
    # в старых файлах базы у assignedToUserId нет внешнего ключа
    await execute_rowcount(
        db, "UPDATE tasks SET assignedToUserId = NULL WHERE assignedToUserId = :id", {"id": user_id})
    deleted = await execute_rowcount(db, "DELETE FROM users WHERE id = :id", {"id": user_id})
    return deleted > 0
