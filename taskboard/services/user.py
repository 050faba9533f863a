from typing import Any, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.crud import user as crud_user
from taskboard.schemas.user import UserCreate, UserUpdate
from taskboard.services import ConflictError, use_orm
from taskboard.sql import user as sql_user


def _store():
    return crud_user if use_orm() else sql_user


async def _ensure_unique_username(db: AsyncSession, username: str, own_id: Optional[int] = None) -> None:
    existing = await _store().get_user_by_username(db, username)
    if existing is None:
        return
    existing_id = existing["id"] if isinstance(existing, dict) else existing.id
    if existing_id != own_id:
        raise ConflictError("User with this username already exists")


async def create_user(db: AsyncSession, user_in: UserCreate) -> Any:
    await _ensure_unique_username(db, user_in.username)
    try:
        user = await _store().create_user(db, user_in)
        await db.commit()
    except IntegrityError as e:
        # параллельный запрос успел занять тот же логин
        await db.rollback()
        raise ConflictError("User with this username already exists") from e
    return user


async def get_users(db: AsyncSession) -> List[Any]:
    return await _store().get_users(db)


async def get_user(db: AsyncSession, user_id: int) -> Optional[Any]:
    return await _store().get_user(db, user_id)


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[Any]:
    return await _store().get_user_by_username(db, username)


async def update_user(db: AsyncSession, user_id: int, user_in: UserUpdate) -> Optional[Any]:
    store = _store()
    if await store.get_user(db, user_id) is None:
        return None
    changes = user_in.changes()
    if "username" in changes:
        await _ensure_unique_username(db, changes["username"], own_id=user_id)
    try:
        user = await store.update_user(db, user_id, changes)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise ConflictError("User with this username already exists") from e
    return user


async def delete_user(db: AsyncSession, user_id: int) -> bool:
    deleted = await _store().delete_user(db, user_id)
    await db.commit()
    return deleted
