from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import update
from sqlalchemy.future import select
from typing import Optional, List

from taskboard.core.timeutils import utcnow_iso
from taskboard.models.task import Task
from taskboard.models.user import User
from taskboard.schemas.user import UserCreate
from taskboard.security import get_password_hash


async def create_user(db: AsyncSession, user_in: UserCreate) -> User:
    """
    Создаёт нового пользователя в базе данных.
    """
    now = utcnow_iso()
    user = User(
        username=user_in.username,
        hashed_password=get_password_hash(user_in.password),
        email=user_in.email,
        full_name=user_in.full_name,
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def get_user_by_username(db: AsyncSession, username: str) -> Optional[User]:
    """
    Получает пользователя по username.
    """
    result = await db.execute(select(User).where(User.username == username))
    return result.scalars().first()


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    return await db.get(User, user_id)


async def get_users(db: AsyncSession) -> List[User]:
    result = await db.execute(select(User).order_by(User.username.asc()))
    return list(result.scalars().all())


async def update_user(db: AsyncSession, user_id: int, changes: dict) -> Optional[User]:
    """
    Частичное обновление данных пользователя. Пароль перехешируется.
    """
    user = await db.get(User, user_id)
    if user is None or not changes:
        return user
    changes = dict(changes)
    if "password" in changes:
        user.hashed_password = get_password_hash(changes.pop("password"))
    for key, value in changes.items():
        setattr(user, key, value)
    user.updated_at = utcnow_iso()
    await db.flush()
    await db.refresh(user)
    return user


async def delete_user(db: AsyncSession, user_id: int) -> bool:
    """
    Удаляет пользователя; назначенные ему задачи остаются без исполнителя.
    """
    user = await db.get(User, user_id)
    if user is None:
        return False
    await db.execute(
        update(Task).where(Task.assigned_to_user_id == user_id)
        .values({Task.assigned_to_user_id: None}))
    await db.delete(user)
    await db.flush()
    return True
