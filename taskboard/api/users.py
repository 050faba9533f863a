from fastapi import APIRouter, Depends, HTTPException, status, Path
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from typing import List
from taskboard.api.deps import parse_id
from taskboard.db import get_db
from taskboard.schemas.common import ErrorOut, MessageOut
from taskboard.schemas.user import UserOut, UserCreate, UserUpdate
from taskboard.services import ConflictError
from taskboard.services import user as user_service
import logging
import traceback

# Настройка логгера
logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {400: {"model": ErrorOut}, 404: {"model": ErrorOut}}

# --- Создать нового пользователя ---


@router.post(
    "",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Создать нового пользователя",
    description="""
    Создание нового пользователя. Если пользователь с таким username уже существует, будет возвращена ошибка.
    """
)
async def create_user_view(user_in: UserCreate, db: AsyncSession = Depends(get_db)):
    try:
        logger.info(f"Создание пользователя: {user_in.username}")
        user = await user_service.create_user(db, user_in)
        logger.info(f"Пользователь {user_in.username} успешно создан")
        return UserOut.model_validate(user)
    except ConflictError as e:
        logger.warning(
            f"Попытка создать уже существующего пользователя: {user_in.username}")
        await db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(
            f"Ошибка базы данных при создании пользователя: {e}\n{traceback.format_exc()}")
        await db.rollback()
        raise HTTPException(status_code=500, detail="Internal server error")

# --- Получить список пользователей ---


@router.get(
    "",
    response_model=List[UserOut],
    summary="Получить список пользователей",
)
async def list_users(db: AsyncSession = Depends(get_db)):
    try:
        logger.info("Запрошен список всех пользователей")
        users = await user_service.get_users(db)
        return [UserOut.model_validate(u) for u in users]
    except SQLAlchemyError as e:
        logger.error(
            f"Ошибка базы данных при получении списка пользователей: {e}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail="Internal server error")

# --- Получить пользователя по ID ---


@router.get(
    "/{user_id}",
    response_model=UserOut,
    responses=ERROR_RESPONSES,
    summary="Получить пользователя по ID",
)
async def get_user_view(
    user_id: str = Path(..., description="ID пользователя", examples=["1"]),
    db: AsyncSession = Depends(get_db)
):
    user_pk = parse_id(user_id, "user")
    try:
        user = await user_service.get_user(db, user_pk)
    except SQLAlchemyError as e:
        logger.error(
            f"Ошибка базы данных при получении пользователя: {e}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail="Internal server error")
    if not user:
        logger.warning(f"Пользователь не найден: {user_pk}")
        raise HTTPException(status_code=404, detail="User not found")
    return UserOut.model_validate(user)

# --- Обновить пользователя ---


@router.put(
    "/{user_id}",
    response_model=UserOut,
    responses=ERROR_RESPONSES,
    summary="Частично обновить пользователя",
    description="""
    Частичное обновление информации о пользователе. Можно изменить любое поле, включая username (если не занят).
    """
)
async def update_user_view(
    user_in: UserUpdate,
    user_id: str = Path(..., description="ID пользователя", examples=["1"]),
    db: AsyncSession = Depends(get_db)
):
    user_pk = parse_id(user_id, "user")
    try:
        logger.info(f"Частичное обновление пользователя: {user_pk}")
        user = await user_service.update_user(db, user_pk, user_in)
    except ConflictError as e:
        logger.warning(f"Ошибка при смене username: {e}")
        await db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(
            f"Ошибка базы данных при обновлении пользователя: {e}\n{traceback.format_exc()}")
        await db.rollback()
        raise HTTPException(status_code=500, detail="Internal server error")
    if not user:
        logger.warning(f"Пользователь для обновления не найден: {user_pk}")
        raise HTTPException(status_code=404, detail="User not found")
    return UserOut.model_validate(user)

# --- Удалить пользователя ---


@router.delete(
    "/{user_id}",
    response_model=MessageOut,
    responses=ERROR_RESPONSES,
    summary="Удалить пользователя",
)
async def delete_user_view(
    user_id: str = Path(..., description="ID пользователя", examples=["1"]),
    db: AsyncSession = Depends(get_db)
):
    user_pk = parse_id(user_id, "user")
    try:
        deleted = await user_service.delete_user(db, user_pk)
    except SQLAlchemyError as e:
        logger.error(
            f"Ошибка базы данных при удалении пользователя: {e}\n{traceback.format_exc()}")
        await db.rollback()
        raise HTTPException(status_code=500, detail="Internal server error")
    if not deleted:
        logger.warning(f"Пользователь для удаления не найден: {user_pk}")
        raise HTTPException(status_code=404, detail="User not found")
    logger.info(f"Пользователь {user_pk} успешно удален")
    return MessageOut(message="User deleted successfully")
