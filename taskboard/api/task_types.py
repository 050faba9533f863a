import logging
import traceback
from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from typing import List
from taskboard.api.deps import parse_id
from taskboard.db import get_db
from taskboard.schemas.common import ErrorOut, MessageOut
from taskboard.schemas.task_type import TaskTypeCreate, TaskTypeOut, TaskTypeUpdate
from taskboard.services import ConflictError
from taskboard.services import task_type as task_type_service

# Настройка логгера
logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {400: {"model": ErrorOut}, 404: {"model": ErrorOut}}


@router.post(
    "",
    response_model=TaskTypeOut,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Создать тип задачи",
)
async def create_task_type_view(type_in: TaskTypeCreate, db: AsyncSession = Depends(get_db)):
    try:
        logger.info(f"Создание типа задачи: {type_in.name}")
        task_type = await task_type_service.create_task_type(db, type_in)
        return TaskTypeOut.model_validate(task_type)
    except ConflictError as e:
        logger.warning(f"Тип задачи не создан: {e}")
        await db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(
            f"Ошибка базы данных при создании типа задачи: {e}\n{traceback.format_exc()}")
        await db.rollback()
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "",
    response_model=List[TaskTypeOut],
    summary="Получить справочник типов задач",
)
async def list_task_types(db: AsyncSession = Depends(get_db)):
    try:
        task_types = await task_type_service.get_task_types(db)
        return [TaskTypeOut.model_validate(t) for t in task_types]
    except SQLAlchemyError as e:
        logger.error(
            f"Ошибка базы данных при получении типов задач: {e}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "/{type_id}",
    response_model=TaskTypeOut,
    responses=ERROR_RESPONSES,
    summary="Получить тип задачи по ID",
)
async def get_task_type_view(
    type_id: str = Path(..., description="ID типа задачи", examples=["1"]),
    db: AsyncSession = Depends(get_db)
):
    type_pk = parse_id(type_id, "task type")
    try:
        task_type = await task_type_service.get_task_type(db, type_pk)
    except SQLAlchemyError as e:
        logger.error(
            f"Ошибка базы данных при получении типа задачи: {e}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail="Internal server error")
    if not task_type:
        logger.warning(f"Тип задачи не найден: {type_pk}")
        raise HTTPException(status_code=404, detail="Task type not found")
    return TaskTypeOut.model_validate(task_type)


@router.put(
    "/{type_id}",
    response_model=TaskTypeOut,
    responses=ERROR_RESPONSES,
    summary="Обновить тип задачи",
    description="""
    Частичное обновление. Название можно сменить, если оно не занято другим типом.
    """
)
async def update_task_type_view(
    type_in: TaskTypeUpdate,
    type_id: str = Path(..., description="ID типа задачи", examples=["1"]),
    db: AsyncSession = Depends(get_db)
):
    type_pk = parse_id(type_id, "task type")
    try:
        task_type = await task_type_service.update_task_type(db, type_pk, type_in)
    except ConflictError as e:
        logger.warning(f"Тип задачи {type_pk} не обновлён: {e}")
        await db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(
            f"Ошибка базы данных при обновлении типа задачи: {e}\n{traceback.format_exc()}")
        await db.rollback()
        raise HTTPException(status_code=500, detail="Internal server error")
    if not task_type:
        logger.warning(f"Тип задачи для обновления не найден: {type_pk}")
        raise HTTPException(status_code=404, detail="Task type not found")
    return TaskTypeOut.model_validate(task_type)


@router.delete(
    "/{type_id}",
    response_model=MessageOut,
    responses=ERROR_RESPONSES,
    summary="Удалить тип задачи",
    description="""
    Удаление типа. У задач этого типа поле `taskTypeId` становится null.
    """
)
async def delete_task_type_view(
    type_id: str = Path(..., description="ID типа задачи", examples=["1"]),
    db: AsyncSession = Depends(get_db)
):
    type_pk = parse_id(type_id, "task type")
    try:
        deleted = await task_type_service.delete_task_type(db, type_pk)
    except SQLAlchemyError as e:
        logger.error(
            f"Ошибка базы данных при удалении типа задачи: {e}\n{traceback.format_exc()}")
        await db.rollback()
        raise HTTPException(status_code=500, detail="Internal server error")
    if not deleted:
        logger.warning(f"Тип задачи для удаления не найден: {type_pk}")
        raise HTTPException(status_code=404, detail="Task type not found")
    logger.info(f"Тип задачи {type_pk} удалён")
    return MessageOut(message="Task type deleted successfully")
