import logging
import traceback
from fastapi import APIRouter, Depends, HTTPException, Query, Path, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from typing import List, Optional
from taskboard.api.deps import parse_id
from taskboard.db import get_db
from taskboard.models.task import TaskPriority, TaskStatus
from taskboard.schemas.common import ErrorOut, MessageOut
from taskboard.schemas.task import TaskCreate, TaskFilter, TaskOut, TaskUpdate
from taskboard.services import ReferenceNotFoundError
from taskboard.services import task as task_service

# Настройка логгера
logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {400: {"model": ErrorOut}, 404: {"model": ErrorOut}}


def reference_error_response(exc: ReferenceNotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "error": "Validation failed",
            "details": [{"field": exc.field, "message": exc.message}],
        },
    )

# --- Создать новую задачу ---


@router.post(
    "",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Создать новую задачу",
    description="""
    Создание новой задачи. Если статус не передан, задача попадает в колонку "To Do".
    """
)
async def create_task_view(task_in: TaskCreate, db: AsyncSession = Depends(get_db)):
    try:
        logger.info(f"Создание задачи: {task_in.title}")
        task = await task_service.create_task(db, task_in)
        result = TaskOut.model_validate(task)
        logger.info(f"Задача {result.id} успешно создана")
        return result
    except ReferenceNotFoundError as e:
        logger.warning(f"Задача не создана: {e.message}")
        await db.rollback()
        return reference_error_response(e)
    except SQLAlchemyError as e:
        logger.error(
            f"Ошибка базы данных при создании задачи: {e}\n{traceback.format_exc()}")
        await db.rollback()
        raise HTTPException(status_code=500, detail="Internal server error")

# --- Получить список задач ---


@router.get(
    "",
    response_model=List[TaskOut],
    responses={400: {"model": ErrorOut}},
    summary="Получить список задач",
    description="""
    Список задач, новые первыми. Фильтры объединяются через AND:
    - `status` - статус задачи
    - `priority` - приоритет
    - `date` - календарный день срока выполнения (YYYY-MM-DD)
    """
)
async def list_tasks(
    task_status: Optional[TaskStatus] = Query(
        None, alias="status", description="Фильтр по статусу", examples=["To Do"]),
    priority: Optional[TaskPriority] = Query(
        None, description="Фильтр по приоритету", examples=["High"]),
    date: Optional[str] = Query(
        None, description="Фильтр по дню срока выполнения", examples=["2024-01-15"]),
    db: AsyncSession = Depends(get_db)
):
    filters = TaskFilter(status=task_status, priority=priority, date=date)
    try:
        logger.info(f"Запрошен список задач: {filters.model_dump(exclude_none=True)}")
        tasks = await task_service.get_tasks(db, filters)
        return [TaskOut.model_validate(task) for task in tasks]
    except SQLAlchemyError as e:
        logger.error(
            f"Ошибка базы данных при получении списка задач: {e}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail="Internal server error")

# --- Получить задачу по ID ---


@router.get(
    "/{task_id}",
    response_model=TaskOut,
    responses=ERROR_RESPONSES,
    summary="Получить задачу по ID",
)
async def get_task_view(
    task_id: str = Path(..., description="ID задачи", examples=["1"]),
    db: AsyncSession = Depends(get_db)
):
    task_pk = parse_id(task_id, "task")
    try:
        task = await task_service.get_task(db, task_pk)
    except SQLAlchemyError as e:
        logger.error(
            f"Ошибка базы данных при получении задачи: {e}\n{traceback.format_exc()}")
        raise HTTPException(status_code=500, detail="Internal server error")
    if not task:
        logger.warning(f"Задача не найдена: {task_pk}")
        raise HTTPException(status_code=404, detail="Task not found")
    return TaskOut.model_validate(task)

# --- Обновить задачу ---


@router.put(
    "/{task_id}",
    response_model=TaskOut,
    responses=ERROR_RESPONSES,
    summary="Обновить задачу",
    description="""
    Частичное обновление: меняются только переданные поля, остальные сохраняют прежние значения.
    Доска при переносе карточки отправляет только `status`.
    """
)
async def update_task_view(
    task_in: TaskUpdate,
    task_id: str = Path(..., description="ID задачи", examples=["1"]),
    db: AsyncSession = Depends(get_db)
):
    task_pk = parse_id(task_id, "task")
    try:
        logger.info(
            f"Обновление задачи {task_pk}: {sorted(task_in.model_fields_set)}")
        task = await task_service.update_task(db, task_pk, task_in)
    except ReferenceNotFoundError as e:
        logger.warning(f"Задача {task_pk} не обновлена: {e.message}")
        await db.rollback()
        return reference_error_response(e)
    except SQLAlchemyError as e:
        logger.error(
            f"Ошибка базы данных при обновлении задачи: {e}\n{traceback.format_exc()}")
        await db.rollback()
        raise HTTPException(status_code=500, detail="Internal server error")
    if not task:
        logger.warning(f"Задача для обновления не найдена: {task_pk}")
        raise HTTPException(status_code=404, detail="Task not found")
    return TaskOut.model_validate(task)

# --- Удалить задачу ---


@router.delete(
    "/{task_id}",
    response_model=MessageOut,
    responses=ERROR_RESPONSES,
    summary="Удалить задачу",
)
async def delete_task_view(
    task_id: str = Path(..., description="ID задачи", examples=["1"]),
    db: AsyncSession = Depends(get_db)
):
    task_pk = parse_id(task_id, "task")
    try:
        deleted = await task_service.delete_task(db, task_pk)
    except SQLAlchemyError as e:
        logger.error(
            f"Ошибка базы данных при удалении задачи: {e}\n{traceback.format_exc()}")
        await db.rollback()
        raise HTTPException(status_code=500, detail="Internal server error")
    if not deleted:
        logger.warning(f"Задача для удаления не найдена: {task_pk}")
        raise HTTPException(status_code=404, detail="Task not found")
    logger.info(f"Задача {task_pk} удалена")
    return MessageOut(message="Task deleted successfully")
