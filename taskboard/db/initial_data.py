import logging
from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from taskboard.core.config import settings
from taskboard.db.base import Base
from taskboard.schemas.user import UserCreate
from taskboard.services import user as user_service
import taskboard.models  # noqa: F401  регистрация моделей в Base.metadata

# Настройка логгера для инициализации данных
logger = logging.getLogger(__name__)

# Колонки, которых может не быть в файлах базы старых версий
TASK_COLUMN_UPGRADES = {
    "taskTypeId": "INTEGER REFERENCES task_types(id) ON DELETE SET NULL",
    "assignedToUserId": "INTEGER REFERENCES users(id) ON DELETE SET NULL",
}


def _missing_task_columns(sync_conn) -> list:
    columns = {column["name"]
               for column in inspect(sync_conn).get_columns("tasks")}
    return [name for name in TASK_COLUMN_UPGRADES if name not in columns]


async def create_schema(engine: AsyncEngine) -> list:
    """
    Создаёт таблицы и добавляет недостающие колонки. Повторный вызов ничего не меняет.
    Возвращает список добавленных колонок.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
        missing = await conn.run_sync(_missing_task_columns)
        for column in missing:
            await conn.execute(text(
                f"ALTER TABLE tasks ADD COLUMN {column} {TASK_COLUMN_UPGRADES[column]}"))
            logger.info(f"В таблицу tasks добавлена колонка {column}")
    return missing


async def init_db(db: AsyncSession) -> None:
    """
    Инициализация базы данных начальными данными.
    Создаёт администратора, если его нет.
    """
    user = await user_service.get_user_by_username(db, settings.FIRST_SUPERUSER_USERNAME)
    if not user:
        logger.info("Создание учётной записи администратора")
        user_in = UserCreate(
            username=settings.FIRST_SUPERUSER_USERNAME,
            password=settings.FIRST_SUPERUSER_PASSWORD,
            full_name=settings.FIRST_SUPERUSER_FULL_NAME,
        )
        # create_user сам фиксирует транзакцию
        await user_service.create_user(db, user_in)
        logger.info(
            f"Администратор создан (username: {settings.FIRST_SUPERUSER_USERNAME})")
    else:
        logger.info("Администратор уже существует, создание пропущено")
