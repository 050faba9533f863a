from alembic import context
from sqlalchemy import pool
from logging.config import fileConfig
import asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from taskboard.core.config import settings
from taskboard.db.base import Base  # импорт базового класса
from taskboard.models import *  # noqa: F401,F403  импорт всех моделей для автогенерации


# this is the Alembic Config object, which provides
# access to the values within the .ini file in use.
config = context.config
# URL из настроек, если он не задан явно (например, в тестах)
if not config.get_main_option("sqlalchemy.url"):
    config.set_main_option('sqlalchemy.url', settings.database_url)

# Interpret the config file for Python logging.
# This line sets up loggers basically.
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    context.configure(
        connection=connection, target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        # SQLite не умеет ALTER COLUMN, изменения идут через batch-режим
        render_as_batch=True,
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_migrations_online():
    connectable = create_async_engine(
        config.get_main_option("sqlalchemy.url"),
        poolclass=pool.NullPool,
    )
    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)
    await connectable.dispose()

if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_migrations_online())
