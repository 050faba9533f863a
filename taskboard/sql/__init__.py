"""
Слой хранения на параметризованных SQL-запросах.

Функции повторяют сигнатуры taskboard.crud и работают с теми же таблицами,
но возвращают строки в виде словарей. Колонки таблиц названы в camelCase,
запросы переименовывают их в snake_case через AS, как поля моделей.
"""
from typing import Any, Dict, List, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

Row = Dict[str, Any]


async def fetch_one(db: AsyncSession, sql: str, params: Optional[dict] = None) -> Optional[Row]:
    result = await db.execute(text(sql), params or {})
    row = result.mappings().first()
    return dict(row) if row is not None else None


async def fetch_all(db: AsyncSession, sql: str, params: Optional[dict] = None) -> List[Row]:
    result = await db.execute(text(sql), params or {})
    return [dict(row) for row in result.mappings().all()]


async def insert_returning_id(db: AsyncSession, sql: str, params: dict) -> int:
    result = await db.execute(text(sql), params)
    return result.lastrowid


async def execute_rowcount(db: AsyncSession, sql: str, params: dict) -> int:
    result = await db.execute(text(sql), params)
    return result.rowcount


def build_set_clause(changes: Dict[str, Any], columns: Dict[str, str]) -> str:
    """
    Строит "column = :field, ..." только для разрешённых полей.
    columns сопоставляет поле модели с колонкой таблицы; имена колонок берутся
    из этого белого списка, значения идут параметрами.
    """
    unknown = set(changes) - set(columns)
    if unknown:
        raise ValueError(f"Неизвестные колонки: {sorted(unknown)}")
    return ", ".join(f"{columns[field]} = :{field}" for field in changes)
