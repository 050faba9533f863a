from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Наибольшее значение INTEGER в SQLite
MAX_ID = 2 ** 63 - 1

# --- Общие настройки схем: camelCase в JSON, snake_case в Python ---


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def empty_to_none(value: Any) -> Any:
    """
    Пустая строка и None для необязательных полей приводятся к None.
    """
    if value is None:
        return None
    if isinstance(value, str) and value.strip() == "":
        return None
    return value


def check_iso_date(value: Optional[str]) -> Optional[str]:
    """
    Проверяет, что строка является датой или датой-временем в формате ISO-8601.
    Значение возвращается как есть, чтобы клиент получил обратно то, что прислал.
    """
    if value is None:
        return None
    try:
        if len(value) == 10:
            date.fromisoformat(value)
        else:
            datetime.fromisoformat(value)
    except ValueError:
        raise ValueError("Date must be an ISO-8601 date or datetime")
    return value


def reject_null(value: Any, label: str) -> Any:
    if value is None:
        raise ValueError(f"{label} cannot be null")
    return value

# --- Ответы без сущности ---


class MessageOut(BaseModel):
    message: str = Field(..., description="Текст подтверждения",
                         examples=["Task deleted successfully"])


class FieldErrorOut(BaseModel):
    field: str = Field(..., description="Поле с ошибкой", examples=["title"])
    message: str = Field(..., description="Описание ошибки",
                         examples=["String should have at least 1 character"])


class ErrorOut(BaseModel):
    error: str = Field(..., description="Описание ошибки",
                       examples=["Task not found"])
    details: Optional[list[FieldErrorOut]] = Field(
        None, description="Ошибки по полям (только для ошибок валидации)")
