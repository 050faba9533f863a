import re
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from taskboard.schemas.common import CamelModel, reject_null

HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def check_hex_color(value: Optional[str]) -> Optional[str]:
    if value is not None and not HEX_COLOR_RE.match(value):
        raise ValueError("Color must be a valid hex color")
    return value


# --- Схемы типа задачи ---
class TaskTypeBase(CamelModel):
    name: str = Field(..., min_length=1, max_length=100,
                      description="Уникальное название типа", examples=["Bug"])
    description: Optional[str] = Field(
        None, max_length=500, description="Описание типа задачи", examples=["Ошибки в работе системы"])
    color: Optional[str] = Field(
        None, description="Цвет карточки (hex)", examples=["#e74c3c"])

    @field_validator("color")
    @classmethod
    def validate_color(cls, value):
        return check_hex_color(value)


class TaskTypeCreate(TaskTypeBase):
    pass


class TaskTypeUpdate(CamelModel):
    name: Optional[str] = Field(
        None, min_length=1, max_length=100, description="Новое название")
    description: Optional[str] = Field(
        None, max_length=500, description="Описание (null очищает)")
    color: Optional[str] = Field(
        None, description="Цвет (hex, null очищает)")

    @field_validator("name", mode="before")
    @classmethod
    def name_not_null(cls, value):
        return reject_null(value, "Name")

    @field_validator("color")
    @classmethod
    def validate_color(cls, value):
        return check_hex_color(value)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class TaskTypeOut(TaskTypeBase):
    id: int = Field(..., description="ID типа задачи", examples=[1])
    created_at: datetime
    updated_at: datetime
