from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from taskboard.schemas.common import CamelModel, empty_to_none, reject_null

# --- Базовая схема пользователя ---


class UserBase(CamelModel):
    username: str = Field(..., min_length=3, max_length=50,
                          description="Уникальный логин пользователя", examples=["ivanov"])  # Логин
    email: Optional[EmailStr] = Field(
        None, description="E-mail (пустая строка = null)", examples=["ivanov@example.com"])
    full_name: Optional[str] = Field(
        None, max_length=100, description="Полное имя пользователя", examples=["Иван Иванов"])  # ФИО

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return empty_to_none(value)


class UserCreate(UserBase):
    password: str = Field(..., min_length=3, max_length=100, description="Пароль пользователя",
                          examples=["secret123"])  # Пароль


class UserUpdate(CamelModel):
    username: Optional[str] = Field(
        None, min_length=3, max_length=50, description="Новый логин (если не занят)")
    password: Optional[str] = Field(
        None, min_length=3, max_length=100, description="Новый пароль")
    email: Optional[EmailStr] = Field(
        None, description="E-mail (пустая строка или null очищает)")
    full_name: Optional[str] = Field(
        None, max_length=100, description="Полное имя пользователя")

    @field_validator("username", "password", mode="before")
    @classmethod
    def not_null(cls, value, info):
        return reject_null(value, info.field_name.capitalize())

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        return empty_to_none(value)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class UserOut(UserBase):
    """Пароль и его хэш наружу не отдаются."""
    id: int = Field(..., description="ID пользователя", examples=[1])
    # в БД могут лежать адреса, заведённые до проверки формата
    email: Optional[str] = None
    created_at: datetime
    updated_at: datetime
