import os
from typing import List

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Загружаем переменные окружения из .env файла
load_dotenv()

# --- Класс конфигурации приложения ---


class Settings(BaseSettings):
    PROJECT_NAME: str = os.getenv(
        "PROJECT_NAME", "Taskboard API")  # Имя проекта

    # --- Сервер ---
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3001"))

    # Режим запуска: development / production / test (влияет на логирование)
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # --- Настройки базы данных ---
    DB_PATH: str = os.getenv("DB_PATH", "./tasks.db")  # Файл SQLite
    # Явный URL имеет приоритет над DB_PATH
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    # Слой хранения: "sql" (параметризованные запросы) или "orm"
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "sql")

    # --- Первый суперпользователь ---
    FIRST_SUPERUSER_USERNAME: str = os.getenv(
        "FIRST_SUPERUSER_USERNAME", "admin")  # Логин администратора
    FIRST_SUPERUSER_PASSWORD: str = os.getenv(
        "FIRST_SUPERUSER_PASSWORD", "admin")  # Пароль администратора
    FIRST_SUPERUSER_FULL_NAME: str = os.getenv(
        "FIRST_SUPERUSER_FULL_NAME", "Administrator")  # Имя администратора

    # Разрешённые источники CORS, через запятую
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    class Config:
        case_sensitive = True  # Все переменные чувствительны к регистру

    @property
    def database_url(self) -> str:
        """URL для async-движка SQLAlchemy."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite+aiosqlite:///{self.DB_PATH}"

    @property
    def log_level(self) -> str:
        if self.ENVIRONMENT == "development":
            return "DEBUG"
        if self.ENVIRONMENT == "test":
            return "WARNING"
        return "INFO"

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


# Экземпляр настроек для использования в приложении
settings = Settings()
