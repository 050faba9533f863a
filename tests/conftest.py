from __future__ import annotations

import asyncio
import os
import sys
from pathlib import Path

import bcrypt
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# До импорта приложения: без журнала запросов и с тихим логированием
os.environ.setdefault("ENVIRONMENT", "test")

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool

from taskboard.core.config import settings
from taskboard.db import enable_sqlite_foreign_keys, get_db
from taskboard.db.initial_data import create_schema
from taskboard.main import app
from taskboard.security import password_digest


@pytest.fixture(params=["sql", "orm"])
def backend(request, monkeypatch) -> str:
    """Каждый тест API прогоняется на обоих слоях хранения."""
    monkeypatch.setattr(settings, "STORAGE_BACKEND", request.param)
    return request.param


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}"


@pytest.fixture
def engine(db_url: str):
    # NullPool: соединения не переживают event loop, в котором открыты
    test_engine = create_async_engine(db_url, poolclass=NullPool)
    enable_sqlite_foreign_keys(test_engine)
    asyncio.run(create_schema(test_engine))
    yield test_engine
    asyncio.run(test_engine.dispose())


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession,
                        autoflush=False, expire_on_commit=False)


@pytest.fixture
def client(backend: str, session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_task(client):
    def _make_task(**overrides) -> dict:
        payload = {
            "title": "Test Task",
            "description": "Test Description",
            "priority": "Medium",
        }
        payload.update(overrides)
        response = client.post("/api/tasks", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_task


@pytest.fixture
def make_task_type(client):
    def _make_task_type(name: str = "Bug", **overrides) -> dict:
        payload = {"name": name}
        payload.update(overrides)
        response = client.post("/api/task-types", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_task_type


@pytest.fixture
def make_user(client):
    def _make_user(username: str = "ivanov", **overrides) -> dict:
        payload = {"username": username, "password": "secret"}
        payload.update(overrides)
        response = client.post("/api/users", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _make_user


@pytest.fixture
def password_matches():
    """Проверка пароля по сохранённому хэшу (входа в API нет, нужна только тестам)."""
    def _matches(plain: str, hashed: str) -> bool:
        return bcrypt.checkpw(password_digest(plain), hashed.encode("utf-8"))

    return _matches
