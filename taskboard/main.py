from fastapi import FastAPI, Request
from starlette.exceptions import HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware
from taskboard.api import router as api_router
from taskboard.db import AsyncSessionLocal, engine
from taskboard.db.initial_data import create_schema, init_db
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
import logging
import sys
import time
import traceback
import uvicorn
from taskboard.core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
logging.basicConfig(
    level=settings.log_level,
    format=LOG_FORMAT,
    stream=sys.stdout
)
logger = logging.getLogger("taskboard")

app = FastAPI(
    title=settings.PROJECT_NAME
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def format_validation_errors(errors) -> list:
    """
    Ошибки pydantic в виде [{"field": ..., "message": ...}].
    Служебные части пути ("body", "query") в имя поля не попадают.
    """
    details = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())
               if part not in ("body", "query", "path")]
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        details.append({"field": ".".join(loc) or "body", "message": message})
    return details


def validation_error_response(errors) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "error": "Validation failed",
            "details": format_validation_errors(errors),
        }
    )

# Глобальные обработчики исключений


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """Ошибки валидации тела и параметров запроса"""
    logger.warning(f"Ошибка валидации запроса {request.url.path}: {exc.errors()}")
    return validation_error_response(exc.errors())


@app.exception_handler(ValidationError)
async def validation_exception_handler(request: Request, exc: ValidationError):
    """Обработчик ошибок валидации Pydantic внутри обработчиков"""
    logger.warning(f"Ошибка валидации: {exc.errors()}")
    return validation_error_response(exc.errors())


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Обработчик HTTP исключений"""
    if exc.status_code >= 500:
        logger.error(f"HTTP ошибка {exc.status_code}: {exc.detail}")
    else:
        logger.warning(f"HTTP ошибка {exc.status_code}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail}
    )


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    """Обработчик ошибок базы данных"""
    logger.error(f"Ошибка базы данных: {str(exc)}\n{traceback.format_exc()}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"}
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Общий обработчик всех остальных исключений"""
    logger.error(f"Неожиданная ошибка: {str(exc)}\n{traceback.format_exc()}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"}
    )


if settings.is_development:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Журнал запросов в режиме разработки"""
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.debug(
            f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f} ms")
        return response


@app.on_event("startup")
async def on_startup():
    logger.info("[STARTUP] Запуск приложения...")
    await create_schema(engine)
    db = AsyncSessionLocal()
    try:
        await init_db(db)
    finally:
        await db.close()
    logger.info(
        f"[STARTUP] Приложение успешно запущено (хранилище: {settings.STORAGE_BACKEND}).")


@app.on_event("shutdown")
async def on_shutdown():
    await engine.dispose()
    logger.info("[SHUTDOWN] Соединение с базой данных закрыто.")


@app.get("/")
async def root():
    return {"message": settings.PROJECT_NAME}


@app.get("/health")
async def health_check():
    """Эндпоинт для проверки здоровья приложения"""
    return {"status": "ok"}

app.include_router(api_router, prefix="/api")


def run() -> None:
    """Запуск сервера на HOST:PORT из настроек."""
    uvicorn.run(app, host=settings.HOST, port=settings.PORT,
                log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
