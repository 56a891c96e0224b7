from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import DBAPIError
from contextlib import asynccontextmanager
import logging

from . import __version__
from .config import settings
from .database import engine, Base
from .api import api_router

# Настройка логирования
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    # Startup
    logger.info("🚀 Starting Literature Orders service...")

    try:
        if settings.create_tables:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("✅ Database tables created")

        logger.info("🎉 Literature Orders service started successfully!")

        yield  # Приложение работает

    except Exception as e:
        logger.error(f"❌ Failed to start Literature Orders service: {e}")
        raise

    # Shutdown
    logger.info("🛑 Shutting down Literature Orders service...")
    await engine.dispose()
    logger.info("✅ Database connection closed")


# Создаем FastAPI приложение
app = FastAPI(
    title=settings.app_name,
    description="Каталог литературы и заказы групп",
    version=__version__,
    debug=settings.debug,
    lifespan=lifespan
)

# Настройка CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Подключаем API routes
app.include_router(api_router)


@app.get("/")
async def root():
    """Корневой endpoint"""
    return {
        "service": settings.app_name,
        "version": __version__,
        "docs": "/docs",
        "health": "/api/health"
    }


def _error(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _first_validation_message(exc: RequestValidationError) -> str:
    """Берем только первую ошибку - проверка идет до первой проблемы"""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    error = errors[0]
    if error.get("type") == "json_invalid":
        return "Invalid JSON body"

    ctx = error.get("ctx") or {}
    if "error" in ctx:
        return str(ctx["error"])

    field = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
    return f"{field}: {error['msg']}" if field else error["msg"]


# Обработчики исключений
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    """Доменные ошибки и HTTPException в формате {"error": ...}"""
    # Неизвестный метод на известном пути - такой же 404, как и неизвестный путь
    if exc.status_code == 405:
        return _error(404, "Not found")
    message = "Not found" if exc.status_code == 404 and exc.detail == "Not Found" else str(exc.detail)
    return _error(exc.status_code, message, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    return _error(400, _first_validation_message(exc))


@app.exception_handler(DBAPIError)
async def store_exception_handler(request, exc: DBAPIError):
    """Нарушения ограничений БД отдаются клиенту как 400"""
    logger.warning(f"⚠️ Store error on {request.url.path}: {exc.orig}")
    return _error(400, str(exc.orig))


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Глобальный обработчик исключений"""
    logger.error(f"❌ Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return _error(500, "Internal server error")


def run():
    import uvicorn

    uvicorn.run(
        "literature_orders.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )


if __name__ == "__main__":
    run()
