from fastapi import APIRouter
from .routes import orders_router, literature_router

# Создаем основной API router
api_router = APIRouter(prefix="/api")

# Подключаем роуты
api_router.include_router(orders_router)
api_router.include_router(literature_router)


@api_router.get("/health", tags=["health"])
async def health_check():
    """Проверка состояния сервиса"""
    return {"status": "ok"}


__all__ = ["api_router"]
