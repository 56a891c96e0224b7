from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..services.order_service import OrderService
from ..services.literature_service import LiteratureService
from ..services.identity import IdentityResolver


async def get_order_service(
    db: AsyncSession = Depends(get_db)
) -> OrderService:
    """Dependency для получения OrderService"""
    return OrderService(db)


async def get_literature_service(
    db: AsyncSession = Depends(get_db)
) -> LiteratureService:
    """Dependency для получения LiteratureService"""
    return LiteratureService(db)


def get_identity_resolver() -> IdentityResolver:
    """Временная заглушка: автор заказа - метка из тела запроса"""
    # Сюда подключается настоящая аутентификация
    return IdentityResolver()
