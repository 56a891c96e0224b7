from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from .config import settings

# Один движок на процесс; для тестов и CLI url берется из DATABASE_URL
engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    pool_pre_ping=not settings.database_url.startswith("sqlite"),
)

# expire_on_commit=False: объекты заказа читаются после commit для ответа
AsyncSessionLocal = async_sessionmaker(engine, expire_on_commit=False)


class Base(DeclarativeBase):
    """Общая metadata каталога и заказов"""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Сессия на один HTTP-запрос; незавершенная транзакция откатывается"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
