"""
Pytest configuration and shared fixtures.

Provides an in-memory SQLite database, an httpx client bound to the ASGI app
and a small seeded literature catalog.
"""
import os

# Настройки читаются при импорте пакета, поэтому окружение задаем заранее
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("CREATE_TABLES", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from typing import AsyncGenerator, List

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from literature_orders.database import Base, get_db
from literature_orders.main import app
from literature_orders.models import Literature


# ── Database Fixtures ────────────────────────────────────────────────


@pytest_asyncio.fixture(scope="function")
async def session_maker() -> AsyncGenerator[async_sessionmaker, None]:
    """
    Fresh in-memory SQLite database for each test.

    StaticPool keeps the single in-memory connection alive across sessions.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTP client for the app with get_db overridden.

    Every request gets its own session, as in production.
    """
    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


# ── Test Data Fixtures ────────────────────────────────────────────────


@pytest_asyncio.fixture
async def literature(session_maker) -> List[Literature]:
    """
    Three catalog entries inserted out of display order.

    Returned in insertion order: sort_order 2, 1, 3.
    """
    items = [
        Literature(type="Книга", title="Базовый текст", price=150000, sort_order=2),
        Literature(type="Буклет", title="Информационный буклет", price=2500, sort_order=1),
        Literature(type="Брелок", title="Брелок 30 дней", price=9900, sort_order=3),
    ]

    async with session_maker() as session:
        session.add_all(items)
        await session.commit()

    return items
