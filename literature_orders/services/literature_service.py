from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete, select

from ..models.literature import Literature
from ..models.order_item import OrderItem
from ..schemas.literature import CatalogEntry
import logging

logger = logging.getLogger(__name__)


class LiteratureService:
    """Сервис каталога литературы"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_items(self) -> List[Literature]:
        """Весь каталог в порядке из файла импорта"""
        result = await self.db.execute(
            select(Literature).order_by(Literature.sort_order.asc(), Literature.id.asc())
        )
        return list(result.scalars().all())

    async def replace_catalog(self, entries: List[CatalogEntry]) -> int:
        """
        Полностью заменяет каталог.

        В одной транзакции удаляет ВСЕ позиции всех заказов, весь каталог и
        вставляет новые записи. Сами заказы остаются, но уже без позиций.
        """
        try:
            removed = await self.db.execute(delete(OrderItem))
            await self.db.execute(delete(Literature))

            self.db.add_all([
                Literature(
                    type=entry.type,
                    title=entry.title,
                    price=entry.price,
                    sort_order=entry.sort_order
                )
                for entry in entries
            ])
            await self.db.commit()

        except Exception as e:
            await self.db.rollback()
            logger.error(f"❌ Failed to replace literature catalog: {e}")
            raise

        logger.warning(f"⚠️ Catalog replaced: {removed.rowcount} order items removed")
        logger.info(f"✅ Imported {len(entries)} literature items")
        return len(entries)
