from typing import Dict, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from ..exceptions import DomainError, OrderNotFoundError, ValidationError
from ..models.literature import Literature
from ..models.order import Order, OrderStatus
from ..models.order_item import OrderItem
from ..schemas.order import OrderCreate, OrderUpdate
from ..schemas.order_item import OrderItemCreate
from .status_machine import ensure_transition
import logging

logger = logging.getLogger(__name__)


class OrderService:
    """Сервис для работы с заказами"""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _order_query(self):
        return select(Order).options(
            selectinload(Order.items).selectinload(OrderItem.literature)
        ).execution_options(populate_existing=True)

    async def create_order(self, payload: OrderCreate, created_by: str) -> Order:
        """
        Создает заказ вместе с позициями в одной транзакции.

        Цена каждой позиции копируется из каталога на момент создания.
        Если хотя бы одна литература не найдена, не создается ничего.
        """
        try:
            prices = await self._snapshot_prices(payload.items)

            order = Order(
                title=payload.title,
                created_by=created_by,
                description=payload.description,
                unit=payload.unit,
                quantity=payload.quantity
            )
            if payload.priority is not None:
                order.priority = payload.priority

            order.items = [
                OrderItem(
                    literature_id=item.literature_id,
                    quantity=item.quantity,
                    price=prices[item.literature_id]
                )
                for item in payload.items
            ]

            self.db.add(order)
            await self.db.commit()

        except DomainError as e:
            await self.db.rollback()
            logger.warning(f"⚠️ Order from {created_by} rejected: {e.message}")
            raise
        except Exception as e:
            await self.db.rollback()
            logger.error(f"❌ Error creating order from {created_by}: {e}")
            raise

        logger.info(f"✅ Order {order.id} created by {created_by} with {len(payload.items)} items")
        return await self.get_order(order.id)

    async def _snapshot_prices(self, items: List[OrderItemCreate]) -> Dict[int, int]:
        """Текущие цены запрошенной литературы: {literature_id: price}"""
        if not items:
            return {}

        ids = [item.literature_id for item in items]
        result = await self.db.execute(
            select(Literature.id, Literature.price).where(Literature.id.in_(ids))
        )
        prices = {row.id: row.price for row in result}

        if len(prices) != len(ids):
            raise ValidationError("One or more literature items were not found")

        return prices

    async def find_order(self, order_id: int) -> Optional[Order]:
        """Получает заказ по ID или None"""
        result = await self.db.execute(self._order_query().where(Order.id == order_id))
        return result.scalar_one_or_none()

    async def get_order(self, order_id: int) -> Order:
        """Получает заказ по ID, иначе OrderNotFoundError"""
        order = await self.find_order(order_id)
        if order is None:
            logger.warning(f"⚠️ Order {order_id} not found")
            raise OrderNotFoundError(order_id)
        return order

    async def list_orders(
            self,
            status: Optional[OrderStatus] = None,
            created_by: Optional[str] = None
    ) -> List[Order]:
        """Список заказов с фильтрами, новые первыми"""
        query = self._order_query()

        if status is not None:
            query = query.where(Order.status == status)
        if created_by is not None:
            query = query.where(Order.created_by == created_by)

        query = query.order_by(Order.created_at.desc(), Order.id.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update_order(self, order_id: int, payload: OrderUpdate) -> Order:
        """Обновляет скалярные поля заказа; позиции не меняются"""
        changes = payload.changes()
        if not changes:
            raise ValidationError("No valid fields provided for update")

        order = await self.get_order(order_id)

        try:
            for field, value in changes.items():
                setattr(order, field, value)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"❌ Error updating order {order_id}: {e}")
            raise

        logger.info(f"✅ Order {order_id} updated: {', '.join(sorted(changes))}")
        return await self.get_order(order_id)

    async def change_status(self, order_id: int, target: OrderStatus) -> Order:
        """Переводит заказ в новый статус согласно таблице переходов"""
        order = await self.get_order(order_id)
        current = order.status

        try:
            ensure_transition(current, target)
        except DomainError as e:
            logger.warning(f"⚠️ Order {order_id}: {e.message}")
            raise

        try:
            order.status = target
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"❌ Error updating order {order_id} status: {e}")
            raise

        logger.info(f"✅ Order {order_id} status updated: {current.value} -> {target.value}")
        return await self.get_order(order_id)

    async def delete_order(self, order_id: int) -> None:
        """Удаляет заказ вместе с позициями"""
        order = await self.get_order(order_id)

        try:
            await self.db.delete(order)
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(f"❌ Error deleting order {order_id}: {e}")
            raise

        logger.info(f"🗑️ Order {order_id} deleted")
