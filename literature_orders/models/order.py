from sqlalchemy import Column, String, DateTime, Enum, Text, Integer
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum as PyEnum
from ..database import Base


class OrderStatus(str, PyEnum):
    NEW = "new"  # Новый
    IN_PROGRESS = "in_progress"  # В работе
    DONE = "done"  # Завершён
    CLOSED = "closed"  # Закрыт


class OrderPriority(str, PyEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)

    # Общее количество "на словах", независимо от позиций
    quantity = Column(Integer, nullable=True)
    unit = Column(String(50), nullable=True)

    priority = Column(
        Enum(OrderPriority, name="order_priority", values_callable=_enum_values),
        default=OrderPriority.MEDIUM,
        server_default=OrderPriority.MEDIUM.value,
        nullable=False
    )
    status = Column(
        Enum(OrderStatus, name="order_status", values_callable=_enum_values),
        default=OrderStatus.NEW,
        server_default=OrderStatus.NEW.value,
        nullable=False,
        index=True
    )

    # Метка группы, оформившей заказ (не аутентифицированный пользователь)
    created_by = Column(String(100), nullable=False, index=True)

    # Временные метки
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Связи
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")
