from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    literature_id = Column(Integer, ForeignKey("literature.id"), nullable=False, index=True)

    quantity = Column(Integer, nullable=False)
    price = Column(Integer, nullable=False)  # Цена за единицу на момент заказа

    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    # Связи
    order = relationship("Order", back_populates="items")
    literature = relationship("Literature", back_populates="order_items")
