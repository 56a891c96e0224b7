from pydantic import Field
from datetime import datetime

from .base import CamelModel
from .literature import LiteratureResponse


class OrderItemCreate(CamelModel):
    literature_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)


class OrderItemResponse(CamelModel):
    id: int
    order_id: int
    literature_id: int
    quantity: int
    price: int  # Цена за единицу на момент заказа
    line_total: int  # quantity * price, не хранится в БД
    literature: LiteratureResponse
    created_at: datetime
    updated_at: datetime
