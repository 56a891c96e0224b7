from pydantic import Field, field_validator
from typing import Any, Dict, List, Optional
from datetime import datetime

from ..models.order import OrderPriority, OrderStatus
from .base import CamelModel, RequestModel
from .order_item import OrderItemCreate, OrderItemResponse
from .validators import (
    CREATED_BY_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    UNIT_MAX_LENGTH,
    normalize_text,
    optional_int,
    optional_text,
    parse_order_items,
    parse_priority,
    parse_status,
)


class OrderCreate(RequestModel):
    # Порядок полей задает порядок проверки: первая ошибка попадает в ответ
    title: str = Field(None, validate_default=True)
    created_by: str = Field(None, validate_default=True)
    description: Optional[str] = None
    unit: Optional[str] = None
    quantity: Optional[int] = None
    priority: Optional[OrderPriority] = None
    items: List[OrderItemCreate] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _check_title(cls, value: Any) -> str:
        return normalize_text(value, "title", max_length=TITLE_MAX_LENGTH)

    @field_validator("created_by", mode="before")
    @classmethod
    def _check_created_by(cls, value: Any) -> str:
        return normalize_text(value, "createdBy", max_length=CREATED_BY_MAX_LENGTH)

    @field_validator("description", mode="before")
    @classmethod
    def _check_description(cls, value: Any) -> Optional[str]:
        return optional_text(value, "description", DESCRIPTION_MAX_LENGTH)

    @field_validator("unit", mode="before")
    @classmethod
    def _check_unit(cls, value: Any) -> Optional[str]:
        return optional_text(value, "unit", UNIT_MAX_LENGTH)

    @field_validator("quantity", mode="before")
    @classmethod
    def _check_quantity(cls, value: Any) -> Optional[int]:
        return optional_int(value, "quantity")

    @field_validator("priority", mode="before")
    @classmethod
    def _check_priority(cls, value: Any) -> OrderPriority:
        return parse_priority(value)

    @field_validator("items", mode="before")
    @classmethod
    def _check_items(cls, value: Any) -> List[Dict[str, int]]:
        return parse_order_items(value)


class OrderUpdate(RequestModel):
    """
    Частичное обновление скалярных полей заказа.

    Отсутствующее поле не меняется; null (или пустая строка) для
    description/unit/quantity очищает значение. Позиции заказа не трогаются.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    unit: Optional[str] = None
    quantity: Optional[int] = None
    priority: Optional[OrderPriority] = None

    @field_validator("title", mode="before")
    @classmethod
    def _check_title(cls, value: Any) -> str:
        return normalize_text(value, "title", max_length=TITLE_MAX_LENGTH)

    @field_validator("description", mode="before")
    @classmethod
    def _check_description(cls, value: Any) -> Optional[str]:
        return optional_text(value, "description", DESCRIPTION_MAX_LENGTH)

    @field_validator("unit", mode="before")
    @classmethod
    def _check_unit(cls, value: Any) -> Optional[str]:
        return optional_text(value, "unit", UNIT_MAX_LENGTH)

    @field_validator("quantity", mode="before")
    @classmethod
    def _check_quantity(cls, value: Any) -> Optional[int]:
        return optional_int(value, "quantity")

    @field_validator("priority", mode="before")
    @classmethod
    def _check_priority(cls, value: Any) -> OrderPriority:
        return parse_priority(value)

    def changes(self) -> Dict[str, Any]:
        """Только явно переданные поля"""
        return self.model_dump(exclude_unset=True)


class OrderStatusUpdate(RequestModel):
    status: OrderStatus = Field(None, validate_default=True)

    @field_validator("status", mode="before")
    @classmethod
    def _check_status(cls, value: Any) -> OrderStatus:
        return parse_status(value)


class OrderResponse(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    quantity: Optional[int] = None
    unit: Optional[str] = None
    priority: OrderPriority
    status: OrderStatus
    created_by: str
    created_at: datetime
    updated_at: datetime

    items: List[OrderItemResponse] = []
    total_amount: int
