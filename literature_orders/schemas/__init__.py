from .literature import CatalogEntry, LiteratureResponse
from .order import OrderCreate, OrderUpdate, OrderStatusUpdate, OrderResponse
from .order_item import OrderItemCreate, OrderItemResponse

__all__ = [
    "CatalogEntry",
    "LiteratureResponse",
    "OrderCreate",
    "OrderUpdate",
    "OrderStatusUpdate",
    "OrderResponse",
    "OrderItemCreate",
    "OrderItemResponse"
]
