from .literature import Literature
from .order import Order, OrderPriority, OrderStatus
from .order_item import OrderItem

__all__ = [
    "Literature",
    "Order",
    "OrderPriority",
    "OrderStatus",
    "OrderItem"
]
