from ..models.order import Order
from ..models.order_item import OrderItem
from ..schemas.literature import LiteratureResponse
from ..schemas.order import OrderResponse
from ..schemas.order_item import OrderItemResponse


def line_total(item: OrderItem) -> int:
    return item.price * item.quantity


def enrich_item(item: OrderItem) -> OrderItemResponse:
    return OrderItemResponse(
        id=item.id,
        order_id=item.order_id,
        literature_id=item.literature_id,
        quantity=item.quantity,
        price=item.price,
        line_total=line_total(item),
        literature=LiteratureResponse.model_validate(item.literature),
        created_at=item.created_at,
        updated_at=item.updated_at
    )


def enrich_order(order: Order) -> OrderResponse:
    """
    Ответ по заказу с вычисляемыми суммами.

    lineTotal и totalAmount считаются при каждом чтении и нигде не хранятся.
    Позиции сортируются по порядку литературы в каталоге.
    """
    items = [
        enrich_item(item)
        for item in sorted(order.items, key=lambda i: (i.literature.sort_order, i.id))
    ]

    return OrderResponse(
        id=order.id,
        title=order.title,
        description=order.description,
        quantity=order.quantity,
        unit=order.unit,
        priority=order.priority,
        status=order.status,
        created_by=order.created_by,
        created_at=order.created_at,
        updated_at=order.updated_at,
        items=items,
        total_amount=sum(item.line_total for item in items)
    )
