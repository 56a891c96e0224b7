"""
Таблица переходов статусов заказа.

Единственный источник истины о допустимых сменах статуса: его используют
OrderService и эндпоинт GET /api/orders/transitions для клиентов.
Переходы только вперед, без петель и без пропуска состояний.
"""
from typing import Dict, FrozenSet, List

from ..exceptions import InvalidStatusTransitionError
from ..models.order import OrderStatus

STATUS_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.NEW: frozenset({OrderStatus.IN_PROGRESS, OrderStatus.CLOSED}),
    OrderStatus.IN_PROGRESS: frozenset({OrderStatus.DONE, OrderStatus.CLOSED}),
    OrderStatus.DONE: frozenset({OrderStatus.CLOSED}),
    OrderStatus.CLOSED: frozenset(),
}

_STATUS_ORDER = list(OrderStatus)


def allowed_transitions(current: OrderStatus) -> List[OrderStatus]:
    """Допустимые следующие статусы в порядке объявления OrderStatus"""
    targets = STATUS_TRANSITIONS[current]
    return [status for status in _STATUS_ORDER if status in targets]


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in STATUS_TRANSITIONS[current]


def ensure_transition(current: OrderStatus, target: OrderStatus) -> None:
    if not can_transition(current, target):
        raise InvalidStatusTransitionError(current, target)


def transition_table() -> Dict[str, List[str]]:
    """Таблица в виде, пригодном для JSON"""
    return {
        status.value: [target.value for target in allowed_transitions(status)]
        for status in _STATUS_ORDER
    }
