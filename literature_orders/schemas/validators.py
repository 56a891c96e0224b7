"""
Правила проверки полей заказа.

Функции бросают ValueError с человекочитаемым сообщением; в схемах они
используются как before-валидаторы pydantic, в роутерах - для query-параметров.
"""
import math
import re
from decimal import Decimal
from typing import Any, Dict, List, Optional

from ..models.order import OrderPriority, OrderStatus

TITLE_MAX_LENGTH = 100
CREATED_BY_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 2000
UNIT_MAX_LENGTH = 50

PRIORITY_VALUES = {priority.value for priority in OrderPriority}
STATUS_VALUES = {status.value for status in OrderStatus}

# Только ASCII-цифры: int() принял бы "1_0" и "١"
_INT_STRING = re.compile(r"\s*\+?[0-9]+\s*", re.ASCII)


def normalize_text(value: Any, field: str, min_length: int = 1, max_length: int = 100) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    trimmed = value.strip()
    if len(trimmed) < min_length or len(trimmed) > max_length:
        raise ValueError(f"{field} must be between {min_length} and {max_length} characters")
    return trimmed


def optional_text(value: Any, field: str, max_length: int = 255) -> Optional[str]:
    """Пустая строка и строка из пробелов считаются отсутствующим значением"""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"{field} must be a string")
    trimmed = value.strip()
    if not trimmed:
        return None
    if len(trimmed) > max_length:
        raise ValueError(f"{field} must be at most {max_length} characters")
    return trimmed


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        return False
    return not isinstance(value, float) or math.isfinite(value)


def parse_int_string(value: str) -> Optional[int]:
    """'42' -> 42, иначе None"""
    if not _INT_STRING.fullmatch(value):
        return None
    return int(value)


def optional_int(value: Any, field: str) -> Optional[int]:
    if value is None:
        return None
    if not _is_number(value):
        raise ValueError(f"{field} must be a number")
    if value != int(value) or value < 0:
        raise ValueError(f"{field} must be a non-negative integer")
    return int(value)


def positive_int(value: Any, field: str) -> int:
    # Числа в строках ("3") допускаются, как и в клиенте
    if isinstance(value, str):
        value = parse_int_string(value)
        if value is None:
            raise ValueError(f"{field} must be a positive integer")
    if not _is_number(value) or value != int(value) or value <= 0:
        raise ValueError(f"{field} must be a positive integer")
    return int(value)


def parse_priority(value: Any) -> OrderPriority:
    if not isinstance(value, str):
        raise ValueError("priority must be a string")
    if value not in PRIORITY_VALUES:
        raise ValueError("priority must be one of: low, medium, high")
    return OrderPriority(value)


def parse_status(value: Any) -> OrderStatus:
    if not isinstance(value, str):
        raise ValueError("status must be a string")
    if value not in STATUS_VALUES:
        raise ValueError("status must be one of: new, in_progress, done, closed")
    return OrderStatus(value)


def parse_order_items(value: Any) -> List[Dict[str, int]]:
    """Проверяет позиции заказа и запрещает повтор literatureId"""
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("items must be an array")

    items = []
    for index, raw in enumerate(value):
        if not isinstance(raw, dict):
            raise ValueError(f"items[{index}] must be an object")
        items.append({
            "literature_id": positive_int(raw.get("literatureId"), f"items[{index}].literatureId"),
            "quantity": positive_int(raw.get("quantity"), f"items[{index}].quantity"),
        })

    seen = set()
    for item in items:
        if item["literature_id"] in seen:
            raise ValueError("Duplicate literatureId in items payload")
        seen.add(item["literature_id"])

    return items
