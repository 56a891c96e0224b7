"""
Доменные исключения сервиса заказов.

Все они наследуются от HTTPException и превращаются в ответ
``{"error": <message>}`` глобальным обработчиком в main.py.
"""
from fastapi import HTTPException, status


class DomainError(HTTPException):
    """Базовый класс доменных ошибок"""
    def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(status_code=status_code, detail=message)
        self.message = message


class ValidationError(DomainError):
    """Некорректные входные данные (400)"""
    def __init__(self, message: str):
        super().__init__(message, status_code=status.HTTP_400_BAD_REQUEST)


class InvalidStatusTransitionError(ValidationError):
    """Недопустимый переход статуса заказа (400)"""
    def __init__(self, current, target):
        self.current = current
        self.target = target
        super().__init__(
            f"Cannot transition status from {_value(current)} to {_value(target)}"
        )


class NotFoundError(DomainError):
    """Ресурс не найден (404)"""
    def __init__(self, message: str = "Not found"):
        super().__init__(message, status_code=status.HTTP_404_NOT_FOUND)


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__("Order not found")


class CatalogFormatError(ValueError):
    """Ошибка разбора файла каталога литературы"""


def _value(member) -> str:
    return getattr(member, "value", member)
