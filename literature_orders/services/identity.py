"""
Определение автора заказа.

Аутентификации нет: createdBy - метка группы, присланная клиентом. Резолвер
вынесен в отдельную зависимость, чтобы настоящую аутентификацию можно было
подключить, не меняя логику заказов.
"""
from ..schemas.validators import CREATED_BY_MAX_LENGTH, normalize_text
from ..exceptions import ValidationError


class IdentityResolver:
    """Доверяет метке createdBy из тела запроса"""

    def resolve(self, claimed_label: str) -> str:
        try:
            return normalize_text(claimed_label, "createdBy", max_length=CREATED_BY_MAX_LENGTH)
        except ValueError as e:
            raise ValidationError(str(e))
