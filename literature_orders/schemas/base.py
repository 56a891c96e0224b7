from typing import Any

from pydantic import BaseModel, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Базовая схема: snake_case в Python, camelCase в JSON"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class RequestModel(CamelModel):
    """Тело запроса: массив, строка или число читаются как пустой объект"""

    @model_validator(mode="before")
    @classmethod
    def _object_body(cls, data: Any) -> Any:
        if isinstance(data, (dict, BaseModel)):
            return data
        return {}
