from datetime import datetime

from .base import CamelModel


class LiteratureResponse(CamelModel):
    id: int
    type: str
    title: str
    price: int
    sort_order: int
    created_at: datetime
    updated_at: datetime


class CatalogEntry(CamelModel):
    """Строка файла каталога, готовая к вставке"""
    type: str
    title: str
    price: int  # В копейках
    sort_order: int
