from .order_service import OrderService
from .literature_service import LiteratureService
from .identity import IdentityResolver

__all__ = [
    "OrderService",
    "LiteratureService",
    "IdentityResolver"
]
