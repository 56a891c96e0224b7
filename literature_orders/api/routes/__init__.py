from .orders import router as orders_router
from .literature import router as literature_router

__all__ = ["orders_router", "literature_router"]
