from app.routers.alerts import router as alerts_router
from app.routers.health import router as health_router
from app.routers.inventory import router as inventory_router
from app.routers.products import router as products_router

__all__ = [
    "alerts_router",
    "health_router",
    "inventory_router",
    "products_router",
]
