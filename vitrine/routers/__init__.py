from vitrine.routers.admin import router as admin_router
from vitrine.routers.auth import router as auth_router
from vitrine.routers.health import router as health_router
from vitrine.routers.storefront import router as storefront_router

__all__ = [
    "admin_router",
    "auth_router",
    "health_router",
    "storefront_router",
]
