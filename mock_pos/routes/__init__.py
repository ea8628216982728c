# API Routes

from .cart import router as cart_router
from .admin import router as admin_router

__all__ = ["cart_router", "admin_router"]
