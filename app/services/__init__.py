from app.services.user import user_service
from app.services.auth import auth_service
from .menu import menu_service
from .order import order_service
from .franchise import franchise_service
from .factory_client import factory_client

__all__ = [
    "user_service",
    "auth_service",
    "menu_service",
    "order_service",
    "franchise_service",
    "factory_client",
]
