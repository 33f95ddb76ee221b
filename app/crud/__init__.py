from app.crud.base import CRUDBase, get_id
from app.crud.user import user
from app.crud.auth import auth_token
from .menu import menu
from .franchise import franchise, store
from .order import order

__all__ = ["CRUDBase", "get_id", "user", "auth_token", "menu", "franchise", "store", "order"]
