from .auth import AuthToken
from .franchise import Franchise, Store
from .menu import MenuItem
from .order import DinerOrder, OrderItem
from .user import Role, User, UserRole
