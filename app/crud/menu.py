from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import select
from app.crud.base import CRUDBase, get_id
from app.models.menu import MenuItem
from app.schemas.menu import MenuItemCreate


class CRUDMenu(CRUDBase[MenuItem, MenuItemCreate, MenuItemCreate]):
    """CRUD operations for menu items."""

    def get_all(self, db: Session) -> List[MenuItem]:
        stmt = select(MenuItem).order_by(MenuItem.id)
        return list(db.execute(stmt).scalars().all())

    def get_id_by_title(self, db: Session, title: str) -> Optional[int]:
        return get_id(db, MenuItem, "title", title)


# Create a singleton instance
menu = CRUDMenu(MenuItem)
