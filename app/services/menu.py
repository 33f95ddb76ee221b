from typing import List
from sqlalchemy.orm import Session
from app.crud.menu import menu as menu_crud
from app.schemas.menu import MenuItemCreate, MenuItemResponse


class MenuService:
    """Service layer for the pizza menu."""

    def __init__(self):
        self.crud = menu_crud

    def get_menu(self, db: Session) -> List[MenuItemResponse]:
        return [MenuItemResponse.model_validate(item) for item in self.crud.get_all(db)]

    def add_menu_item(self, db: Session, item: MenuItemCreate) -> MenuItemResponse:
        return MenuItemResponse.model_validate(self.crud.create(db, obj_in=item))


# Create a singleton instance
menu_service = MenuService()
