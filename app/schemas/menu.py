from app.schemas.common import CamelModel

class MenuItemBase(CamelModel):
    title: str
    description: str
    image: str
    price: float

class MenuItemCreate(MenuItemBase):
    pass

class MenuItemResponse(MenuItemBase):
    id: int
