from datetime import datetime
from typing import List, Optional
from app.schemas.common import CamelModel

class OrderItemBase(CamelModel):
    menu_id: Optional[int] = None
    description: str
    price: float

class OrderItemCreate(OrderItemBase):
    pass

class OrderItemResponse(OrderItemBase):
    id: Optional[int] = None

class OrderCreate(CamelModel):
    franchise_id: int
    store_id: int
    items: List[OrderItemCreate] = []

class OrderResponse(CamelModel):
    id: int
    franchise_id: int
    store_id: int
    date: Optional[datetime] = None
    items: List[OrderItemResponse] = []

class OrderListResponse(CamelModel):
    diner_id: int
    orders: List[OrderResponse]
    page: int

class OrderFulfillmentResponse(CamelModel):
    order: OrderResponse
    follow_link_to_end_chaos: Optional[str] = None
    jwt: Optional[str] = None
