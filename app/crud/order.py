from typing import List
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import select
from app.models.order import DinerOrder, OrderItem


class CRUDOrder:
    """
    CRUD operations for diner orders and their items.

    Inserts never commit: the order service owns the transaction.
    """

    def __init__(self):
        self.model = DinerOrder

    def get_multi_by_diner(
        self,
        db: Session,
        *,
        diner_id: int,
        skip: int = 0,
        limit: int = 10
    ) -> List[DinerOrder]:
        stmt = (
            select(DinerOrder)
            .where(DinerOrder.diner_id == diner_id)
            .options(selectinload(DinerOrder.items))
            .order_by(DinerOrder.id)
            .offset(skip)
            .limit(limit)
        )
        return list(db.execute(stmt).scalars().all())

    def create(
        self,
        db: Session,
        *,
        diner_id: int,
        franchise_id: int,
        store_id: int
    ) -> DinerOrder:
        db_order = DinerOrder(diner_id=diner_id, franchise_id=franchise_id, store_id=store_id)
        db.add(db_order)
        db.flush()
        return db_order

    def add_item(
        self,
        db: Session,
        *,
        order_id: int,
        menu_id: int,
        description: str,
        price: float
    ) -> OrderItem:
        db_item = OrderItem(order_id=order_id, menu_id=menu_id, description=description, price=price)
        db.add(db_item)
        db.flush()
        return db_item


# Create a singleton instance
order = CRUDOrder()
