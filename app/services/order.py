from typing import Optional
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.logging_config import logger
from app.crud.order import order as order_crud
from app.crud.menu import menu as menu_crud
from app.schemas.order import OrderCreate, OrderListResponse, OrderResponse, OrderItemResponse
from app.schemas.user import UserResponse


class OrderService:
    """
    Service layer for diner orders.

    Orders and their items are written in one transaction.
    """

    def __init__(self):
        self.crud = order_crud

    def get_orders(self, db: Session, user: UserResponse, page: Optional[int] = 1) -> OrderListResponse:
        """
        One page of a diner's orders, items attached.

        Args:
            db: Database session
            user: Diner whose orders are listed
            page: 1-based page number; the page size is LIST_PER_PAGE

        Returns:
            OrderListResponse with dinerId, orders and page
        """
        page = page or 1
        per_page = settings.LIST_PER_PAGE
        orders = self.crud.get_multi_by_diner(
            db,
            diner_id=user.id,
            skip=(page - 1) * per_page,
            limit=per_page
        )
        return OrderListResponse(
            diner_id=user.id,
            orders=[OrderResponse.model_validate(o) for o in orders],
            page=page,
        )

    def add_diner_order(self, db: Session, user: UserResponse, order_in: OrderCreate) -> OrderResponse:
        """
        Persist an order placed by ``user``.

        Each item's description must name an existing menu item; the menu id
        stored with the item is the one found by that title.

        Raises:
            HTTPException 404: If an item does not match any menu title. The
                whole order is rolled back.
        """
        try:
            db_order = self.crud.create(
                db,
                diner_id=user.id,
                franchise_id=order_in.franchise_id,
                store_id=order_in.store_id
            )
            items = []
            for item in order_in.items:
                menu_id = menu_crud.get_id_by_title(db, item.description)
                if menu_id is None:
                    raise HTTPException(
                        status_code=status.HTTP_404_NOT_FOUND,
                        detail=f"unknown menu item {item.description}"
                    )
                db_item = self.crud.add_item(
                    db,
                    order_id=db_order.id,
                    menu_id=menu_id,
                    description=item.description,
                    price=item.price
                )
                items.append(OrderItemResponse.model_validate(db_item))
            db.commit()
        except Exception as e:
            db.rollback()
            logger.warning(f"Rolled back order for diner {user.id}: {type(e).__name__}: {e}")
            raise

        return OrderResponse(
            id=db_order.id,
            franchise_id=order_in.franchise_id,
            store_id=order_in.store_id,
            items=items,
        )


# Create a singleton instance
order_service = OrderService()
