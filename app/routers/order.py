from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import get_current_user
from app.schemas.menu import MenuItemCreate, MenuItemResponse
from app.schemas.order import OrderCreate, OrderFulfillmentResponse, OrderListResponse
from app.schemas.user import UserResponse
from app.services.factory_client import factory_client
from app.services.menu import menu_service
from app.services.order import order_service
from app.core.authorization import is_admin
from app.core.logging_config import logger

router = APIRouter()


@router.get("/menu", response_model=List[MenuItemResponse])
def get_menu(db: Session = Depends(get_db)):
    """The pizza menu."""
    return menu_service.get_menu(db)


@router.put("/menu", response_model=List[MenuItemResponse])
def add_menu_item(
    item: MenuItemCreate,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Add an item to the menu (admin only).

    Returns:
        The full menu including the new item
    """
    if not is_admin(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="unable to add menu item")

    created = menu_service.add_menu_item(db, item)
    logger.info(f"Menu item added: id={created.id}, title={created.title}")
    return menu_service.get_menu(db)


@router.get("", response_model=OrderListResponse)
def get_orders(
    page: int = Query(1, ge=1),
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Orders placed by the authenticated diner."""
    return order_service.get_orders(db, current_user, page)


@router.post("", response_model=OrderFulfillmentResponse)
def create_order(
    order_data: OrderCreate,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Place an order and hand it to the pizza factory.

    The order is stored before the factory is called. When the factory
    rejects it the caller gets a 500 with the factory's report link.
    """
    order = order_service.add_diner_order(db, current_user, order_data)
    logger.info(f"Order created: id={order.id}, diner_id={current_user.id}")

    result = factory_client.submit_order(current_user, order)
    if not result.ok:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": "Failed to fulfill order at factory",
                "followLinkToEndChaos": result.report_url,
            },
        )

    return OrderFulfillmentResponse(
        order=order,
        follow_link_to_end_chaos=result.report_url,
        jwt=result.jwt,
    )
