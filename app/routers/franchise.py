from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import get_auth_user, get_current_user
from app.schemas.common import MessageResponse
from app.schemas.franchise import (
    FranchiseCreate,
    FranchiseListResponse,
    FranchiseResponse,
    StoreCreate,
    StoreResponse,
)
from app.schemas.user import UserResponse
from app.services.franchise import franchise_service
from app.core.authorization import can_act_on_user, can_manage_franchise, is_admin
from app.core.logging_config import logger

router = APIRouter()


@router.get("", response_model=FranchiseListResponse, response_model_exclude_none=True)
def get_franchises(
    page: int = Query(0, ge=0),
    limit: int = Query(10, ge=1),
    name: str = "*",
    auth_user: Optional[UserResponse] = Depends(get_auth_user),
    db: Session = Depends(get_db)
):
    """
    List franchises. Admin callers also see admins and store revenue.

    Args:
        page: 0-based page number
        limit: Page size
        name: Name filter, ``*`` matches anything
    """
    franchises, more = franchise_service.get_franchises(
        db,
        auth_user,
        page=page,
        limit=limit,
        name_filter=name
    )
    return FranchiseListResponse(franchises=franchises, more=more)


@router.get("/{user_id}", response_model=List[FranchiseResponse], response_model_exclude_none=True)
def get_user_franchises(
    user_id: int,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Franchises administered by ``user_id``; empty for other callers."""
    if not can_act_on_user(current_user, user_id):
        return []
    return franchise_service.get_user_franchises(db, user_id)


@router.post("", response_model=FranchiseResponse)
def create_franchise(
    franchise_data: FranchiseCreate,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a franchise (admin only)."""
    if not is_admin(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="unable to create a franchise")

    try:
        logger.info(f"Creating franchise: name={franchise_data.name}")
        result = franchise_service.create_franchise(db, franchise_data)
        logger.info(f"Franchise created successfully: id={result.id}")
        return result
    except Exception as e:
        logger.error(f"Error creating franchise: {type(e).__name__}: {str(e)}")
        raise


@router.delete("/{franchise_id}", response_model=MessageResponse)
def delete_franchise(
    franchise_id: int,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a franchise together with its stores (admin only)."""
    if not is_admin(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="unable to delete a franchise")

    franchise_service.delete_franchise(db, franchise_id)
    logger.info(f"Franchise deleted: id={franchise_id}")
    return MessageResponse(message="franchise deleted")


@router.post("/{franchise_id}/store", response_model=StoreResponse)
def create_store(
    franchise_id: int,
    store_data: StoreCreate,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Open a store. Allowed for admins and the franchise's own admins."""
    franchise = franchise_service.get_franchise_by_id(db, franchise_id)
    if not can_manage_franchise(current_user, franchise):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="unable to create a store")

    return franchise_service.create_store(db, franchise_id, store_data)


@router.delete("/{franchise_id}/store/{store_id}", response_model=MessageResponse)
def delete_store(
    franchise_id: int,
    store_id: int,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Close a store. Allowed for admins and the franchise's own admins."""
    franchise = franchise_service.get_franchise_by_id(db, franchise_id)
    if not can_manage_franchise(current_user, franchise):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="unable to delete a store")

    franchise_service.delete_store(db, franchise_id, store_id)
    return MessageResponse(message="store deleted")
