from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import get_current_user
from app.schemas.common import MessageResponse
from app.schemas.user import AuthResponse, UserListResponse, UserResponse, UserUpdate
from app.services.auth import auth_service
from app.services.user import user_service
from app.core.authorization import can_act_on_user, is_admin
from app.core.logging_config import logger

router = APIRouter()


@router.get("/me", response_model=UserResponse)
def get_me(current_user: UserResponse = Depends(get_current_user)):
    """The authenticated user as carried by the session token."""
    return current_user


@router.get("", response_model=UserListResponse)
def list_users(
    page: int = Query(0, ge=0),
    limit: int = Query(10, ge=1),
    name: str = "*",
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Paginated user listing for admins.

    Args:
        page: 0-based page number
        limit: Page size
        name: Name filter, ``*`` matches anything
    """
    if not is_admin(current_user):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="unauthorized")

    users, more = user_service.get_users(db, page=page, limit=limit, name_filter=name)
    return UserListResponse(users=users, more=more)


@router.put("/{user_id}", response_model=AuthResponse)
def update_user(
    user_id: int,
    user_data: UserUpdate,
    current_user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update a user profile and issue a token reflecting the new details.

    Raises:
        HTTPException 403: If the caller is neither the user nor an admin
    """
    if not can_act_on_user(current_user, user_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="unauthorized")

    user = user_service.update_user(
        db,
        user_id,
        name=user_data.name,
        email=user_data.email,
        password=user_data.password
    )
    token = auth_service.issue_token(db, user)
    logger.info(f"Updated user: id={user_id} by user {current_user.id}")
    return AuthResponse(user=user, token=token)


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: int, _user: UserResponse = Depends(get_current_user)):
    """Users are never hard-deleted."""
    return MessageResponse(message="not implemented")
