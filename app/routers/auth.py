from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.database import get_db
from app.dependencies import get_bearer_token, get_current_user
from app.schemas.common import MessageResponse
from app.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserCreate, UserResponse
from app.services.auth import auth_service
from app.services.user import user_service
from app.core.logging_config import logger

router = APIRouter()


@router.post("", response_model=AuthResponse)
def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new diner and log them in.

    Returns:
        The created user and a session token

    Raises:
        HTTPException 400: If name, email or password is missing
    """
    if not request.name or not request.email or not request.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="name, email, and password are required"
        )

    user = user_service.add_user(
        db,
        UserCreate(name=request.name, email=request.email, password=request.password)
    )
    token = auth_service.issue_token(db, user)
    logger.info(f"Registered user: id={user.id}")
    return AuthResponse(user=user, token=token)


@router.put("", response_model=AuthResponse)
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """
    Log in with email and password.

    Raises:
        HTTPException 404: If the credentials do not match a user
    """
    user = user_service.get_user(db, credentials.email, credentials.password)
    token = auth_service.issue_token(db, user)
    return AuthResponse(user=user, token=token)


@router.delete("", response_model=MessageResponse)
def logout(
    token: str = Depends(get_bearer_token),
    _user: UserResponse = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """End the session of the presented token."""
    auth_service.logout_user(db, token)
    return MessageResponse(message="logout successful")
