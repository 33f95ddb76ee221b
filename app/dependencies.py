from typing import Optional
from fastapi import Depends, HTTPException, status, Request
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.orm import Session
from app.database import get_db
from app.core.security import verify_token
from app.core.logging_config import logger
from app.schemas.user import UserResponse
from app.services.auth import auth_service


def get_bearer_token(request: Request) -> Optional[str]:
    """Token from the ``Authorization: Bearer`` header, if any."""
    authorization = request.headers.get("Authorization")
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization[len("Bearer "):].strip() or None


def get_auth_user(
    token: Optional[str] = Depends(get_bearer_token),
    db: Session = Depends(get_db)
) -> Optional[UserResponse]:
    """
    Identify the caller without requiring authentication.

    The caller is known only when the token's signature is a live session in
    the auth table and the JWT verifies. The identity is the user carried in
    the token claims.

    Returns:
        UserResponse for a logged-in caller, None otherwise
    """
    if not token or not auth_service.is_logged_in(db, token):
        return None

    try:
        payload = verify_token(token)
        return UserResponse.model_validate(payload)
    except (JWTError, ValidationError) as e:
        logger.warning(f"Rejected session token: {type(e).__name__}")
        return None


def get_current_user(
    user: Optional[UserResponse] = Depends(get_auth_user)
) -> UserResponse:
    """
    Require a logged-in caller.

    Raises:
        HTTPException 401: If the request carries no live session
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
