import uuid
from typing import Optional
from datetime import datetime, timedelta, timezone
from jose import jwt
import bcrypt
from app.core.config import settings

SECRET_KEY = settings.SECRET_KEY
ALGORITHM = settings.ALGORITHM


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt."""
    password_bytes = password.encode('utf-8')
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    password_bytes = plain_password.encode('utf-8')
    hashed_bytes = hashed_password.encode('utf-8')
    return bcrypt.checkpw(password_bytes, hashed_bytes)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a JWT carrying the user claims.

    Every token gets its own iat and jti, so repeated logins by one user
    yield distinct signatures and distinct sessions.

    Args:
        data: Claims to embed (id, name, email, roles)
        expires_delta: Optional lifetime. When neither this nor
            ACCESS_TOKEN_EXPIRE_MINUTES is set the token has no exp claim
            and stays valid until its signature is removed at logout.

    Returns:
        Encoded JWT token string
    """
    to_encode = data.copy()
    to_encode.update({"iat": datetime.now(timezone.utc), "jti": uuid.uuid4().hex})

    if expires_delta is None and settings.ACCESS_TOKEN_EXPIRE_MINUTES:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    if expires_delta is not None:
        to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})

    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> dict:
    """
    Verify and decode a JWT token.

    Raises:
        JWTError: If token is invalid or expired
    """
    return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])


def get_token_signature(token: str) -> str:
    """
    Return the signature segment of a header.payload.signature token.

    The signature is the key of the auth table. Malformed tokens map to an
    empty string, which never matches a stored session.
    """
    parts = (token or "").split(".")
    if len(parts) > 2:
        return parts[2]
    return ""
