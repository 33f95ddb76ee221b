from sqlalchemy.orm import Session
from app.crud.auth import auth_token as auth_crud
from app.core.security import create_access_token, get_token_signature
from app.schemas.user import UserResponse


class AuthService:
    """
    Session bookkeeping for issued tokens.

    A user is logged in for a token exactly when the token's signature
    segment is stored in the auth table.
    """

    def __init__(self):
        self.crud = auth_crud

    def login_user(self, db: Session, user_id: int, token: str) -> None:
        self.crud.create(db, user_id=user_id, signature=get_token_signature(token))

    def logout_user(self, db: Session, token: str) -> None:
        self.crud.delete(db, signature=get_token_signature(token))

    def is_logged_in(self, db: Session, token: str) -> bool:
        return self.crud.exists(db, get_token_signature(token))

    def issue_token(self, db: Session, user: UserResponse) -> str:
        """
        Sign a token carrying the user and record it as a live session.

        Args:
            db: Database session
            user: User the token is issued for

        Returns:
            Encoded JWT
        """
        token = create_access_token(data=user.model_dump(mode="json", by_alias=True))
        self.login_user(db, user.id, token)
        return token


# Create a singleton instance
auth_service = AuthService()
