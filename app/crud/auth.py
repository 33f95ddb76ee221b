from sqlalchemy.orm import Session
from sqlalchemy import select
from app.models.auth import AuthToken


class CRUDAuthToken:
    """
    CRUD operations for the auth table.

    Rows are keyed by the token signature segment, never the full token.
    """

    def __init__(self):
        self.model = AuthToken

    def exists(self, db: Session, signature: str) -> bool:
        if not signature:
            return False
        stmt = select(AuthToken.user_id).where(AuthToken.token == signature)
        return db.execute(stmt).first() is not None

    def create(self, db: Session, *, user_id: int, signature: str) -> None:
        """Store a signature for ``user_id``; empty or existing signatures are left alone."""
        if not signature or self.exists(db, signature):
            return
        db.add(AuthToken(token=signature, user_id=user_id))
        db.commit()

    def delete(self, db: Session, *, signature: str) -> None:
        db_token = db.get(AuthToken, signature)
        if db_token:
            db.delete(db_token)
            db.commit()


# Create singleton instance
auth_token = CRUDAuthToken()
