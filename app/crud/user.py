from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import select
from app.crud.base import CRUDBase
from app.models.user import User, UserRole, Role
from app.schemas.user import UserCreate, UserUpdate
from app.core.security import get_password_hash


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    """
    CRUD operations for User and its role assignments.

    Passwords are hashed here so plain text never reaches the session.
    """

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        """
        Retrieve user by email address.

        Returns:
            User instance (roles loaded) or None if not found
        """
        stmt = select(User).where(User.email == email)
        result = db.execute(stmt)
        return result.scalar_one_or_none()

    def get_multi_by_name(
        self,
        db: Session,
        *,
        name_pattern: str,
        skip: int = 0,
        limit: int = 10
    ) -> List[User]:
        """Users whose name matches a SQL LIKE pattern, ordered by id."""
        stmt = (
            select(User)
            .where(User.name.like(name_pattern))
            .order_by(User.id)
            .offset(skip)
            .limit(limit)
        )
        return list(db.execute(stmt).scalars().all())

    def create(
        self,
        db: Session,
        *,
        name: str,
        email: str,
        password: str,
        commit: bool = True
    ) -> User:
        """
        Create a new user with hashed password.

        Args:
            db: Database session
            name: Display name
            email: User email
            password: Plain text password (will be hashed)
            commit: Whether to commit immediately

        Returns:
            Created User instance
        """
        db_user = User(
            name=name,
            email=email,
            password=get_password_hash(password),
        )
        return self._persist(db, db_user, commit)

    def add_role(
        self,
        db: Session,
        *,
        user_id: int,
        role: Role,
        object_id: Optional[int] = None,
        commit: bool = True
    ) -> UserRole:
        db_role = UserRole(user_id=user_id, role=role, object_id=object_id)
        db.add(db_role)
        if commit:
            db.commit()
        else:
            db.flush()
        return db_role

    def get_franchise_ids(self, db: Session, user_id: int) -> List[int]:
        """Franchise ids the user administers through franchisee roles."""
        stmt = select(UserRole.object_id).where(
            UserRole.user_id == user_id,
            UserRole.role == Role.franchisee,
        ).order_by(UserRole.id)
        return [object_id for object_id in db.execute(stmt).scalars().all() if object_id is not None]

    def get_franchise_admins(self, db: Session, franchise_id: int) -> List[User]:
        """Users holding a franchisee role scoped to ``franchise_id``."""
        stmt = (
            select(User)
            .join(UserRole, UserRole.user_id == User.id)
            .where(UserRole.object_id == franchise_id, UserRole.role == Role.franchisee)
            .order_by(UserRole.id)
        )
        return list(db.execute(stmt).scalars().unique().all())

    def remove_franchise_roles(self, db: Session, franchise_id: int) -> None:
        """Delete every franchisee role pointing at ``franchise_id`` (no commit)."""
        stmt = select(UserRole).where(
            UserRole.object_id == franchise_id,
            UserRole.role == Role.franchisee,
        )
        for db_role in db.execute(stmt).scalars().all():
            db.delete(db_role)
        db.flush()


# Create singleton instance
user = CRUDUser(User)
