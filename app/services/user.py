from typing import List, Optional, Tuple
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from app.crud.user import user as user_crud
from app.crud.franchise import franchise as franchise_crud
from app.models.user import User, Role
from app.schemas.user import UserCreate, UserResponse, RoleAssignment
from app.core.security import get_password_hash, verify_password
from app.core.logging_config import logger


def _unknown_user() -> HTTPException:
    # Bad credentials and unknown emails must look the same to callers
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="unknown user")


class UserService:
    """
    Service layer for users, their roles and credentials.

    Every multi-row write runs in a single transaction; a failure rolls the
    session back before the error propagates.
    """

    def __init__(self):
        self.crud = user_crud

    @staticmethod
    def to_response(db_user: User) -> UserResponse:
        """Public view of a user: roles attached, password never included."""
        return UserResponse.model_validate(db_user)

    def add_user(self, db: Session, user_in: UserCreate) -> UserResponse:
        """
        Register a user with hashed password and role assignments.

        Users registered without roles become diners. A franchisee role names
        its franchise; the name is resolved to an id before anything is
        written.

        Raises:
            HTTPException 404: If a franchisee role names an unknown franchise
            HTTPException 409: If the email is already registered
        """
        if self.crud.get_by_email(db, user_in.email):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"User with email {user_in.email} already exists"
            )

        assignments = user_in.roles or [RoleAssignment(role=Role.diner)]
        resolved: List[Tuple[Role, Optional[int]]] = []
        for assignment in assignments:
            object_id = assignment.object_id
            if assignment.role == Role.franchisee and assignment.object:
                object_id = franchise_crud.get_id_by_name(db, assignment.object)
                if object_id is None:
                    raise HTTPException(
                        status_code=status.HTTP_404_NOT_FOUND,
                        detail=f"unknown franchise {assignment.object}"
                    )
            resolved.append((assignment.role, object_id))

        try:
            db_user = self.crud.create(
                db,
                name=user_in.name,
                email=user_in.email,
                password=user_in.password,
                commit=False
            )
            for role, object_id in resolved:
                self.crud.add_role(db, user_id=db_user.id, role=role, object_id=object_id, commit=False)
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"Rolled back registration of {user_in.email}: {e.orig}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"User with email {user_in.email} already exists"
            )
        except Exception:
            db.rollback()
            raise

        db.refresh(db_user)
        return self.to_response(db_user)

    def get_user(self, db: Session, email: str, password: Optional[str] = None) -> UserResponse:
        """
        Look a user up by email, optionally checking the password.

        Raises:
            HTTPException 404: If the email is unknown or the password is wrong
        """
        db_user = self.crud.get_by_email(db, email)
        if db_user is None:
            raise _unknown_user()
        if password is not None and not verify_password(password, db_user.password):
            raise _unknown_user()
        return self.to_response(db_user)

    def get_user_by_id(self, db: Session, user_id: int) -> UserResponse:
        db_user = self.crud.get(db, user_id)
        if db_user is None:
            raise _unknown_user()
        return self.to_response(db_user)

    def update_user(
        self,
        db: Session,
        user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        password: Optional[str] = None
    ) -> UserResponse:
        """
        Apply a partial profile update and return the reloaded user.

        Only the supplied fields are written; a new password is re-hashed.

        Raises:
            HTTPException 404: If the user does not exist
            HTTPException 409: If the new email belongs to someone else
        """
        db_user = self.crud.get(db, user_id)
        if db_user is None:
            raise _unknown_user()

        update_data = {}
        if name:
            update_data["name"] = name
        if email:
            update_data["email"] = email
        if password:
            update_data["password"] = get_password_hash(password)

        if update_data:
            try:
                self.crud.update(db, db_obj=db_user, obj_in=update_data)
            except IntegrityError:
                db.rollback()
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"User with email {email} already exists"
                )

        return self.get_user_by_id(db, user_id)

    def get_users(
        self,
        db: Session,
        page: int = 0,
        limit: int = 10,
        name_filter: str = "*"
    ) -> Tuple[List[UserResponse], bool]:
        """
        List users whose name matches ``name_filter`` (``*`` is a wildcard).

        One extra row is fetched to tell whether another page exists.

        Returns:
            Tuple of (users on this page, more pages available)
        """
        pattern = (name_filter or "*").replace("*", "%")
        rows = self.crud.get_multi_by_name(
            db,
            name_pattern=pattern,
            skip=page * limit,
            limit=limit + 1
        )
        more = len(rows) > limit
        return [self.to_response(db_user) for db_user in rows[:limit]], more


# Create a singleton instance
user_service = UserService()
