from typing import List, Optional, Tuple
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from app.crud.franchise import franchise as franchise_crud, store as store_crud
from app.crud.user import user as user_crud
from app.models.franchise import Franchise
from app.models.user import Role
from app.schemas.franchise import (
    FranchiseAdmin,
    FranchiseCreate,
    FranchiseResponse,
    StoreCreate,
    StoreResponse,
)
from app.schemas.user import UserResponse
from app.core.authorization import is_admin
from app.core.logging_config import logger


class FranchiseService:
    """
    Service layer for franchises and their stores.

    Franchise admins are users holding a franchisee role whose object id is
    the franchise id.
    """

    def __init__(self):
        self.crud = franchise_crud
        self.store_crud = store_crud

    def get_franchise(self, db: Session, franchise: Franchise | FranchiseResponse) -> FranchiseResponse:
        """
        Hydrate a franchise stub with its admins and stores.

        Each store carries totalRevenue, the summed price of all items
        ordered at that store.
        """
        admins = [
            FranchiseAdmin(id=u.id, name=u.name, email=u.email)
            for u in user_crud.get_franchise_admins(db, franchise.id)
        ]
        stores = [
            StoreResponse(id=store_id, name=name, total_revenue=revenue)
            for store_id, name, revenue in self.crud.get_stores_with_revenue(db, franchise.id)
        ]
        return FranchiseResponse(id=franchise.id, name=franchise.name, admins=admins, stores=stores)

    def get_franchise_by_id(self, db: Session, franchise_id: int) -> Optional[FranchiseResponse]:
        db_franchise = self.crud.get(db, franchise_id)
        if db_franchise is None:
            return None
        return self.get_franchise(db, db_franchise)

    def get_franchises(
        self,
        db: Session,
        auth_user: Optional[UserResponse] = None,
        page: int = 0,
        limit: int = 10,
        name_filter: str = "*"
    ) -> Tuple[List[FranchiseResponse], bool]:
        """
        List franchises whose name matches ``name_filter``.

        Admin callers get admins and store revenue for every franchise; other
        callers get store ids and names only.

        Returns:
            Tuple of (franchises on this page, more pages available)
        """
        pattern = (name_filter or "*").replace("*", "%")
        rows = self.crud.get_multi_by_name(
            db,
            name_pattern=pattern,
            skip=page * limit,
            limit=limit + 1
        )
        more = len(rows) > limit
        rows = rows[:limit]

        if is_admin(auth_user):
            return [self.get_franchise(db, f) for f in rows], more

        franchises = []
        for f in rows:
            stores = [StoreResponse(id=s.id, name=s.name) for s in self.crud.get_stores(db, f.id)]
            franchises.append(FranchiseResponse(id=f.id, name=f.name, stores=stores))
        return franchises, more

    def get_user_franchises(self, db: Session, user_id: int) -> List[FranchiseResponse]:
        franchise_ids = user_crud.get_franchise_ids(db, user_id)
        if not franchise_ids:
            return []
        return [self.get_franchise(db, f) for f in self.crud.get_by_ids(db, franchise_ids)]

    def create_franchise(self, db: Session, franchise_in: FranchiseCreate) -> FranchiseResponse:
        """
        Create a franchise and grant its admins the franchisee role.

        Raises:
            HTTPException 404: If an admin email is not registered; nothing is
                written in that case
            HTTPException 409: If the franchise name is taken
        """
        admins = []
        for admin in franchise_in.admins:
            db_user = user_crud.get_by_email(db, admin.email)
            if db_user is None:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail=f"unknown user for franchise admin {admin.email} provided"
                )
            admins.append(FranchiseAdmin(id=db_user.id, name=db_user.name, email=db_user.email))

        try:
            db_franchise = self.crud.create(db, name=franchise_in.name, commit=False)
            for admin in admins:
                user_crud.add_role(
                    db,
                    user_id=admin.id,
                    role=Role.franchisee,
                    object_id=db_franchise.id,
                    commit=False
                )
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning(f"Rolled back franchise {franchise_in.name}: {e.orig}")
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"franchise {franchise_in.name} already exists"
            )
        except Exception:
            db.rollback()
            raise

        return FranchiseResponse(id=db_franchise.id, name=franchise_in.name, admins=admins, stores=[])

    def delete_franchise(self, db: Session, franchise_id: int) -> None:
        """
        Delete a franchise with its stores and franchisee roles atomically.

        Raises:
            HTTPException 500: If any step fails; the transaction is rolled
                back so nothing is removed
        """
        try:
            self.crud.delete_stores(db, franchise_id)
            user_crud.remove_franchise_roles(db, franchise_id)
            self.crud.delete_by_id(db, franchise_id)
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Rolled back deletion of franchise {franchise_id}: {type(e).__name__}: {e}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="unable to delete franchise"
            ) from e

    def create_store(self, db: Session, franchise_id: int, store_in: StoreCreate) -> StoreResponse:
        db_store = self.store_crud.create(db, franchise_id=franchise_id, name=store_in.name)
        return StoreResponse(id=db_store.id, franchise_id=franchise_id, name=db_store.name)

    def delete_store(self, db: Session, franchise_id: int, store_id: int) -> None:
        self.store_crud.delete(db, franchise_id=franchise_id, store_id=store_id)


# Create a singleton instance
franchise_service = FranchiseService()
