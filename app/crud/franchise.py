from typing import Optional, List, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import select, delete, func
from app.crud.base import CRUDBase, get_id
from app.models.franchise import Franchise, Store
from app.models.order import DinerOrder, OrderItem
from app.schemas.franchise import FranchiseCreate


class CRUDFranchise(CRUDBase[Franchise, FranchiseCreate, FranchiseCreate]):
    """
    CRUD operations for Franchise.

    Admin assignments live in userRole and are handled by the user CRUD.
    """

    def get_id_by_name(self, db: Session, name: str) -> Optional[int]:
        return get_id(db, Franchise, "name", name)

    def get_multi_by_name(
        self,
        db: Session,
        *,
        name_pattern: str,
        skip: int = 0,
        limit: int = 10
    ) -> List[Franchise]:
        """Franchises whose name matches a SQL LIKE pattern, ordered by id."""
        stmt = (
            select(Franchise)
            .where(Franchise.name.like(name_pattern))
            .order_by(Franchise.id)
            .offset(skip)
            .limit(limit)
        )
        return list(db.execute(stmt).scalars().all())

    def get_by_ids(self, db: Session, ids: List[int]) -> List[Franchise]:
        if not ids:
            return []
        stmt = select(Franchise).where(Franchise.id.in_(ids)).order_by(Franchise.id)
        return list(db.execute(stmt).scalars().all())

    def create(self, db: Session, *, name: str, commit: bool = True) -> Franchise:
        return self._persist(db, Franchise(name=name), commit)

    def get_stores(self, db: Session, franchise_id: int) -> List[Store]:
        stmt = select(Store).where(Store.franchise_id == franchise_id).order_by(Store.id)
        return list(db.execute(stmt).scalars().all())

    def get_stores_with_revenue(self, db: Session, franchise_id: int) -> List[Tuple[int, str, float]]:
        """
        Stores of a franchise with the summed price of every item ordered there.

        Stores without orders report a revenue of zero.
        """
        stmt = (
            select(
                Store.id,
                Store.name,
                func.coalesce(func.sum(OrderItem.price), 0).label("total_revenue"),
            )
            .select_from(Store)
            .outerjoin(DinerOrder, DinerOrder.store_id == Store.id)
            .outerjoin(OrderItem, OrderItem.order_id == DinerOrder.id)
            .where(Store.franchise_id == franchise_id)
            .group_by(Store.id, Store.name)
            .order_by(Store.id)
        )
        return [(row.id, row.name, float(row.total_revenue)) for row in db.execute(stmt)]

    def delete_stores(self, db: Session, franchise_id: int) -> None:
        """Remove every store of a franchise without committing."""
        db.execute(delete(Store).where(Store.franchise_id == franchise_id))

    def delete_by_id(self, db: Session, franchise_id: int) -> None:
        """Remove the franchise row without committing."""
        db.execute(delete(Franchise).where(Franchise.id == franchise_id))


class CRUDStore:
    """CRUD operations for Store, always scoped to the owning franchise."""

    def __init__(self):
        self.model = Store

    def create(self, db: Session, *, franchise_id: int, name: str) -> Store:
        db_store = Store(franchise_id=franchise_id, name=name)
        db.add(db_store)
        db.commit()
        db.refresh(db_store)
        return db_store

    def delete(self, db: Session, *, franchise_id: int, store_id: int) -> None:
        db.execute(delete(Store).where(Store.franchise_id == franchise_id, Store.id == store_id))
        db.commit()


# Create singleton instances
franchise = CRUDFranchise(Franchise)
store = CRUDStore()
