from typing import Generic, TypeVar, Type, Optional, Any, Dict
from sqlalchemy.orm import Session
from sqlalchemy import select
from pydantic import BaseModel
from app.database import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


def get_id(db: Session, model: Type[Base], column: str, value: Any) -> Optional[int]:
    """
    Look up the id of the first row where ``column`` equals ``value``.

    Args:
        db: Database session
        model: SQLAlchemy model class
        column: Attribute name to match on
        value: Value to match

    Returns:
        The row id, or None when nothing matches. Callers decide which
        not-found error to raise.
    """
    stmt = select(model.id).where(getattr(model, column) == value).limit(1)
    return db.execute(stmt).scalar_one_or_none()


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Generic CRUD class shared by the pizza service aggregates.

    Write methods take a ``commit`` flag. Services pass ``commit=False`` when
    several writes must land in one transaction and commit once at the end.

    Type Parameters:
        ModelType: SQLAlchemy model class
        CreateSchemaType: Pydantic schema for creating records
        UpdateSchemaType: Pydantic schema for updating records
    """

    def __init__(self, model: Type[ModelType]):
        """
        Initialize CRUD object with model class.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    def _persist(self, db: Session, db_obj: ModelType, commit: bool) -> ModelType:
        db.add(db_obj)
        if commit:
            db.commit()
            db.refresh(db_obj)
        else:
            db.flush()  # Get ID without committing
        return db_obj

    def get(self, db: Session, id: int) -> Optional[ModelType]:
        """
        Retrieve a single record by ID.

        Returns:
            Model instance or None if not found
        """
        stmt = select(self.model).where(self.model.id == id)
        result = db.execute(stmt)
        return result.scalar_one_or_none()

    def create(
        self,
        db: Session,
        *,
        obj_in: CreateSchemaType,
        commit: bool = True
    ) -> ModelType:
        """
        Create a new record from a Pydantic schema.

        Args:
            db: Database session
            obj_in: Pydantic schema with creation data
            commit: Whether to commit immediately

        Returns:
            Created model instance with its id assigned
        """
        db_obj = self.model(**obj_in.model_dump())
        return self._persist(db, db_obj, commit)

    def update(
        self,
        db: Session,
        *,
        db_obj: ModelType,
        obj_in: UpdateSchemaType | Dict[str, Any],
        commit: bool = True
    ) -> ModelType:
        """
        Update an existing record with the fields that were supplied.

        Args:
            db: Database session
            db_obj: Existing model instance to update
            obj_in: Pydantic schema or dict with update data
            commit: Whether to commit immediately

        Returns:
            Updated model instance
        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            setattr(db_obj, field, value)

        return self._persist(db, db_obj, commit)
