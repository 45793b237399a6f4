"""
Base Repository

Common data access for the attempt and tracking logs. Every repository
shares the request's Session; services never touch the Session directly.
"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from app.core.database import Base
from app.core.decorator import db_exception

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository class with common operations.

    All repositories should inherit from this class.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    # -----------------------------
    # Get Element By id
    # -----------------------------
    @db_exception
    def get_by_id(self, id: Any) -> Optional[ModelType]:
        """Get a record by ID."""
        return self.db.query(self.model).filter(self.model.id == id).first()

    # -----------------------------
    # Create Single Record
    # -----------------------------
    @db_exception
    def create(self, **kwargs) -> ModelType:
        """Create a new record."""
        instance = self.model(**kwargs)
        self.db.add(instance)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(instance)
        return instance

    # -----------------------------
    # Update record in place
    # -----------------------------
    @db_exception
    def update(self, instance: ModelType, **kwargs) -> ModelType:
        """Apply ``kwargs`` to an already loaded record and persist it."""
        for key, value in kwargs.items():
            setattr(instance, key, value)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(instance)
        return instance

    @db_exception
    def count(self) -> int:
        """Count total records."""
        return self.db.query(self.model).count()
