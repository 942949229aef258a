"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Generic, TypeVar, Optional, List, Tuple, Type
from uuid import UUID
from sqlalchemy.orm import Session, Query
from abc import ABC

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common CRUD operations.
    All repositories should inherit from this class.

    Write helpers take ``commit``; pass ``commit=False`` to stage several
    writes and commit them together in the service.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: UUID) -> Optional[ModelType]:
        """
        Get entity by ID.

        Args:
            entity_id: Entity UUID

        Returns:
            Entity or None if not found
        """
        return self.db.get(self.model, entity_id)

    def create(self, entity: ModelType, commit: bool = True) -> ModelType:
        """Create new entity"""
        self.db.add(entity)
        if commit:
            self.db.commit()
            self.db.refresh(entity)
        else:
            self.db.flush()
        return entity

    def update(self, entity: ModelType, commit: bool = True) -> ModelType:
        """Update existing entity"""
        if commit:
            self.db.commit()
            self.db.refresh(entity)
        else:
            self.db.flush()
        return entity

    def delete(self, entity: ModelType, commit: bool = True) -> None:
        """Delete a loaded entity"""
        self.db.delete(entity)
        if commit:
            self.db.commit()
        else:
            self.db.flush()

    def exists(self, entity_id: UUID) -> bool:
        """Check if entity exists"""
        return self.get_by_id(entity_id) is not None

    @staticmethod
    def paginate(query: Query, page: int, page_size: int) -> Tuple[List[ModelType], int]:
        """Apply offset pagination and return (items, total)."""
        total = query.order_by(None).count()
        items = query.offset((page - 1) * page_size).limit(page_size).all()
        return items, total
