"""
Entity Store - the persistence boundary the lifecycle services talk to.

Thin wrapper over a caller-owned Session: lookup by id, filtered lists,
counts, save (insert-or-update + flush) and delete. The store never
commits; transaction scope belongs to `app.db.unit_of_work.atomic`.
"""
from typing import Any, List, Optional, Type, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class EntityStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, model: Type[ModelT], entity_id: Any, for_update: bool = False) -> Optional[ModelT]:
        if entity_id is None:
            return None
        if not for_update:
            return self.db.get(model, entity_id)
        stmt = select(model).where(model.id == entity_id).with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def require(
        self,
        model: Type[ModelT],
        entity_id: Any,
        label: Optional[str] = None,
        for_update: bool = False,
    ) -> ModelT:
        """Like get(), but raises NotFoundError naming the entity."""
        entity = self.get(model, entity_id, for_update=for_update)
        if entity is None:
            raise NotFoundError(f"{label or model.__name__} not found: {entity_id}")
        return entity

    def list(self, model: Type[ModelT], order_by=None, for_update: bool = False, **filters) -> List[ModelT]:
        stmt = select(model).filter_by(**self._clean(filters))
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        if for_update:
            stmt = stmt.with_for_update()
        return list(self.db.execute(stmt).scalars().all())

    def count(self, model: Type[ModelT], **filters) -> int:
        stmt = select(func.count()).select_from(model).filter_by(**self._clean(filters))
        return self.db.execute(stmt).scalar_one()

    def save(self, entity: ModelT) -> ModelT:
        self.db.add(entity)
        self.db.flush()
        return entity

    def delete(self, model: Type[ModelT], entity_id: Any, label: Optional[str] = None) -> None:
        entity = self.require(model, entity_id, label=label)
        self.db.delete(entity)
        self.db.flush()

    @staticmethod
    def _clean(filters: dict) -> dict:
        # None means "no filter" for optional query parameters
        return {key: value for key, value in filters.items() if value is not None}
