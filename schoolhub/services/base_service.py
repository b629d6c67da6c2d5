# schoolhub/services/base_service.py
"""Base service with common CRUD operations."""
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from typing import Type, Any, Dict, Optional, Sequence, TypeVar, Generic
import logging

from ..core.exceptions import NotFoundError, DuplicateRecord

logger = logging.getLogger(__name__)

# Define generic type
T = TypeVar('T')


class BaseService(Generic[T]):
    resource_name = "Record"

    def __init__(self, model: Type[T], db: AsyncSession):
        self.model = model
        self.db = db

    async def get(self, id: Any, options: Sequence = ()) -> Optional[T]:
        stmt = select(self.model).where(self.model.id == id)
        if options:
            # Reload relationships that a previous commit or refresh expired
            stmt = stmt.options(*options).execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_404(self, id: Any, options: Sequence = ()) -> T:
        obj = await self.get(id, options)
        if obj is None:
            raise NotFoundError(self.resource_name, id)
        return obj

    async def paginate(self, stmt, page: int = 1, size: int = 10, options: Sequence = ()) -> Dict[str, Any]:
        """Run a filtered select with offset pagination and a total count"""
        count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
        total = (await self.db.execute(count_stmt)).scalar() or 0

        if options:
            stmt = stmt.options(*options)
        stmt = stmt.offset((page - 1) * size).limit(size)
        result = await self.db.execute(stmt)
        items = result.scalars().unique().all()

        return {
            "items": items,
            "total": total,
            "page": page,
            "size": size,
            "total_pages": (total + size - 1) // size,
            "has_next": page * size < total,
            "has_previous": page > 1,
        }

    async def commit(self):
        """Commit, mapping constraint violations to DuplicateRecord"""
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"{self.resource_name} integrity error: {e.orig}")
            raise DuplicateRecord()

    async def create(self, obj_in: Dict) -> T:
        obj = self.model(**obj_in)
        self.db.add(obj)
        await self.commit()
        await self.db.refresh(obj)
        return obj

    async def delete(self, id: Any) -> None:
        """Permanently delete a record; ORM cascades remove its dependents"""
        obj = await self.get_or_404(id)
        await self.db.delete(obj)
        await self.commit()
