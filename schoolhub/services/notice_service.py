# schoolhub/services/notice_service.py
"""Events and announcements: school-wide or addressed to one class."""
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from .visibility import class_or_school_wide, ensure_teaches_class
from ..core.exceptions import NotFoundError, PermissionDenied
from ..core.security import CurrentUser, Role
from ..models import Event, Announcement, ClassModel


class NoticeService(BaseService):
    date_column = "start_time"

    def _load(self):
        return (selectinload(self.model.class_ref),)

    async def list_visible(
        self,
        user: CurrentUser,
        page: int = 1,
        size: int = 10,
        search: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> Dict[str, Any]:
        stmt = select(self.model)
        scope = class_or_school_wide(user, self.model.class_id)
        if scope is not None:
            stmt = stmt.where(scope)
        if search:
            stmt = stmt.where(self.model.title.ilike(f"%{search}%"))

        if sort in ("asc", "desc"):
            stmt = stmt.order_by(self.model.title.asc() if sort == "asc" else self.model.title.desc())
        else:
            stmt = stmt.order_by(getattr(self.model, self.date_column).desc())
        return await self.paginate(stmt, page, size, options=self._load())

    async def get_visible(self, id: UUID, user: CurrentUser):
        stmt = select(self.model).where(self.model.id == id).options(*self._load())
        scope = class_or_school_wide(user, self.model.class_id)
        if scope is not None:
            stmt = stmt.where(scope)
        obj = (await self.db.execute(stmt)).scalar_one_or_none()
        if obj is None:
            raise NotFoundError(self.resource_name, id)
        return obj

    async def _check_class(self, class_id: Optional[UUID], user: CurrentUser) -> None:
        if class_id is not None and await self.db.get(ClassModel, class_id) is None:
            raise NotFoundError("Class", class_id)
        await ensure_teaches_class(self.db, user, class_id)

    async def _ensure_can_modify(self, obj, user: CurrentUser) -> None:
        # School-wide rows can only be changed by admins once published
        if user.role == Role.TEACHER and obj.class_id is None:
            raise PermissionDenied(f"Only admins can change school-wide {self.resource_name.lower()}s")
        await ensure_teaches_class(self.db, user, obj.class_id)

    async def create_for(self, data: Dict[str, Any], user: CurrentUser):
        await self._check_class(data.get("class_id"), user)
        obj = self.model(**data)
        self.db.add(obj)
        await self.commit()
        return await self.get_or_404(obj.id, options=self._load())

    async def update_for(self, id: UUID, data: Dict[str, Any], user: CurrentUser):
        obj = await self.get_or_404(id)
        await self._ensure_can_modify(obj, user)
        await self._check_class(data.get("class_id"), user)
        if user.role == Role.TEACHER and data.get("class_id") is None:
            raise PermissionDenied(f"Only admins can make {self.resource_name.lower()}s school-wide")

        for key, value in data.items():
            setattr(obj, key, value)
        await self.commit()
        return await self.get_or_404(id, options=self._load())

    async def delete_for(self, id: UUID, user: CurrentUser) -> None:
        obj = await self.get_or_404(id)
        await self._ensure_can_modify(obj, user)
        await self.db.delete(obj)
        await self.commit()


class EventService(NoticeService):
    resource_name = "Event"
    date_column = "start_time"

    def __init__(self, db: AsyncSession):
        super().__init__(Event, db)


class AnnouncementService(NoticeService):
    resource_name = "Announcement"
    date_column = "date"

    def __init__(self, db: AsyncSession):
        super().__init__(Announcement, db)
