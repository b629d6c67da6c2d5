# schoolhub/services/parent_service.py
from typing import Any, Dict, Optional
from uuid import UUID
import logging

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from .auth_service import AuthService
from ..core.exceptions import ValidationError
from ..core.security import get_password_hash
from ..models import Parent

logger = logging.getLogger(__name__)

PARENT_LOAD = (selectinload(Parent.students),)


class ParentService(BaseService[Parent]):
    resource_name = "Parent"

    def __init__(self, db: AsyncSession):
        super().__init__(Parent, db)

    async def list_parents(
        self,
        page: int = 1,
        size: int = 10,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        stmt = select(Parent)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(Parent.name.ilike(pattern), Parent.surname.ilike(pattern)))
        stmt = stmt.order_by(Parent.name.asc(), Parent.surname.asc())
        return await self.paginate(stmt, page, size, options=PARENT_LOAD)

    async def get_parent(self, parent_id: UUID) -> Parent:
        return await self.get_or_404(parent_id, options=PARENT_LOAD)

    async def create_parent(self, data: Dict[str, Any]) -> Parent:
        await AuthService(self.db).ensure_username_available(data["username"])
        password = data.pop("password")
        parent = Parent(**data, password_hash=get_password_hash(password))
        self.db.add(parent)
        await self.commit()
        logger.info(f"Created parent {parent.id} ({parent.username})")
        return await self.get_parent(parent.id)

    async def update_parent(self, parent_id: UUID, data: Dict[str, Any]) -> Parent:
        parent = await self.get_parent(parent_id)
        await AuthService(self.db).ensure_username_available(data["username"], exclude_id=parent_id)

        password = data.pop("password", None)
        if password:
            parent.password_hash = get_password_hash(password)
        for key, value in data.items():
            setattr(parent, key, value)

        await self.commit()
        return await self.get_parent(parent_id)

    async def delete(self, id: Any) -> None:
        parent = await self.get_parent(id)
        if parent.students:
            raise ValidationError("Parent still has students; reassign or delete them first")
        await self.db.delete(parent)
        await self.commit()
