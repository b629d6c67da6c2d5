# schoolhub/services/calendar_service.py
"""Modules (teaching periods) and the holidays excluded from lesson generation."""
from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from ..core.exceptions import NotFoundError
from ..models import Module, Holiday

logger = logging.getLogger(__name__)


class ModuleService(BaseService[Module]):
    resource_name = "Module"

    def __init__(self, db: AsyncSession):
        super().__init__(Module, db)

    async def list_modules(self) -> List[Module]:
        result = await self.db.execute(
            select(Module).options(selectinload(Module.holidays)).order_by(Module.start_date.asc())
        )
        return result.scalars().all()

    async def get_module(self, module_id: UUID) -> Module:
        return await self.get_or_404(module_id, options=(selectinload(Module.holidays),))

    async def create_module(self, data: Dict[str, Any]) -> Module:
        holidays = data.pop("holidays", [])
        module = Module(**data)
        module.holidays = [Holiday(**h) for h in holidays]
        self.db.add(module)
        await self.commit()
        logger.info(f"Created module {module.name} with {len(holidays)} holidays")
        return await self.get_module(module.id)

    async def update_module(self, module_id: UUID, data: Dict[str, Any]) -> Module:
        module = await self.get_module(module_id)
        for key, value in data.items():
            setattr(module, key, value)
        await self.commit()
        return await self.get_module(module_id)


class HolidayService(BaseService[Holiday]):
    resource_name = "Holiday"

    def __init__(self, db: AsyncSession):
        super().__init__(Holiday, db)

    async def list_holidays(self, module_id: Optional[UUID] = None) -> List[Holiday]:
        """All holidays, or those that apply to one module (its own plus global ones)"""
        stmt = select(Holiday)
        if module_id:
            stmt = stmt.where(or_(Holiday.module_id.is_(None), Holiday.module_id == module_id))
        result = await self.db.execute(stmt.order_by(Holiday.date.asc()))
        return result.scalars().all()

    async def create_holiday(self, data: Dict[str, Any]) -> Holiday:
        if data.get("module_id") and await self.db.get(Module, data["module_id"]) is None:
            raise NotFoundError("Module", data["module_id"])
        return await self.create(data)
