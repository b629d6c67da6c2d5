# schoolhub/routers/calendar.py
"""Modules (teaching periods) and holidays."""
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, require_admin, require_any_role
from ..models import Holiday, Module
from ..schemas.calendar import HolidayCreate, ModuleCreate, ModuleUpdate
from ..services.calendar_service import HolidayService, ModuleService

router = APIRouter(prefix="/api/v1/modules", tags=["Calendar"])
holidays_router = APIRouter(prefix="/api/v1/holidays", tags=["Calendar"])


def format_holiday(holiday: Holiday) -> dict:
    return {
        "id": str(holiday.id),
        "name": holiday.name,
        "date": holiday.date.isoformat(),
        "module_id": str(holiday.module_id) if holiday.module_id else None,
    }


def format_module(module: Module) -> dict:
    return {
        "id": str(module.id),
        "name": module.name,
        "start_date": module.start_date.isoformat(),
        "end_date": module.end_date.isoformat(),
        "holidays": [format_holiday(h) for h in sorted(module.holidays, key=lambda h: h.date)],
    }


@router.get("/", response_model=dict)
async def get_modules(
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    service = ModuleService(db)
    modules = await service.list_modules()
    return {"items": [format_module(m) for m in modules], "total": len(modules)}


@router.get("/{module_id}", response_model=dict)
async def get_module(
    module_id: UUID,
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    service = ModuleService(db)
    return format_module(await service.get_module(module_id))


@router.post("/", response_model=dict, status_code=201)
async def create_module(
    module_data: ModuleCreate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Create a module, optionally with its own holidays"""
    service = ModuleService(db)
    module = await service.create_module(module_data.model_dump())
    return {"success": True, "message": "Module has been created!", "module": format_module(module)}


@router.put("/{module_id}", response_model=dict)
async def update_module(
    module_id: UUID,
    module_data: ModuleUpdate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = ModuleService(db)
    module = await service.update_module(module_id, module_data.model_dump())
    return {"success": True, "message": "Module has been updated!", "module": format_module(module)}


@router.delete("/{module_id}", response_model=dict)
async def delete_module(
    module_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Delete a module and its own holidays; generated lessons are kept"""
    service = ModuleService(db)
    await service.delete(module_id)
    return {"success": True, "message": "Module has been deleted!"}


@holidays_router.get("/", response_model=dict)
async def get_holidays(
    module_id: Optional[UUID] = Query(None, description="Holidays that apply to this module"),
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    service = HolidayService(db)
    holidays = await service.list_holidays(module_id)
    return {"items": [format_holiday(h) for h in holidays], "total": len(holidays)}


@holidays_router.post("/", response_model=dict, status_code=201)
async def create_holiday(
    holiday_data: HolidayCreate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = HolidayService(db)
    holiday = await service.create_holiday(holiday_data.model_dump())
    return {"success": True, "message": "Holiday has been created!", "holiday": format_holiday(holiday)}


@holidays_router.delete("/{holiday_id}", response_model=dict)
async def delete_holiday(
    holiday_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = HolidayService(db)
    await service.delete(holiday_id)
    return {"success": True, "message": "Holiday has been deleted!"}
