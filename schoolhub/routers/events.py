# schoolhub/routers/events.py
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, require_any_role, require_staff
from ..models import Event
from ..schemas.notices import EventCreate, EventUpdate
from ..services.notice_service import EventService
from ..utils.pagination import Paginator, PaginationParams

router = APIRouter(prefix="/api/v1/events", tags=["Events"])


def class_summary(class_ref) -> Optional[dict]:
    if class_ref is None:
        return None
    return {"id": str(class_ref.id), "name": class_ref.name}


def format_event(event: Event) -> dict:
    return {
        "id": str(event.id),
        "title": event.title,
        "description": event.description,
        "start_time": event.start_time.isoformat(),
        "end_time": event.end_time.isoformat(),
        "class": class_summary(event.class_ref),
    }


@router.get("/", response_model=dict)
async def get_events(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    search: Optional[str] = Query(None),
    sort: Optional[str] = Query(None, pattern="^(asc|desc)$", description="Sort on title"),
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    """School-wide events plus those of the caller's classes"""
    service = EventService(db)
    result = await service.list_visible(
        current_user, page=pagination.page, size=pagination.size, search=search, sort=sort
    )
    return Paginator.from_page(result, format_event)


@router.get("/{event_id}", response_model=dict)
async def get_event(
    event_id: UUID,
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    service = EventService(db)
    return format_event(await service.get_visible(event_id, current_user))


@router.post("/", response_model=dict, status_code=201)
async def create_event(
    event_data: EventCreate,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = EventService(db)
    event = await service.create_for(event_data.model_dump(), current_user)
    return {"success": True, "message": "Event has been created!", "event": format_event(event)}


@router.put("/{event_id}", response_model=dict)
async def update_event(
    event_id: UUID,
    event_data: EventUpdate,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = EventService(db)
    event = await service.update_for(event_id, event_data.model_dump(), current_user)
    return {"success": True, "message": "Event has been updated!", "event": format_event(event)}


@router.delete("/{event_id}", response_model=dict)
async def delete_event(
    event_id: UUID,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = EventService(db)
    await service.delete_for(event_id, current_user)
    return {"success": True, "message": "Event has been deleted!"}
