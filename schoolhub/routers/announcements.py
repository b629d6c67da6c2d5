# schoolhub/routers/announcements.py
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, require_any_role, require_staff
from ..models import Announcement
from ..schemas.notices import AnnouncementCreate, AnnouncementUpdate
from ..services.notice_service import AnnouncementService
from ..utils.pagination import Paginator, PaginationParams
from .events import class_summary

router = APIRouter(prefix="/api/v1/announcements", tags=["Announcements"])


def format_announcement(announcement: Announcement) -> dict:
    return {
        "id": str(announcement.id),
        "title": announcement.title,
        "description": announcement.description,
        "date": announcement.date.isoformat(),
        "class": class_summary(announcement.class_ref),
    }


@router.get("/", response_model=dict)
async def get_announcements(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    search: Optional[str] = Query(None),
    sort: Optional[str] = Query(None, pattern="^(asc|desc)$", description="Sort on title"),
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    service = AnnouncementService(db)
    result = await service.list_visible(
        current_user, page=pagination.page, size=pagination.size, search=search, sort=sort
    )
    return Paginator.from_page(result, format_announcement)


@router.get("/{announcement_id}", response_model=dict)
async def get_announcement(
    announcement_id: UUID,
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    service = AnnouncementService(db)
    return format_announcement(await service.get_visible(announcement_id, current_user))


@router.post("/", response_model=dict, status_code=201)
async def create_announcement(
    announcement_data: AnnouncementCreate,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AnnouncementService(db)
    announcement = await service.create_for(announcement_data.model_dump(), current_user)
    return {
        "success": True,
        "message": "Announcement has been created!",
        "announcement": format_announcement(announcement),
    }


@router.put("/{announcement_id}", response_model=dict)
async def update_announcement(
    announcement_id: UUID,
    announcement_data: AnnouncementUpdate,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AnnouncementService(db)
    announcement = await service.update_for(announcement_id, announcement_data.model_dump(), current_user)
    return {
        "success": True,
        "message": "Announcement has been updated!",
        "announcement": format_announcement(announcement),
    }


@router.delete("/{announcement_id}", response_model=dict)
async def delete_announcement(
    announcement_id: UUID,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AnnouncementService(db)
    await service.delete_for(announcement_id, current_user)
    return {"success": True, "message": "Announcement has been deleted!"}
