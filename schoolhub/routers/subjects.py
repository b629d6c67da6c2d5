# schoolhub/routers/subjects.py
from typing import Optional
from uuid import UUID
from datetime import timedelta
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, require_admin
from ..models import Subject
from ..schemas.academic import SubjectCreate, SubjectUpdate
from ..services.subject_service import SubjectService
from ..utils.cache_decorators import cache_paginated_response
from ..utils.cache_invalidation import invalidate_cache
from ..utils.pagination import Paginator, PaginationParams

router = APIRouter(prefix="/api/v1/subjects", tags=["Subjects"])


def format_subject(subject: Subject) -> dict:
    return {
        "id": str(subject.id),
        "name": subject.name,
        "teachers": [
            {"id": str(t.id), "name": t.name, "surname": t.surname}
            for t in subject.teachers
        ],
    }


@router.get("/", response_model=dict)
@cache_paginated_response("subjects", expire=timedelta(minutes=10))
async def get_subjects(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    search: Optional[str] = Query(None),
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = SubjectService(db)
    result = await service.list_subjects(page=pagination.page, size=pagination.size, search=search)
    return Paginator.from_page(result, format_subject)


@router.get("/{subject_id}", response_model=dict)
async def get_subject(
    subject_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = SubjectService(db)
    return format_subject(await service.get_subject(subject_id))


@router.post("/", response_model=dict, status_code=201)
async def create_subject(
    subject_data: SubjectCreate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = SubjectService(db)
    subject = await service.create_subject(subject_data.model_dump())
    await invalidate_cache("subjects")
    return {
        "success": True,
        "message": "Subject has been created!",
        "subject": format_subject(subject),
    }


@router.put("/{subject_id}", response_model=dict)
async def update_subject(
    subject_id: UUID,
    subject_data: SubjectUpdate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = SubjectService(db)
    subject = await service.update_subject(subject_id, subject_data.model_dump())
    await invalidate_cache("subjects")
    return {
        "success": True,
        "message": "Subject has been updated!",
        "subject": format_subject(subject),
    }


@router.delete("/{subject_id}", response_model=dict)
async def delete_subject(
    subject_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Delete a subject together with its lessons"""
    service = SubjectService(db)
    await service.delete(subject_id)
    await invalidate_cache("subjects")
    return {"success": True, "message": "Subject has been deleted!"}
