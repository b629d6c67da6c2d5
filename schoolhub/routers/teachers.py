# schoolhub/routers/teachers.py
from typing import Optional
from uuid import UUID
from datetime import timedelta
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, require_admin, require_staff
from ..models import Teacher
from ..schemas.users import TeacherCreate, TeacherUpdate
from ..services.teacher_service import TeacherService
from ..utils.cache_decorators import cache_paginated_response
from ..utils.cache_invalidation import invalidate_cache
from ..utils.pagination import Paginator, PaginationParams

router = APIRouter(prefix="/api/v1/teachers", tags=["Teachers"])


def format_teacher(teacher: Teacher) -> dict:
    classes = {lesson.class_ref.id: lesson.class_ref.name for lesson in teacher.lessons}
    return {
        "id": str(teacher.id),
        "username": teacher.username,
        "name": teacher.name,
        "surname": teacher.surname,
        "email": teacher.email,
        "phone": teacher.phone,
        "address": teacher.address,
        "img": teacher.img,
        "blood_type": teacher.blood_type,
        "birthday": teacher.birthday.isoformat(),
        "gender": teacher.gender.value,
        "subjects": [{"id": str(s.id), "name": s.name} for s in teacher.subjects],
        "classes": [{"id": str(cid), "name": name} for cid, name in sorted(classes.items(), key=lambda c: c[1])],
        "created_at": teacher.created_at.isoformat() if teacher.created_at else None,
    }


@router.get("/", response_model=dict)
@cache_paginated_response("teachers", expire=timedelta(minutes=5))
async def get_teachers(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    class_id: Optional[UUID] = Query(None, description="Teachers with a lesson in this class"),
    search: Optional[str] = Query(None),
    sort: Optional[str] = Query(None, pattern="^(asc|desc)$"),
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    """Get paginated teachers with filtering"""
    service = TeacherService(db)
    result = await service.list_teachers(
        page=pagination.page,
        size=pagination.size,
        class_id=class_id,
        search=search,
        sort=sort,
    )
    return Paginator.from_page(result, format_teacher)


@router.get("/{teacher_id}", response_model=dict)
async def get_teacher(
    teacher_id: UUID,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    """Teacher profile with subject, lesson and supervised class counts"""
    service = TeacherService(db)
    detail = await service.get_detail(teacher_id)
    return {
        **format_teacher(detail["teacher"]),
        "counts": detail["counts"],
    }


@router.post("/", response_model=dict, status_code=201)
async def create_teacher(
    teacher_data: TeacherCreate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = TeacherService(db)
    teacher = await service.create_teacher(teacher_data.model_dump())
    await invalidate_cache("teachers")
    return {
        "success": True,
        "message": "Teacher has been created!",
        "teacher": format_teacher(teacher),
    }


@router.put("/{teacher_id}", response_model=dict)
async def update_teacher(
    teacher_id: UUID,
    teacher_data: TeacherUpdate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = TeacherService(db)
    teacher = await service.update_teacher(teacher_id, teacher_data.model_dump())
    await invalidate_cache("teachers")
    return {
        "success": True,
        "message": "Teacher has been updated!",
        "teacher": format_teacher(teacher),
    }


@router.delete("/{teacher_id}", response_model=dict)
async def delete_teacher(
    teacher_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Delete a teacher together with their lessons"""
    service = TeacherService(db)
    await service.delete(teacher_id)
    await invalidate_cache("teachers")
    return {"success": True, "message": "Teacher has been deleted!"}
