# schoolhub/routers/classes.py
"""Classes and the grades they belong to."""
from typing import Optional
from uuid import UUID
from datetime import timedelta
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, require_admin, require_staff
from ..models import ClassModel, Grade
from ..schemas.academic import ClassCreate, ClassUpdate, GradeCreate
from ..services.class_service import ClassService, GradeService
from ..utils.cache_decorators import cache_paginated_response
from ..utils.cache_invalidation import invalidate_cache
from ..utils.pagination import Paginator, PaginationParams

router = APIRouter(prefix="/api/v1/classes", tags=["Classes"])
grades_router = APIRouter(prefix="/api/v1/grades", tags=["Grades"])


def format_grade(grade: Grade) -> dict:
    return {"id": str(grade.id), "level": grade.level}


def format_class(class_obj: ClassModel, students_count: Optional[int] = None) -> dict:
    supervisor = class_obj.supervisor
    return {
        "id": str(class_obj.id),
        "name": class_obj.name,
        "capacity": class_obj.capacity,
        "students_count": students_count,
        "grade": format_grade(class_obj.grade),
        "supervisor": {
            "id": str(supervisor.id),
            "name": supervisor.name,
            "surname": supervisor.surname,
        } if supervisor else None,
    }


@router.get("/", response_model=dict)
@cache_paginated_response("classes", expire=timedelta(minutes=5))
async def get_classes(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    supervisor_id: Optional[UUID] = Query(None),
    search: Optional[str] = Query(None),
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = ClassService(db)
    result = await service.list_classes(
        page=pagination.page,
        size=pagination.size,
        supervisor_id=supervisor_id,
        search=search,
    )
    counts = await service.student_counts([c.id for c in result["items"]])
    return Paginator.from_page(result, lambda c: format_class(c, counts.get(c.id, 0)))


@router.get("/{class_id}", response_model=dict)
async def get_class(
    class_id: UUID,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = ClassService(db)
    class_obj = await service.get_class(class_id)
    counts = await service.student_counts([class_id])
    return format_class(class_obj, counts.get(class_id, 0))


@router.post("/", response_model=dict, status_code=201)
async def create_class(
    class_data: ClassCreate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = ClassService(db)
    class_obj = await service.create_class(class_data.model_dump())
    await invalidate_cache("classes")
    return {
        "success": True,
        "message": "Class has been created!",
        "class": format_class(class_obj, 0),
    }


@router.put("/{class_id}", response_model=dict)
async def update_class(
    class_id: UUID,
    class_data: ClassUpdate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = ClassService(db)
    class_obj = await service.update_class(class_id, class_data.model_dump())
    await invalidate_cache("classes")
    return {
        "success": True,
        "message": "Class has been updated!",
        "class": format_class(class_obj),
    }


@router.delete("/{class_id}", response_model=dict)
async def delete_class(
    class_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Delete an empty class with its lessons, events and announcements"""
    service = ClassService(db)
    await service.delete(class_id)
    await invalidate_cache("classes")
    return {"success": True, "message": "Class has been deleted!"}


@grades_router.get("/", response_model=dict)
async def get_grades(
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = GradeService(db)
    grades = await service.list_grades()
    return {"items": [format_grade(g) for g in grades], "total": len(grades)}


@grades_router.post("/", response_model=dict, status_code=201)
async def create_grade(
    grade_data: GradeCreate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = GradeService(db)
    grade = await service.create(grade_data.model_dump())
    return {"success": True, "message": "Grade has been created!", "grade": format_grade(grade)}


@grades_router.delete("/{grade_id}", response_model=dict)
async def delete_grade(
    grade_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = GradeService(db)
    await service.delete(grade_id)
    return {"success": True, "message": "Grade has been deleted!"}
