# schoolhub/routers/students.py
from typing import Optional
from uuid import UUID
from datetime import timedelta
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, require_admin, require_staff
from ..models import Student
from ..schemas.users import StudentCreate, StudentUpdate
from ..services.student_service import StudentService
from ..utils.cache_decorators import cache_paginated_response
from ..utils.cache_invalidation import invalidate_cache
from ..utils.pagination import Paginator, PaginationParams

router = APIRouter(prefix="/api/v1/students", tags=["Students"])


def format_student(student: Student) -> dict:
    return {
        "id": str(student.id),
        "username": student.username,
        "name": student.name,
        "surname": student.surname,
        "email": student.email,
        "phone": student.phone,
        "address": student.address,
        "img": student.img,
        "blood_type": student.blood_type,
        "birthday": student.birthday.isoformat(),
        "gender": student.gender.value,
        "grade": {"id": str(student.grade.id), "level": student.grade.level},
        "class": {"id": str(student.class_ref.id), "name": student.class_ref.name},
        "parent": {
            "id": str(student.parent.id),
            "name": student.parent.name,
            "surname": student.parent.surname,
        },
        "created_at": student.created_at.isoformat() if student.created_at else None,
    }


@router.get("/", response_model=dict)
@cache_paginated_response("students", expire=timedelta(minutes=5))
async def get_students(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    class_id: Optional[UUID] = Query(None),
    teacher_id: Optional[UUID] = Query(None, description="Students of classes this teacher has lessons in"),
    search: Optional[str] = Query(None),
    sort: Optional[str] = Query(None, pattern="^(asc|desc)$"),
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    """Get paginated students with filtering"""
    service = StudentService(db)
    result = await service.list_students(
        page=pagination.page,
        size=pagination.size,
        class_id=class_id,
        teacher_id=teacher_id,
        search=search,
        sort=sort,
    )
    return Paginator.from_page(result, format_student)


@router.get("/{student_id}", response_model=dict)
async def get_student(
    student_id: UUID,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    """Student profile with lesson count, result averages and attendance"""
    service = StudentService(db)
    detail = await service.get_detail(student_id)
    return {
        **format_student(detail["student"]),
        "lessons_count": detail["lessons_count"],
        "results": detail["results"],
        "attendance_percentage": detail["attendance_percentage"],
    }


@router.post("/", response_model=dict, status_code=201)
async def create_student(
    student_data: StudentCreate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = StudentService(db)
    student = await service.create_student(student_data.model_dump())
    await invalidate_cache("students")
    return {
        "success": True,
        "message": "Student has been created!",
        "student": format_student(student),
    }


@router.put("/{student_id}", response_model=dict)
async def update_student(
    student_id: UUID,
    student_data: StudentUpdate,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = StudentService(db)
    student = await service.update_student(student_id, student_data.model_dump())
    await invalidate_cache("students")
    return {
        "success": True,
        "message": "Student has been updated!",
        "student": format_student(student),
    }


@router.delete("/{student_id}", response_model=dict)
async def delete_student(
    student_id: UUID,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Delete a student with their results and attendance"""
    service = StudentService(db)
    await service.delete(student_id)
    await invalidate_cache("students")
    return {"success": True, "message": "Student has been deleted!"}
