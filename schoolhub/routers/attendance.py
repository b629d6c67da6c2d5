# schoolhub/routers/attendance.py
from typing import Optional
from uuid import UUID
from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, require_any_role, require_staff
from ..models import Attendance
from ..schemas.attendance import AttendanceCreate, AttendanceUpdate
from ..services.attendance_service import AttendanceService
from ..utils.pagination import Paginator, PaginationParams

router = APIRouter(prefix="/api/v1/attendance", tags=["Attendance"])


def format_attendance(record: Attendance) -> dict:
    return {
        "id": str(record.id),
        "date": record.date.isoformat(),
        "present": record.present,
        "excused": record.excused,
        "student": {
            "id": str(record.student.id),
            "name": record.student.name,
            "surname": record.student.surname,
        },
        "lesson": {
            "id": str(record.lesson.id),
            "name": record.lesson.name,
            "subject": record.lesson.subject.name,
        },
    }


@router.get("/", response_model=dict)
async def get_attendance(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    student_id: Optional[UUID] = Query(None),
    lesson_id: Optional[UUID] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    """Attendance records visible to the caller, newest first"""
    service = AttendanceService(db)
    result = await service.list_attendance(
        current_user,
        page=pagination.page,
        size=pagination.size,
        student_id=student_id,
        lesson_id=lesson_id,
        date_from=date_from,
        date_to=date_to,
    )
    return Paginator.from_page(result, format_attendance)


@router.post("/", response_model=dict, status_code=201)
async def create_attendance(
    attendance_data: AttendanceCreate,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AttendanceService(db)
    record = await service.create_attendance(attendance_data.model_dump(), current_user)
    return {
        "success": True,
        "message": "Attendance has been recorded!",
        "attendance": format_attendance(record),
    }


@router.put("/{attendance_id}", response_model=dict)
async def update_attendance(
    attendance_id: UUID,
    attendance_data: AttendanceUpdate,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AttendanceService(db)
    record = await service.update_attendance(attendance_id, attendance_data.model_dump(), current_user)
    return {
        "success": True,
        "message": "Attendance has been updated!",
        "attendance": format_attendance(record),
    }


@router.delete("/{attendance_id}", response_model=dict)
async def delete_attendance(
    attendance_id: UUID,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AttendanceService(db)
    await service.delete_attendance(attendance_id, current_user)
    return {"success": True, "message": "Attendance has been deleted!"}
