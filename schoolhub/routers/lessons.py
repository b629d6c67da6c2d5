# schoolhub/routers/lessons.py
"""Lessons, weekly recurring generation and teacher availability."""
from typing import Optional
from uuid import UUID
from datetime import date, time, timedelta
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.exceptions import ValidationError
from ..core.security import CurrentUser, require_admin, require_any_role, require_staff
from ..models import Day, Lesson
from ..schemas.lesson import BulkDeleteRequest, LessonCreate, LessonUpdate, RecurringLessonCreate
from ..services.calendar_service import ModuleService
from ..services.lesson_service import LessonService, conflict_summary
from ..utils.cache_decorators import cache_paginated_response
from ..utils.cache_invalidation import invalidate_cache
from ..utils.pagination import Paginator, PaginationParams, parse_id_list

router = APIRouter(prefix="/api/v1/lessons", tags=["Lessons"])


def format_lesson(lesson: Lesson) -> dict:
    return {
        "id": str(lesson.id),
        "name": lesson.name,
        "day": lesson.day.value,
        "start_time": lesson.start_time.isoformat(),
        "end_time": lesson.end_time.isoformat(),
        "subject": {"id": str(lesson.subject.id), "name": lesson.subject.name},
        "class": {"id": str(lesson.class_ref.id), "name": lesson.class_ref.name},
        "teacher": {
            "id": str(lesson.teacher.id),
            "name": lesson.teacher.name,
            "surname": lesson.teacher.surname,
        },
    }


@router.get("/", response_model=dict)
@cache_paginated_response("lessons", expire=timedelta(minutes=5))
async def get_lessons(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    class_id: Optional[str] = Query(None, description="Comma-separated class ids"),
    teacher_id: Optional[str] = Query(None, description="Comma-separated teacher ids"),
    subject_id: Optional[str] = Query(None, description="Comma-separated subject ids"),
    module_id: Optional[UUID] = Query(None, description="Lessons starting inside the module"),
    search: Optional[str] = Query(None),
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    """Get paginated lessons ordered by start time"""
    service = LessonService(db)
    result = await service.list_lessons(
        page=pagination.page,
        size=pagination.size,
        class_ids=parse_id_list(class_id),
        teacher_ids=parse_id_list(teacher_id),
        subject_ids=parse_id_list(subject_id),
        module_id=module_id,
        search=search,
    )
    return Paginator.from_page(result, format_lesson)


@router.get("/schedule", response_model=dict)
async def get_schedule(
    teacher_id: Optional[UUID] = Query(None),
    class_id: Optional[UUID] = Query(None),
    date_from: Optional[date] = Query(None),
    date_to: Optional[date] = Query(None),
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    """Calendar entries of a teacher or a class"""
    service = LessonService(db)
    entries = await service.get_schedule(
        current_user,
        teacher_id=teacher_id,
        class_id=class_id,
        date_from=date_from,
        date_to=date_to,
    )
    return {"items": entries, "total": len(entries)}


@router.get("/availability", response_model=dict)
async def check_availability(
    teacher_id: UUID = Query(...),
    day: Day = Query(...),
    start_time: time = Query(..., description="HH:MM"),
    end_time: time = Query(..., description="HH:MM"),
    exclude_lesson_id: Optional[UUID] = Query(None),
    module_id: Optional[UUID] = Query(None, description="Only lessons inside this module"),
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    """Whether the teacher is free in [start_time, end_time) on that weekday"""
    if end_time <= start_time:
        raise ValidationError("End time must be after start time", field="end_time")

    date_from = date_to = None
    if module_id:
        module = await ModuleService(db).get_module(module_id)
        date_from, date_to = module.start_date, module.end_date

    service = LessonService(db)
    conflicts = await service.check_teacher_availability(
        teacher_id,
        day,
        start_time,
        end_time,
        exclude_lesson_id=exclude_lesson_id,
        date_from=date_from,
        date_to=date_to,
    )
    return {
        "available": not conflicts,
        "conflicts": [conflict_summary(c) for c in conflicts],
    }


@router.post("/recurring", response_model=dict, status_code=201)
async def create_recurring_lessons(
    template: RecurringLessonCreate,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    """Create one lesson per matching weekday of a module, skipping holidays"""
    service = LessonService(db)
    result = await service.create_recurring_lessons(template.model_dump(), current_user)
    await invalidate_cache("lessons")
    return {
        "success": True,
        "message": f"Created {result['success_count']} of {result['total']} lessons",
        "total": result["total"],
        "success_count": result["success_count"],
        "lessons": [
            {
                "id": str(lesson.id),
                "name": lesson.name,
                "start_time": lesson.start_time.isoformat(),
                "end_time": lesson.end_time.isoformat(),
            }
            for lesson in result["lessons"]
        ],
    }


@router.post("/bulk-delete", response_model=dict)
async def bulk_delete_lessons(
    request: BulkDeleteRequest,
    current_user: CurrentUser = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    service = LessonService(db)
    deleted = await service.bulk_delete(request.ids)
    await invalidate_cache("lessons")
    return {
        "success": True,
        "message": f"{deleted} lessons have been deleted!",
        "deleted_count": deleted,
    }


@router.get("/{lesson_id}", response_model=dict)
async def get_lesson(
    lesson_id: UUID,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = LessonService(db)
    return format_lesson(await service.get_lesson(lesson_id))


@router.post("/", response_model=dict, status_code=201)
async def create_lesson(
    lesson_data: LessonCreate,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = LessonService(db)
    lesson = await service.create_lesson(lesson_data.model_dump(), current_user)
    await invalidate_cache("lessons")
    return {
        "success": True,
        "message": "Lesson has been created!",
        "lesson": format_lesson(lesson),
    }


@router.put("/{lesson_id}", response_model=dict)
async def update_lesson(
    lesson_id: UUID,
    lesson_data: LessonUpdate,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = LessonService(db)
    lesson = await service.update_lesson(lesson_id, lesson_data.model_dump(), current_user)
    await invalidate_cache("lessons")
    return {
        "success": True,
        "message": "Lesson has been updated!",
        "lesson": format_lesson(lesson),
    }


@router.delete("/{lesson_id}", response_model=dict)
async def delete_lesson(
    lesson_id: UUID,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    """Delete a lesson with its exams, assignments and attendance"""
    service = LessonService(db)
    await service.delete_lesson(lesson_id, current_user)
    await invalidate_cache("lessons")
    return {"success": True, "message": "Lesson has been deleted!"}
