# schoolhub/routers/exams.py
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, require_any_role, require_staff
from ..models import Exam, Lesson
from ..schemas.assessment import ExamCreate, ExamUpdate
from ..services.assessment_service import ExamService
from ..utils.pagination import Paginator, PaginationParams

router = APIRouter(prefix="/api/v1/exams", tags=["Exams"])


def lesson_summary(lesson: Lesson) -> dict:
    return {
        "id": str(lesson.id),
        "name": lesson.name,
        "subject": lesson.subject.name,
        "class": lesson.class_ref.name,
        "teacher": f"{lesson.teacher.name} {lesson.teacher.surname}",
    }


def format_exam(exam: Exam) -> dict:
    return {
        "id": str(exam.id),
        "title": exam.title,
        "start_time": exam.start_time.isoformat(),
        "end_time": exam.end_time.isoformat(),
        "lesson": lesson_summary(exam.lesson),
    }


@router.get("/", response_model=dict)
async def get_exams(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    class_id: Optional[UUID] = Query(None),
    teacher_id: Optional[UUID] = Query(None),
    lesson_id: Optional[UUID] = Query(None),
    search: Optional[str] = Query(None, description="Subject name"),
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    """Exams of the lessons visible to the caller"""
    service = ExamService(db)
    result = await service.list_scoped(
        current_user,
        page=pagination.page,
        size=pagination.size,
        class_id=class_id,
        teacher_id=teacher_id,
        lesson_id=lesson_id,
        search=search,
    )
    return Paginator.from_page(result, format_exam)


@router.get("/{exam_id}", response_model=dict)
async def get_exam(
    exam_id: UUID,
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    service = ExamService(db)
    return format_exam(await service.get_scoped(exam_id, current_user))


@router.post("/", response_model=dict, status_code=201)
async def create_exam(
    exam_data: ExamCreate,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = ExamService(db)
    exam = await service.create_for(exam_data.model_dump(), current_user)
    return {"success": True, "message": "Exam has been created!", "exam": format_exam(exam)}


@router.put("/{exam_id}", response_model=dict)
async def update_exam(
    exam_id: UUID,
    exam_data: ExamUpdate,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = ExamService(db)
    exam = await service.update_for(exam_id, exam_data.model_dump(), current_user)
    return {"success": True, "message": "Exam has been updated!", "exam": format_exam(exam)}


@router.delete("/{exam_id}", response_model=dict)
async def delete_exam(
    exam_id: UUID,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    """Delete an exam and its results"""
    service = ExamService(db)
    await service.delete_for(exam_id, current_user)
    return {"success": True, "message": "Exam has been deleted!"}
