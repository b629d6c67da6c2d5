# schoolhub/routers/assignments.py
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, require_any_role, require_staff
from ..models import Assignment
from ..schemas.assessment import AssignmentCreate, AssignmentUpdate
from ..services.assessment_service import AssignmentService
from ..utils.pagination import Paginator, PaginationParams
from .exams import lesson_summary

router = APIRouter(prefix="/api/v1/assignments", tags=["Assignments"])


def format_assignment(assignment: Assignment) -> dict:
    return {
        "id": str(assignment.id),
        "title": assignment.title,
        "start_date": assignment.start_date.isoformat(),
        "due_date": assignment.due_date.isoformat(),
        "lesson": lesson_summary(assignment.lesson),
    }


@router.get("/", response_model=dict)
async def get_assignments(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    class_id: Optional[UUID] = Query(None),
    teacher_id: Optional[UUID] = Query(None),
    lesson_id: Optional[UUID] = Query(None),
    search: Optional[str] = Query(None, description="Subject name"),
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    service = AssignmentService(db)
    result = await service.list_scoped(
        current_user,
        page=pagination.page,
        size=pagination.size,
        class_id=class_id,
        teacher_id=teacher_id,
        lesson_id=lesson_id,
        search=search,
    )
    return Paginator.from_page(result, format_assignment)


@router.get("/{assignment_id}", response_model=dict)
async def get_assignment(
    assignment_id: UUID,
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    service = AssignmentService(db)
    return format_assignment(await service.get_scoped(assignment_id, current_user))


@router.post("/", response_model=dict, status_code=201)
async def create_assignment(
    assignment_data: AssignmentCreate,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AssignmentService(db)
    assignment = await service.create_for(assignment_data.model_dump(), current_user)
    return {
        "success": True,
        "message": "Assignment has been created!",
        "assignment": format_assignment(assignment),
    }


@router.put("/{assignment_id}", response_model=dict)
async def update_assignment(
    assignment_id: UUID,
    assignment_data: AssignmentUpdate,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AssignmentService(db)
    assignment = await service.update_for(assignment_id, assignment_data.model_dump(), current_user)
    return {
        "success": True,
        "message": "Assignment has been updated!",
        "assignment": format_assignment(assignment),
    }


@router.delete("/{assignment_id}", response_model=dict)
async def delete_assignment(
    assignment_id: UUID,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = AssignmentService(db)
    await service.delete_for(assignment_id, current_user)
    return {"success": True, "message": "Assignment has been deleted!"}
