# schoolhub/routers/results.py
"""Results of exams and assignments, with PDF and CSV exports."""
from typing import Any, Dict, Optional
from uuid import UUID
from datetime import date
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, require_any_role, require_staff
from ..schemas.assessment import ResultCreate, ResultUpdate
from ..services.document_service import DocumentService
from ..services.result_service import ResultService, result_row
from ..utils.pagination import Paginator, PaginationParams, parse_id_list

router = APIRouter(prefix="/api/v1/results", tags=["Results"])


def result_filters(
    student_id: Optional[str] = Query(None, description="Comma-separated student ids"),
    teacher_id: Optional[str] = Query(None, description="Comma-separated teacher ids"),
    subject_id: Optional[str] = Query(None, description="Comma-separated subject ids"),
    class_id: Optional[str] = Query(None, description="Comma-separated class ids"),
    module_id: Optional[UUID] = Query(None),
    title: Optional[str] = Query(None, description="Exact exam or assignment title"),
    search: Optional[str] = Query(None, description="Title, student name or surname"),
    sort: Optional[str] = Query(None, pattern="^(asc|desc)$", description="Sort on title"),
    sort_date: Optional[str] = Query(None, pattern="^(date_asc|date_desc)$"),
    sort_grade: Optional[str] = Query(None, pattern="^(score_asc|score_desc)$"),
) -> Dict[str, Any]:
    """Query filters shared by the list and the exports"""
    return {
        "student_ids": parse_id_list(student_id),
        "teacher_ids": parse_id_list(teacher_id),
        "subject_ids": parse_id_list(subject_id),
        "class_ids": parse_id_list(class_id),
        "module_id": module_id,
        "title": title,
        "search": search,
        "sort": sort,
        "sort_date": sort_date,
        "sort_grade": sort_grade,
    }


@router.get("/", response_model=dict)
async def get_results(
    pagination: PaginationParams = Depends(Paginator.get_pagination_params),
    filters: Dict[str, Any] = Depends(result_filters),
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    """Results visible to the caller, newest assessment first"""
    service = ResultService(db)
    result = await service.list_results(current_user, page=pagination.page, size=pagination.size, **filters)
    return Paginator.from_page(result, result_row)


@router.get("/export.pdf")
async def export_results_pdf(
    filters: Dict[str, Any] = Depends(result_filters),
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    """Results report with statistics for the filtered results"""
    service = DocumentService(db)
    pdf = await service.results_report(current_user, **filters)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="results_{date.today().isoformat()}.pdf"'},
    )


@router.get("/export.csv")
async def export_results_csv(
    filters: Dict[str, Any] = Depends(result_filters),
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    service = DocumentService(db)
    csv_data = await service.results_csv(current_user, **filters)
    return Response(
        content=csv_data,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="results_{date.today().isoformat()}.csv"'},
    )


@router.post("/", response_model=dict, status_code=201)
async def create_result(
    result_data: ResultCreate,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = ResultService(db)
    result = await service.create_result(result_data.model_dump(), current_user)
    return {"success": True, "message": "Result has been created!", "result": result_row(result)}


@router.put("/{result_id}", response_model=dict)
async def update_result(
    result_id: UUID,
    result_data: ResultUpdate,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = ResultService(db)
    result = await service.update_result(result_id, result_data.model_dump(), current_user)
    return {"success": True, "message": "Result has been updated!", "result": result_row(result)}


@router.delete("/{result_id}", response_model=dict)
async def delete_result(
    result_id: UUID,
    current_user: CurrentUser = Depends(require_staff),
    db: AsyncSession = Depends(get_db)
):
    service = ResultService(db)
    await service.delete_result(result_id, current_user)
    return {"success": True, "message": "Result has been deleted!"}
