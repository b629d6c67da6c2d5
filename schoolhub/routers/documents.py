# schoolhub/routers/documents.py
"""Generated PDF documents for a student."""
from uuid import UUID
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..core.security import CurrentUser, require_any_role
from ..schemas.documents import AbsenceReportRequest, CertificateRequest, TranscriptRequest
from ..services.document_service import DocumentService

router = APIRouter(prefix="/api/v1/documents", tags=["Documents"])


def pdf_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/students/{student_id}/certificate")
async def student_certificate(
    student_id: UUID,
    request: CertificateRequest,
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    """Enrollment certificate"""
    service = DocumentService(db)
    pdf = await service.certificate(student_id, request.model_dump(), current_user)
    return pdf_response(pdf, f"certificate_{student_id}.pdf")


@router.post("/students/{student_id}/transcript")
async def student_transcript(
    student_id: UUID,
    request: TranscriptRequest,
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    """Student record sheet with subject averages"""
    service = DocumentService(db)
    pdf = await service.transcript(student_id, request.model_dump(), current_user)
    return pdf_response(pdf, f"transcript_{student_id}.pdf")


@router.post("/students/{student_id}/absence-report")
async def student_absence_report(
    student_id: UUID,
    request: AbsenceReportRequest,
    current_user: CurrentUser = Depends(require_any_role),
    db: AsyncSession = Depends(get_db)
):
    """Absences of one month with excused and unexcused totals"""
    service = DocumentService(db)
    pdf = await service.absence_report(student_id, request.month, current_user)
    return pdf_response(pdf, f"absences_{request.month}_{student_id}.pdf")
