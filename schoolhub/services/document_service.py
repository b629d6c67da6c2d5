# schoolhub/services/document_service.py
"""Collects student data for the generated documents."""
from collections import defaultdict
from datetime import date
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from . import documents
from .attendance_service import AttendanceService
from .result_service import ResultService, RESULT_LOAD
from .scores import summarize_scores
from .student_service import StudentService
from .visibility import ensure_can_see_student
from ..core.config import settings
from ..core.exceptions import NotFoundError
from ..core.security import CurrentUser
from ..models import Result, Module


class DocumentService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def certificate(self, student_id: UUID, request: Dict[str, Any], user: CurrentUser) -> bytes:
        await ensure_can_see_student(self.db, user, student_id)
        student = await StudentService(self.db).get_student(student_id)
        return documents.build_certificate_pdf({
            **request,
            "school_name": settings.school_name,
            "issue_date": date.today().strftime("%d.%m.%Y"),
            "student_name": f"{student.name} {student.surname}",
            "class_name": student.class_ref.name,
        })

    async def subject_averages(self, student_id: UUID):
        result = await self.db.execute(
            select(Result).where(Result.student_id == student_id).options(*RESULT_LOAD)
        )
        by_subject = defaultdict(list)
        for row in result.scalars().all():
            lesson = (row.exam or row.assignment).lesson
            by_subject[lesson.subject.name].append(row.score)

        return [
            {
                "subject": subject,
                "average": summarize_scores(scores)["average"],
                "count": len(scores),
            }
            for subject, scores in sorted(by_subject.items())
        ]

    async def transcript(self, student_id: UUID, request: Dict[str, Any], user: CurrentUser) -> bytes:
        await ensure_can_see_student(self.db, user, student_id)
        student = await StudentService(self.db).get_student(student_id)
        parent = student.parent
        return documents.build_transcript_pdf({
            **request,
            "school_name": settings.school_name,
            "fiscal_code": settings.school_fiscal_code,
            "student_name": f"{student.name} {student.surname}",
            "birthday": student.birthday.strftime("%d.%m.%Y"),
            "parents": f"{parent.name} {parent.surname}" if parent else None,
            "parents_address": parent.address if parent else None,
            "student_address": student.address,
            "subjects": await self.subject_averages(student_id),
        })

    async def absence_report(self, student_id: UUID, month: str, user: CurrentUser) -> bytes:
        await ensure_can_see_student(self.db, user, student_id)
        student = await StudentService(self.db).get_student(student_id)
        year, number = (int(part) for part in month.split("-"))
        absences = await AttendanceService(self.db).absences_for_month(student_id, year, number)
        return documents.build_absence_report_pdf({
            "school_name": settings.school_name,
            "issue_date": date.today().strftime("%d.%m.%Y"),
            "name": student.name,
            "surname": student.surname,
            "month": month,
            "absences": [
                {"date": a.date.strftime("%d.%m.%Y"), "excused": a.excused}
                for a in absences
            ],
        })

    async def results_report(self, user: CurrentUser, module_id: Optional[UUID] = None, **filters) -> bytes:
        module_name = None
        if module_id:
            module = await self.db.get(Module, module_id)
            if module is None:
                raise NotFoundError("Module", module_id)
            module_name = module.name

        rows = await ResultService(self.db).export_rows(user, module_id=module_id, **filters)
        stats = summarize_scores([row["score"] for row in rows])
        return documents.build_results_pdf(rows, stats, module_name=module_name)

    async def results_csv(self, user: CurrentUser, **filters) -> str:
        rows = await ResultService(self.db).export_rows(user, **filters)
        return documents.results_to_csv(rows)
