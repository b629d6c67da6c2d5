# schoolhub/services/result_service.py
"""Results of exams and assignments: scoped listing, sorting and export rows."""
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID
import logging

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased, selectinload

from .base_service import BaseService
from .lesson_service import day_bounds
from .visibility import result_scope, ensure_teaches_lesson
from ..core.exceptions import NotFoundError, ValidationError
from ..core.security import CurrentUser
from ..models import Result, Student, Exam, Assignment, Lesson, Module

logger = logging.getLogger(__name__)

ExamLesson = aliased(Lesson)
AssignmentLesson = aliased(Lesson)

ASSESSMENT_TITLE = func.coalesce(Exam.title, Assignment.title)
ASSESSED_AT = func.coalesce(Exam.start_time, Assignment.start_date)


def _lesson_column(name: str):
    return func.coalesce(getattr(ExamLesson, name), getattr(AssignmentLesson, name))


RESULT_LOAD = (
    selectinload(Result.student),
    selectinload(Result.exam).selectinload(Exam.lesson).selectinload(Lesson.subject),
    selectinload(Result.exam).selectinload(Exam.lesson).selectinload(Lesson.teacher),
    selectinload(Result.exam).selectinload(Exam.lesson).selectinload(Lesson.class_ref),
    selectinload(Result.assignment).selectinload(Assignment.lesson).selectinload(Lesson.subject),
    selectinload(Result.assignment).selectinload(Assignment.lesson).selectinload(Lesson.teacher),
    selectinload(Result.assignment).selectinload(Assignment.lesson).selectinload(Lesson.class_ref),
)


def result_row(result: Result) -> Dict[str, Any]:
    """Flat view of a result used by the list, the PDF report and the CSV export"""
    assessment = result.exam or result.assignment
    lesson = assessment.lesson
    assessed_at = result.exam.start_time if result.exam else result.assignment.start_date
    return {
        "id": str(result.id),
        "title": assessment.title,
        "type": "exam" if result.exam else "assignment",
        "subject": lesson.subject.name,
        "student_id": str(result.student_id),
        "student": f"{result.student.name} {result.student.surname}",
        "score": result.score,
        "teacher": f"{lesson.teacher.name} {lesson.teacher.surname}",
        "class": lesson.class_ref.name,
        "date": assessed_at.isoformat(),
    }


class ResultService(BaseService[Result]):
    resource_name = "Result"

    def __init__(self, db: AsyncSession):
        super().__init__(Result, db)

    async def _filtered(
        self,
        user: CurrentUser,
        student_ids: Sequence[UUID] = (),
        teacher_ids: Sequence[UUID] = (),
        subject_ids: Sequence[UUID] = (),
        class_ids: Sequence[UUID] = (),
        module_id: Optional[UUID] = None,
        title: Optional[str] = None,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        sort_date: Optional[str] = None,
        sort_grade: Optional[str] = None,
    ):
        stmt = (
            select(Result)
            .join(Student, Result.student_id == Student.id)
            .outerjoin(Exam, Result.exam_id == Exam.id)
            .outerjoin(Assignment, Result.assignment_id == Assignment.id)
            .outerjoin(ExamLesson, Exam.lesson_id == ExamLesson.id)
            .outerjoin(AssignmentLesson, Assignment.lesson_id == AssignmentLesson.id)
        )

        scope = result_scope(user, Result)
        if scope is not None:
            stmt = stmt.where(scope)

        if student_ids:
            stmt = stmt.where(Result.student_id.in_(student_ids))
        if teacher_ids:
            stmt = stmt.where(_lesson_column("teacher_id").in_(teacher_ids))
        if subject_ids:
            stmt = stmt.where(_lesson_column("subject_id").in_(subject_ids))
        if class_ids:
            stmt = stmt.where(_lesson_column("class_id").in_(class_ids))
        if module_id:
            module = await self.db.get(Module, module_id)
            if module is None:
                raise NotFoundError("Module", module_id)
            lower, upper = day_bounds(module.start_date, module.end_date)
            stmt = stmt.where(ASSESSED_AT >= lower, ASSESSED_AT < upper)
        if title:
            stmt = stmt.where(ASSESSMENT_TITLE == title)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(
                ASSESSMENT_TITLE.ilike(pattern),
                Student.name.ilike(pattern),
                Student.surname.ilike(pattern),
            ))

        order = []
        if sort_grade in ("score_asc", "score_desc"):
            order.append(Result.score.asc() if sort_grade == "score_asc" else Result.score.desc())
        if sort in ("asc", "desc"):
            order.append(ASSESSMENT_TITLE.asc() if sort == "asc" else ASSESSMENT_TITLE.desc())
        order.append(ASSESSED_AT.asc() if sort_date == "date_asc" else ASSESSED_AT.desc())
        return stmt.order_by(*order)

    async def list_results(self, user: CurrentUser, page: int = 1, size: int = 10, **filters) -> Dict[str, Any]:
        stmt = await self._filtered(user, **filters)
        return await self.paginate(stmt, page, size, options=RESULT_LOAD)

    async def export_rows(self, user: CurrentUser, **filters) -> List[Dict[str, Any]]:
        """Every result matching the list filters, unpaginated"""
        stmt = await self._filtered(user, **filters)
        result = await self.db.execute(stmt.options(*RESULT_LOAD))
        return [result_row(r) for r in result.scalars().unique().all()]

    async def _assessment_lesson(self, data: Dict[str, Any]) -> Lesson:
        if data.get("exam_id"):
            assessment = await self.db.get(Exam, data["exam_id"])
            label, key = "Exam", "exam_id"
        else:
            assessment = await self.db.get(Assignment, data["assignment_id"])
            label, key = "Assignment", "assignment_id"
        if assessment is None:
            raise NotFoundError(label, data[key])
        return await self.db.get(Lesson, assessment.lesson_id)

    async def _validate(self, data: Dict[str, Any], user: CurrentUser) -> None:
        student = await self.db.get(Student, data["student_id"])
        if student is None:
            raise NotFoundError("Student", data["student_id"])
        lesson = await self._assessment_lesson(data)
        await ensure_teaches_lesson(self.db, user, lesson.id)
        if student.class_id != lesson.class_id:
            raise ValidationError("The student is not in the class of this lesson", field="student_id")

    async def create_result(self, data: Dict[str, Any], user: CurrentUser) -> Result:
        await self._validate(data, user)
        obj = Result(**data)
        self.db.add(obj)
        await self.commit()
        logger.info(f"Recorded result {obj.id} for student {obj.student_id}")
        return await self.get_or_404(obj.id, options=RESULT_LOAD)

    async def _current_lesson(self, obj: Result) -> Lesson:
        return await self._assessment_lesson({"exam_id": obj.exam_id, "assignment_id": obj.assignment_id})

    async def update_result(self, result_id: UUID, data: Dict[str, Any], user: CurrentUser) -> Result:
        obj = await self.get_or_404(result_id)
        await ensure_teaches_lesson(self.db, user, (await self._current_lesson(obj)).id)
        await self._validate(data, user)

        for key, value in data.items():
            setattr(obj, key, value)
        await self.commit()
        return await self.get_or_404(result_id, options=RESULT_LOAD)

    async def delete_result(self, result_id: UUID, user: CurrentUser) -> None:
        obj = await self.get_or_404(result_id)
        await ensure_teaches_lesson(self.db, user, (await self._current_lesson(obj)).id)
        await self.db.delete(obj)
        await self.commit()
