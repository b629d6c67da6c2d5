# schoolhub/services/attendance_service.py
from datetime import date
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from .visibility import lesson_scope, student_scope, ensure_teaches_lesson
from ..core.exceptions import NotFoundError, ValidationError
from ..core.security import CurrentUser, Role
from ..models import Attendance, Lesson, Student

ATTENDANCE_LOAD = (
    selectinload(Attendance.student),
    selectinload(Attendance.lesson).selectinload(Lesson.subject),
)


class AttendanceService(BaseService[Attendance]):
    resource_name = "Attendance"

    def __init__(self, db: AsyncSession):
        super().__init__(Attendance, db)

    def _scoped(self, user: CurrentUser):
        stmt = select(Attendance).join(Lesson, Attendance.lesson_id == Lesson.id)
        if user.role == Role.TEACHER:
            stmt = stmt.where(lesson_scope(user))
        elif user.role in (Role.STUDENT, Role.PARENT):
            stmt = stmt.where(student_scope(user, Attendance.student_id))
        return stmt

    async def list_attendance(
        self,
        user: CurrentUser,
        page: int = 1,
        size: int = 10,
        student_id: Optional[UUID] = None,
        lesson_id: Optional[UUID] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Dict[str, Any]:
        stmt = self._scoped(user)
        if student_id:
            stmt = stmt.where(Attendance.student_id == student_id)
        if lesson_id:
            stmt = stmt.where(Attendance.lesson_id == lesson_id)
        if date_from:
            stmt = stmt.where(Attendance.date >= date_from)
        if date_to:
            stmt = stmt.where(Attendance.date <= date_to)
        stmt = stmt.order_by(Attendance.date.desc())
        return await self.paginate(stmt, page, size, options=ATTENDANCE_LOAD)

    async def absences_for_month(self, student_id: UUID, year: int, month: int) -> List[Attendance]:
        """Absences of a student in a calendar month, oldest first"""
        first = date(year, month, 1)
        last = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
        result = await self.db.execute(
            select(Attendance)
            .where(
                Attendance.student_id == student_id,
                Attendance.present.is_(False),
                Attendance.date >= first,
                Attendance.date < last,
            )
            .options(selectinload(Attendance.lesson).selectinload(Lesson.subject))
            .order_by(Attendance.date.asc())
        )
        return result.scalars().all()

    async def _validate(self, data: Dict[str, Any], user: CurrentUser) -> None:
        lesson = await self.db.get(Lesson, data["lesson_id"])
        if lesson is None:
            raise NotFoundError("Lesson", data["lesson_id"])
        student = await self.db.get(Student, data["student_id"])
        if student is None:
            raise NotFoundError("Student", data["student_id"])
        await ensure_teaches_lesson(self.db, user, lesson.id)
        if student.class_id != lesson.class_id:
            raise ValidationError("The student is not in the class of this lesson", field="student_id")

    @staticmethod
    def _normalize(data: Dict[str, Any]) -> Dict[str, Any]:
        # Only absences can be excused
        if data.get("present"):
            data["excused"] = False
        return data

    async def create_attendance(self, data: Dict[str, Any], user: CurrentUser) -> Attendance:
        await self._validate(data, user)
        obj = Attendance(**self._normalize(data))
        self.db.add(obj)
        await self.commit()
        return await self.get_or_404(obj.id, options=ATTENDANCE_LOAD)

    async def update_attendance(self, attendance_id: UUID, data: Dict[str, Any], user: CurrentUser) -> Attendance:
        obj = await self.get_or_404(attendance_id)
        await ensure_teaches_lesson(self.db, user, obj.lesson_id)
        await self._validate(data, user)
        for key, value in self._normalize(data).items():
            setattr(obj, key, value)
        await self.commit()
        return await self.get_or_404(attendance_id, options=ATTENDANCE_LOAD)

    async def delete_attendance(self, attendance_id: UUID, user: CurrentUser) -> None:
        obj = await self.get_or_404(attendance_id)
        await ensure_teaches_lesson(self.db, user, obj.lesson_id)
        await self.db.delete(obj)
        await self.commit()
