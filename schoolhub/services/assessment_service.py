# schoolhub/services/assessment_service.py
"""Exams and assignments, both hanging off a lesson and scoped through it."""
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from .visibility import lesson_scope, ensure_teaches_lesson
from ..core.exceptions import NotFoundError
from ..core.security import CurrentUser
from ..models import Exam, Assignment, Lesson, Subject


class LessonBoundService(BaseService):
    """CRUD for records that belong to a lesson (exams, assignments)."""
    date_column = "start_time"

    def _load(self):
        lesson = getattr(self.model, "lesson")
        return (
            selectinload(lesson).selectinload(Lesson.subject),
            selectinload(lesson).selectinload(Lesson.class_ref),
            selectinload(lesson).selectinload(Lesson.teacher),
        )

    async def list_scoped(
        self,
        user: CurrentUser,
        page: int = 1,
        size: int = 10,
        class_id: Optional[UUID] = None,
        teacher_id: Optional[UUID] = None,
        lesson_id: Optional[UUID] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        stmt = (
            select(self.model)
            .join(Lesson, self.model.lesson_id == Lesson.id)
            .join(Subject, Lesson.subject_id == Subject.id)
        )

        scope = lesson_scope(user)
        if scope is not None:
            stmt = stmt.where(scope)

        if class_id:
            stmt = stmt.where(Lesson.class_id == class_id)
        if teacher_id:
            stmt = stmt.where(Lesson.teacher_id == teacher_id)
        if lesson_id:
            stmt = stmt.where(self.model.lesson_id == lesson_id)
        if search:
            stmt = stmt.where(Subject.name.ilike(f"%{search}%"))

        stmt = stmt.order_by(getattr(self.model, self.date_column).desc())
        return await self.paginate(stmt, page, size, options=self._load())

    async def get_scoped(self, id: UUID, user: CurrentUser):
        stmt = select(self.model).join(Lesson, self.model.lesson_id == Lesson.id).where(self.model.id == id)
        scope = lesson_scope(user)
        if scope is not None:
            stmt = stmt.where(scope)
        stmt = stmt.options(*self._load())
        obj = (await self.db.execute(stmt)).scalar_one_or_none()
        if obj is None:
            raise NotFoundError(self.resource_name, id)
        return obj

    async def create_for(self, data: Dict[str, Any], user: CurrentUser):
        if await self.db.get(Lesson, data["lesson_id"]) is None:
            raise NotFoundError("Lesson", data["lesson_id"])
        await ensure_teaches_lesson(self.db, user, data["lesson_id"])

        obj = self.model(**data)
        self.db.add(obj)
        await self.commit()
        return await self.get_or_404(obj.id, options=self._load())

    async def update_for(self, id: UUID, data: Dict[str, Any], user: CurrentUser):
        obj = await self.get_or_404(id)
        await ensure_teaches_lesson(self.db, user, obj.lesson_id)
        if data["lesson_id"] != obj.lesson_id:
            if await self.db.get(Lesson, data["lesson_id"]) is None:
                raise NotFoundError("Lesson", data["lesson_id"])
            await ensure_teaches_lesson(self.db, user, data["lesson_id"])

        for key, value in data.items():
            setattr(obj, key, value)
        await self.commit()
        return await self.get_or_404(id, options=self._load())

    async def delete_for(self, id: UUID, user: CurrentUser) -> None:
        obj = await self.get_or_404(id)
        await ensure_teaches_lesson(self.db, user, obj.lesson_id)
        await self.db.delete(obj)
        await self.commit()


class ExamService(LessonBoundService):
    resource_name = "Exam"
    date_column = "start_time"

    def __init__(self, db: AsyncSession):
        super().__init__(Exam, db)


class AssignmentService(LessonBoundService):
    resource_name = "Assignment"
    date_column = "start_date"

    def __init__(self, db: AsyncSession):
        super().__init__(Assignment, db)
