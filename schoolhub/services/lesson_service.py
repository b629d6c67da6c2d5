# schoolhub/services/lesson_service.py
"""Lessons: CRUD, recurring generation over a module and teacher availability."""
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID
import logging

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from .scheduling import LessonTemplate, find_conflicts, generate_recurring_lessons
from .visibility import visible_class_ids
from ..core.exceptions import (
    NotFoundError, PermissionDenied, ScheduleConflict, ValidationError,
)
from ..core.security import CurrentUser, Role
from ..models import Lesson, Subject, ClassModel, Teacher, Module, Holiday, Day

logger = logging.getLogger(__name__)

LESSON_LOAD = (
    selectinload(Lesson.subject),
    selectinload(Lesson.class_ref),
    selectinload(Lesson.teacher),
)


def day_bounds(date_from: Optional[date], date_to: Optional[date]):
    """Datetime bounds [start of date_from, start of the day after date_to)"""
    lower = datetime.combine(date_from, time.min) if date_from else None
    upper = datetime.combine(date_to + timedelta(days=1), time.min) if date_to else None
    return lower, upper


def conflict_summary(lesson: Lesson) -> Dict[str, Any]:
    return {
        "id": str(lesson.id),
        "name": lesson.name,
        "day": lesson.day.value,
        "start_time": lesson.start_time.isoformat(),
        "end_time": lesson.end_time.isoformat(),
    }


class LessonService(BaseService[Lesson]):
    resource_name = "Lesson"

    def __init__(self, db: AsyncSession):
        super().__init__(Lesson, db)

    async def list_lessons(
        self,
        page: int = 1,
        size: int = 10,
        class_ids: Sequence[UUID] = (),
        teacher_ids: Sequence[UUID] = (),
        subject_ids: Sequence[UUID] = (),
        module_id: Optional[UUID] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        stmt = (
            select(Lesson)
            .join(Subject, Lesson.subject_id == Subject.id)
            .join(Teacher, Lesson.teacher_id == Teacher.id)
            .join(ClassModel, Lesson.class_id == ClassModel.id)
        )

        if class_ids:
            stmt = stmt.where(Lesson.class_id.in_(class_ids))
        if teacher_ids:
            stmt = stmt.where(Lesson.teacher_id.in_(teacher_ids))
        if subject_ids:
            stmt = stmt.where(Lesson.subject_id.in_(subject_ids))
        if module_id:
            module = await self.db.get(Module, module_id)
            if module is None:
                raise NotFoundError("Module", module_id)
            lower, upper = day_bounds(module.start_date, module.end_date)
            stmt = stmt.where(Lesson.start_time >= lower, Lesson.start_time < upper)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(
                Subject.name.ilike(pattern),
                Teacher.name.ilike(pattern),
                Teacher.surname.ilike(pattern),
                ClassModel.name.ilike(pattern),
            ))

        stmt = stmt.order_by(Lesson.start_time.asc(), Subject.name.asc())
        return await self.paginate(stmt, page, size, options=LESSON_LOAD)

    async def get_lesson(self, lesson_id: UUID) -> Lesson:
        return await self.get_or_404(lesson_id, options=LESSON_LOAD)

    async def get_schedule(
        self,
        user: CurrentUser,
        teacher_id: Optional[UUID] = None,
        class_id: Optional[UUID] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        """Calendar entries for a teacher or a class"""
        if teacher_id is None and class_id is None:
            raise ValidationError("Either teacher_id or class_id is required")

        stmt = select(Lesson)
        if teacher_id:
            stmt = stmt.where(Lesson.teacher_id == teacher_id)
        if class_id:
            stmt = stmt.where(Lesson.class_id == class_id)

        # Students and parents only see the timetable of their own classes
        if user.role in (Role.STUDENT, Role.PARENT):
            stmt = stmt.where(Lesson.class_id.in_(visible_class_ids(user)))

        lower, upper = day_bounds(date_from, date_to)
        if lower is not None:
            stmt = stmt.where(Lesson.start_time >= lower)
        if upper is not None:
            stmt = stmt.where(Lesson.start_time < upper)

        result = await self.db.execute(stmt.order_by(Lesson.start_time.asc()))
        return [
            {
                "id": str(lesson.id),
                "title": lesson.name,
                "start": lesson.start_time.isoformat(),
                "end": lesson.end_time.isoformat(),
            }
            for lesson in result.scalars().all()
        ]

    async def check_teacher_availability(
        self,
        teacher_id: UUID,
        day: Day,
        start: Any,
        end: Any,
        exclude_lesson_id: Optional[UUID] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[Lesson]:
        """Lessons of the teacher on that weekday overlapping [start, end); empty means available"""
        stmt = select(Lesson).where(Lesson.teacher_id == teacher_id, Lesson.day == day)
        if exclude_lesson_id is not None:
            stmt = stmt.where(Lesson.id != exclude_lesson_id)

        lower, upper = day_bounds(date_from, date_to)
        if lower is not None:
            stmt = stmt.where(Lesson.start_time >= lower)
        if upper is not None:
            stmt = stmt.where(Lesson.start_time < upper)

        result = await self.db.execute(stmt.order_by(Lesson.start_time.asc()))
        return find_conflicts(start, end, result.scalars().all())

    async def _ensure_slot_free(self, data: Dict[str, Any], exclude_lesson_id: Optional[UUID] = None) -> None:
        lesson_date = data["start_time"].date()
        conflicts = await self.check_teacher_availability(
            data["teacher_id"],
            data["day"],
            data["start_time"],
            data["end_time"],
            exclude_lesson_id=exclude_lesson_id,
            date_from=lesson_date,
            date_to=lesson_date,
        )
        if conflicts:
            logger.info(f"Schedule conflict for teacher {data['teacher_id']} on {lesson_date}")
            raise ScheduleConflict([conflict_summary(c) for c in conflicts])

    async def _check_references(self, data: Dict[str, Any]) -> None:
        for model, key, label in (
            (Subject, "subject_id", "Subject"),
            (ClassModel, "class_id", "Class"),
            (Teacher, "teacher_id", "Teacher"),
        ):
            if await self.db.get(model, data[key]) is None:
                raise NotFoundError(label, data[key])

    @staticmethod
    def _ensure_own(user: CurrentUser, teacher_id: UUID) -> None:
        if user.role == Role.TEACHER and teacher_id != user.id:
            raise PermissionDenied("Teachers can only manage their own lessons")

    async def create_lesson(self, data: Dict[str, Any], user: CurrentUser) -> Lesson:
        self._ensure_own(user, data["teacher_id"])
        await self._check_references(data)
        await self._ensure_slot_free(data)

        lesson = Lesson(**data)
        self.db.add(lesson)
        await self.commit()
        logger.info(f"Created lesson {lesson.id} for teacher {lesson.teacher_id}")
        return await self.get_lesson(lesson.id)

    async def update_lesson(self, lesson_id: UUID, data: Dict[str, Any], user: CurrentUser) -> Lesson:
        lesson = await self.get_lesson(lesson_id)
        self._ensure_own(user, lesson.teacher_id)
        self._ensure_own(user, data["teacher_id"])
        await self._check_references(data)
        await self._ensure_slot_free(data, exclude_lesson_id=lesson_id)

        for key, value in data.items():
            setattr(lesson, key, value)
        await self.commit()
        return await self.get_lesson(lesson_id)

    async def delete_lesson(self, lesson_id: UUID, user: CurrentUser) -> None:
        lesson = await self.get_or_404(lesson_id)
        self._ensure_own(user, lesson.teacher_id)
        await self.db.delete(lesson)
        await self.commit()

    async def bulk_delete(self, lesson_ids: Sequence[UUID]) -> int:
        """Delete many lessons at once, dependents included"""
        result = await self.db.execute(select(Lesson).where(Lesson.id.in_(lesson_ids)))
        lessons = result.scalars().all()
        for lesson in lessons:
            await self.db.delete(lesson)
        await self.commit()
        logger.info(f"Bulk deleted {len(lessons)} lessons")
        return len(lessons)

    async def holidays_for(self, module: Module) -> List[date]:
        """Global holidays plus the module's own"""
        result = await self.db.execute(
            select(Holiday.date).where(or_(Holiday.module_id.is_(None), Holiday.module_id == module.id))
        )
        return list(result.scalars().all())

    async def create_recurring_lessons(self, data: Dict[str, Any], user: CurrentUser) -> Dict[str, Any]:
        """Materialize a weekly template over a module in a single transaction"""
        self._ensure_own(user, data["teacher_id"])
        await self._check_references(data)

        module = await self.db.get(Module, data["module_id"])
        if module is None:
            raise NotFoundError("Module", data["module_id"])

        template = LessonTemplate(
            name=data["name"],
            day=data["day"],
            start_time=data["start_time"],
            end_time=data["end_time"],
            subject_id=data["subject_id"],
            class_id=data["class_id"],
            teacher_id=data["teacher_id"],
        )
        occurrences = generate_recurring_lessons(template, module, await self.holidays_for(module))
        if not occurrences:
            raise ValidationError(f"No {template.day.value.lower()} falls inside module {module.name} outside holidays")

        conflicts = await self.check_teacher_availability(
            template.teacher_id,
            template.day,
            template.start_time,
            template.end_time,
            date_from=module.start_date,
            date_to=module.end_date,
        )
        if conflicts:
            raise ScheduleConflict([conflict_summary(c) for c in conflicts])

        lessons = [Lesson(**occurrence.as_dict()) for occurrence in occurrences]
        self.db.add_all(lessons)
        await self.commit()
        logger.info(f"Generated {len(lessons)} lessons from template '{template.name}' in module {module.name}")

        return {
            "success": True,
            "total": len(occurrences),
            "success_count": len(lessons),
            "lessons": lessons,
        }
