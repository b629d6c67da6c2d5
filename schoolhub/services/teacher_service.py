# schoolhub/services/teacher_service.py
from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from .auth_service import AuthService
from ..core.exceptions import NotFoundError
from ..core.security import get_password_hash
from ..models import Teacher, Subject, Lesson, ClassModel

logger = logging.getLogger(__name__)

TEACHER_LOAD = (
    selectinload(Teacher.subjects),
    selectinload(Teacher.lessons).selectinload(Lesson.class_ref),
)


class TeacherService(BaseService[Teacher]):
    resource_name = "Teacher"

    def __init__(self, db: AsyncSession):
        super().__init__(Teacher, db)

    async def list_teachers(
        self,
        page: int = 1,
        size: int = 10,
        class_id: Optional[UUID] = None,
        search: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> Dict[str, Any]:
        stmt = select(Teacher)

        if class_id:
            stmt = stmt.where(Teacher.lessons.any(Lesson.class_id == class_id))
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(Teacher.name.ilike(pattern), Teacher.surname.ilike(pattern)))

        if sort == "desc":
            stmt = stmt.order_by(Teacher.name.desc(), Teacher.surname.desc())
        else:
            stmt = stmt.order_by(Teacher.name.asc(), Teacher.surname.asc())

        return await self.paginate(stmt, page, size, options=TEACHER_LOAD)

    async def get_teacher(self, teacher_id: UUID) -> Teacher:
        return await self.get_or_404(teacher_id, options=TEACHER_LOAD)

    async def get_detail(self, teacher_id: UUID) -> Dict[str, Any]:
        """Profile with subject, lesson and supervised class counts"""
        teacher = await self.get_teacher(teacher_id)

        lessons_count = (await self.db.execute(
            select(func.count(Lesson.id)).where(Lesson.teacher_id == teacher_id)
        )).scalar()
        classes_count = (await self.db.execute(
            select(func.count(ClassModel.id)).where(ClassModel.supervisor_id == teacher_id)
        )).scalar()

        return {
            "teacher": teacher,
            "counts": {
                "subjects": len(teacher.subjects),
                "lessons": lessons_count,
                "classes": classes_count,
            },
        }

    async def _load_subjects(self, subject_ids: List[UUID]) -> List[Subject]:
        if not subject_ids:
            return []
        result = await self.db.execute(select(Subject).where(Subject.id.in_(subject_ids)))
        subjects = list(result.scalars().all())
        missing = set(subject_ids) - {s.id for s in subjects}
        if missing:
            raise NotFoundError("Subject", ", ".join(str(m) for m in missing))
        return subjects

    async def create_teacher(self, data: Dict[str, Any]) -> Teacher:
        await AuthService(self.db).ensure_username_available(data["username"])

        subjects = await self._load_subjects(data.pop("subject_ids", []))
        password = data.pop("password")
        teacher = Teacher(**data, password_hash=get_password_hash(password))
        teacher.subjects = subjects

        self.db.add(teacher)
        await self.commit()
        logger.info(f"Created teacher {teacher.id} ({teacher.username})")
        return await self.get_teacher(teacher.id)

    async def update_teacher(self, teacher_id: UUID, data: Dict[str, Any]) -> Teacher:
        teacher = await self.get_teacher(teacher_id)
        await AuthService(self.db).ensure_username_available(data["username"], exclude_id=teacher_id)

        teacher.subjects = await self._load_subjects(data.pop("subject_ids", []))
        password = data.pop("password", None)
        if password:
            teacher.password_hash = get_password_hash(password)
        for key, value in data.items():
            setattr(teacher, key, value)

        await self.commit()
        return await self.get_teacher(teacher_id)
