# schoolhub/services/subject_service.py
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from ..core.exceptions import NotFoundError
from ..models import Subject, Teacher

SUBJECT_LOAD = (selectinload(Subject.teachers),)


class SubjectService(BaseService[Subject]):
    resource_name = "Subject"

    def __init__(self, db: AsyncSession):
        super().__init__(Subject, db)

    async def list_subjects(self, page: int = 1, size: int = 10, search: Optional[str] = None) -> Dict[str, Any]:
        stmt = select(Subject)
        if search:
            stmt = stmt.where(Subject.name.ilike(f"%{search}%"))
        stmt = stmt.order_by(Subject.name.asc())
        return await self.paginate(stmt, page, size, options=SUBJECT_LOAD)

    async def get_subject(self, subject_id: UUID) -> Subject:
        return await self.get_or_404(subject_id, options=SUBJECT_LOAD)

    async def _load_teachers(self, teacher_ids: List[UUID]) -> List[Teacher]:
        result = await self.db.execute(select(Teacher).where(Teacher.id.in_(teacher_ids)))
        teachers = list(result.scalars().all())
        missing = set(teacher_ids) - {t.id for t in teachers}
        if missing:
            raise NotFoundError("Teacher", ", ".join(str(m) for m in missing))
        return teachers

    async def create_subject(self, data: Dict[str, Any]) -> Subject:
        subject = Subject(name=data["name"])
        subject.teachers = await self._load_teachers(data["teacher_ids"])
        self.db.add(subject)
        await self.commit()
        return await self.get_subject(subject.id)

    async def update_subject(self, subject_id: UUID, data: Dict[str, Any]) -> Subject:
        subject = await self.get_subject(subject_id)
        subject.name = data["name"]
        subject.teachers = await self._load_teachers(data["teacher_ids"])
        await self.commit()
        return await self.get_subject(subject_id)
