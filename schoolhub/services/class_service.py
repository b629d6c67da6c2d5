# schoolhub/services/class_service.py
from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from ..core.exceptions import NotFoundError, ValidationError
from ..models import ClassModel, Grade, Teacher, Student

logger = logging.getLogger(__name__)

CLASS_LOAD = (
    selectinload(ClassModel.grade),
    selectinload(ClassModel.supervisor),
)


class GradeService(BaseService[Grade]):
    resource_name = "Grade"

    def __init__(self, db: AsyncSession):
        super().__init__(Grade, db)

    async def list_grades(self) -> List[Grade]:
        result = await self.db.execute(select(Grade).order_by(Grade.level.asc()))
        return result.scalars().all()

    async def delete(self, id: Any) -> None:
        grade = await self.get_or_404(id, options=(selectinload(Grade.classes), selectinload(Grade.students)))
        if grade.classes or grade.students:
            raise ValidationError("Grade still has classes or students")
        await self.db.delete(grade)
        await self.commit()


class ClassService(BaseService[ClassModel]):
    resource_name = "Class"

    def __init__(self, db: AsyncSession):
        super().__init__(ClassModel, db)

    async def student_counts(self, class_ids: List[UUID]) -> Dict[UUID, int]:
        if not class_ids:
            return {}
        rows = await self.db.execute(
            select(Student.class_id, func.count(Student.id))
            .where(Student.class_id.in_(class_ids))
            .group_by(Student.class_id)
        )
        return {class_id: count for class_id, count in rows.all()}

    async def list_classes(
        self,
        page: int = 1,
        size: int = 10,
        supervisor_id: Optional[UUID] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        stmt = select(ClassModel)
        if supervisor_id:
            stmt = stmt.where(ClassModel.supervisor_id == supervisor_id)
        if search:
            stmt = stmt.where(ClassModel.name.ilike(f"%{search}%"))
        stmt = stmt.order_by(ClassModel.name.asc())
        return await self.paginate(stmt, page, size, options=CLASS_LOAD)

    async def get_class(self, class_id: UUID) -> ClassModel:
        return await self.get_or_404(class_id, options=CLASS_LOAD)

    async def _check_references(self, data: Dict[str, Any]) -> None:
        if await self.db.get(Grade, data["grade_id"]) is None:
            raise NotFoundError("Grade", data["grade_id"])
        supervisor_id = data.get("supervisor_id")
        if supervisor_id and await self.db.get(Teacher, supervisor_id) is None:
            raise NotFoundError("Teacher", supervisor_id)

    async def create_class(self, data: Dict[str, Any]) -> ClassModel:
        await self._check_references(data)
        obj = ClassModel(**data)
        self.db.add(obj)
        await self.commit()
        logger.info(f"Created class {obj.name}")
        return await self.get_class(obj.id)

    async def update_class(self, class_id: UUID, data: Dict[str, Any]) -> ClassModel:
        obj = await self.get_class(class_id)
        await self._check_references(data)

        enrolled = (await self.student_counts([class_id])).get(class_id, 0)
        if data["capacity"] < enrolled:
            raise ValidationError(
                f"Capacity cannot be lower than the {enrolled} students already enrolled",
                field="capacity",
            )

        for key, value in data.items():
            setattr(obj, key, value)
        await self.commit()
        return await self.get_class(class_id)

    async def delete(self, id: Any) -> None:
        obj = await self.get_or_404(id)
        if (await self.student_counts([id])).get(id, 0):
            raise ValidationError("Class still has students; move them to another class first")
        await self.db.delete(obj)
        await self.commit()
