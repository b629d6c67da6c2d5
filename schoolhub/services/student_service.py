# schoolhub/services/student_service.py
from typing import Any, Dict, Optional
from uuid import UUID
import logging

from sqlalchemy import select, func, or_, case
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .base_service import BaseService
from .auth_service import AuthService
from .scores import round_half_up, summarize_scores
from ..core.exceptions import NotFoundError, CapacityExceeded
from ..core.security import get_password_hash
from ..models import (
    Student, ClassModel, Grade, Parent, Lesson, Result, Attendance,
)

logger = logging.getLogger(__name__)

STUDENT_LOAD = (
    selectinload(Student.class_ref),
    selectinload(Student.grade),
    selectinload(Student.parent),
)


class StudentService(BaseService[Student]):
    resource_name = "Student"

    def __init__(self, db: AsyncSession):
        super().__init__(Student, db)

    async def list_students(
        self,
        page: int = 1,
        size: int = 10,
        class_id: Optional[UUID] = None,
        teacher_id: Optional[UUID] = None,
        search: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> Dict[str, Any]:
        stmt = select(Student)

        if class_id:
            stmt = stmt.where(Student.class_id == class_id)
        if teacher_id:
            stmt = stmt.where(Student.class_id.in_(
                select(Lesson.class_id).where(Lesson.teacher_id == teacher_id)
            ))
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(Student.name.ilike(pattern), Student.surname.ilike(pattern)))

        if sort == "desc":
            stmt = stmt.order_by(Student.name.desc(), Student.surname.desc())
        else:
            stmt = stmt.order_by(Student.name.asc(), Student.surname.asc())

        return await self.paginate(stmt, page, size, options=STUDENT_LOAD)

    async def get_student(self, student_id: UUID) -> Student:
        return await self.get_or_404(student_id, options=STUDENT_LOAD)

    async def _check_references(self, data: Dict[str, Any]) -> ClassModel:
        class_obj = await self.db.get(ClassModel, data["class_id"])
        if class_obj is None:
            raise NotFoundError("Class", data["class_id"])
        if await self.db.get(Grade, data["grade_id"]) is None:
            raise NotFoundError("Grade", data["grade_id"])
        if await self.db.get(Parent, data["parent_id"]) is None:
            raise NotFoundError("Parent", data["parent_id"])
        return class_obj

    async def _check_capacity(self, class_obj: ClassModel) -> None:
        enrolled = (await self.db.execute(
            select(func.count(Student.id)).where(Student.class_id == class_obj.id)
        )).scalar()
        if enrolled >= class_obj.capacity:
            raise CapacityExceeded(class_obj.name, class_obj.capacity)

    async def create_student(self, data: Dict[str, Any]) -> Student:
        await AuthService(self.db).ensure_username_available(data["username"])
        class_obj = await self._check_references(data)
        await self._check_capacity(class_obj)

        password = data.pop("password")
        student = Student(**data, password_hash=get_password_hash(password))
        self.db.add(student)
        await self.commit()
        logger.info(f"Created student {student.id} in class {class_obj.name}")
        return await self.get_student(student.id)

    async def update_student(self, student_id: UUID, data: Dict[str, Any]) -> Student:
        student = await self.get_student(student_id)
        await AuthService(self.db).ensure_username_available(data["username"], exclude_id=student_id)
        class_obj = await self._check_references(data)
        if class_obj.id != student.class_id:
            await self._check_capacity(class_obj)

        password = data.pop("password", None)
        if password:
            student.password_hash = get_password_hash(password)
        for key, value in data.items():
            setattr(student, key, value)

        await self.commit()
        return await self.get_student(student_id)

    async def get_detail(self, student_id: UUID) -> Dict[str, Any]:
        """Profile, class with lesson count, result averages and attendance percentage"""
        student = await self.get_student(student_id)

        lessons_count = (await self.db.execute(
            select(func.count(Lesson.id)).where(Lesson.class_id == student.class_id)
        )).scalar()

        rows = (await self.db.execute(
            select(Result.score, Result.exam_id, Result.assignment_id)
            .where(Result.student_id == student_id)
        )).all()
        exam_scores = [r.score for r in rows if r.exam_id is not None]
        assignment_scores = [r.score for r in rows if r.assignment_id is not None]

        total, present = (await self.db.execute(
            select(
                func.count(Attendance.id),
                func.coalesce(func.sum(case((Attendance.present.is_(True), 1), else_=0)), 0),
            ).where(Attendance.student_id == student_id)
        )).one()
        attendance_percentage = round_half_up(present / total * 100) if total else None

        return {
            "student": student,
            "lessons_count": lessons_count,
            "results": {
                "overall": summarize_scores([r.score for r in rows]),
                "exams": summarize_scores(exam_scores),
                "assignments": summarize_scores(assignment_scores),
            },
            "attendance_percentage": attendance_percentage,
        }
