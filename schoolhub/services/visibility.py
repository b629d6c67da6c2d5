# schoolhub/services/visibility.py
"""Role scoping: which classes, lessons and students a caller may see."""
from typing import Optional
from uuid import UUID

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.security import CurrentUser, Role
from ..core.exceptions import PermissionDenied
from ..models import Lesson, Student, Exam, Assignment


def taught_class_ids(teacher_id: UUID):
    return select(Lesson.class_id).where(Lesson.teacher_id == teacher_id)


def children_ids(parent_id: UUID):
    return select(Student.id).where(Student.parent_id == parent_id)


def children_class_ids(parent_id: UUID):
    return select(Student.class_id).where(Student.parent_id == parent_id)


def own_class_id(student_id: UUID):
    return select(Student.class_id).where(Student.id == student_id)


def visible_class_ids(user: CurrentUser):
    """Subquery of class ids the caller belongs to; None for admins (everything)."""
    if user.role == Role.ADMIN:
        return None
    if user.role == Role.TEACHER:
        return taught_class_ids(user.id)
    if user.role == Role.STUDENT:
        return own_class_id(user.id)
    return children_class_ids(user.id)


def lesson_scope(user: CurrentUser):
    """Condition on Lesson limiting it to the caller's lessons, or None for admins."""
    if user.role == Role.ADMIN:
        return None
    if user.role == Role.TEACHER:
        return Lesson.teacher_id == user.id
    return Lesson.class_id.in_(visible_class_ids(user))


def student_scope(user: CurrentUser, student_column):
    """Condition on a student id column for student/parent callers."""
    if user.role == Role.STUDENT:
        return student_column == user.id
    if user.role == Role.PARENT:
        return student_column.in_(children_ids(user.id))
    return None


def class_or_school_wide(user: CurrentUser, class_column):
    """Rows without a class are school-wide; the rest must be in the caller's classes."""
    class_ids = visible_class_ids(user)
    if class_ids is None:
        return None
    return or_(class_column.is_(None), class_column.in_(class_ids))


def result_scope(user: CurrentUser, result_model):
    if user.role == Role.ADMIN:
        return None
    if user.role == Role.TEACHER:
        taught = Lesson.teacher_id == user.id
        return or_(
            result_model.exam.has(Exam.lesson.has(taught)),
            result_model.assignment.has(Assignment.lesson.has(taught)),
        )
    return student_scope(user, result_model.student_id)


async def ensure_teaches_lesson(db: AsyncSession, user: CurrentUser, lesson_id: UUID) -> None:
    """Teachers may only act on lessons they teach; admins on anything."""
    if user.role == Role.ADMIN:
        return
    if user.role != Role.TEACHER:
        raise PermissionDenied()
    stmt = select(Lesson.id).where(Lesson.id == lesson_id, Lesson.teacher_id == user.id)
    if (await db.execute(stmt)).scalar_one_or_none() is None:
        raise PermissionDenied("You can only manage records of lessons you teach")


async def ensure_teaches_class(db: AsyncSession, user: CurrentUser, class_id: Optional[UUID]) -> None:
    if user.role == Role.ADMIN:
        return
    if user.role != Role.TEACHER:
        raise PermissionDenied()
    if class_id is None:
        return
    stmt = select(Lesson.id).where(Lesson.class_id == class_id, Lesson.teacher_id == user.id).limit(1)
    if (await db.execute(stmt)).scalar_one_or_none() is None:
        raise PermissionDenied("You can only manage records of classes you teach")


async def ensure_can_see_student(db: AsyncSession, user: CurrentUser, student_id: UUID) -> None:
    """Documents and profiles: staff see everyone, students themselves, parents their children."""
    if user.role in (Role.ADMIN, Role.TEACHER):
        return
    if user.role == Role.STUDENT and user.id == student_id:
        return
    if user.role == Role.PARENT:
        stmt = select(Student.id).where(Student.id == student_id, Student.parent_id == user.id)
        if (await db.execute(stmt)).scalar_one_or_none() is not None:
            return
    raise PermissionDenied("You cannot access this student's records")
