# schoolhub/schemas/attendance.py
from datetime import date
from uuid import UUID
from pydantic import BaseModel


class AttendanceBase(BaseModel):
    date: date
    present: bool
    excused: bool = False
    student_id: UUID
    lesson_id: UUID


class AttendanceCreate(AttendanceBase):
    pass


class AttendanceUpdate(AttendanceBase):
    pass
