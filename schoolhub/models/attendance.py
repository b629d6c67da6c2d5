# schoolhub/models/attendance.py
from sqlalchemy import Column, Boolean, Date, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base


class Attendance(Base):
    __tablename__ = "attendances"

    student_id = Column(Uuid(as_uuid=True), ForeignKey("students.id"), nullable=False, index=True)
    lesson_id = Column(Uuid(as_uuid=True), ForeignKey("lessons.id"), nullable=False, index=True)

    date = Column(Date, nullable=False, index=True)
    present = Column(Boolean, nullable=False, default=False)
    # Only meaningful for absences
    excused = Column(Boolean, nullable=False, default=False)

    student = relationship("Student", back_populates="attendances")
    lesson = relationship("Lesson", back_populates="attendances")
