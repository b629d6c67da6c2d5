# schoolhub/models/lesson.py
from sqlalchemy import Column, String, DateTime, Enum, ForeignKey, Uuid, Index
from sqlalchemy.orm import relationship
from .base import Base
from .enums import Day


class Lesson(Base):
    __tablename__ = "lessons"

    # Foreign Keys
    subject_id = Column(Uuid(as_uuid=True), ForeignKey("subjects.id"), nullable=False, index=True)
    class_id = Column(Uuid(as_uuid=True), ForeignKey("classes.id"), nullable=False, index=True)
    teacher_id = Column(Uuid(as_uuid=True), ForeignKey("teachers.id"), nullable=False, index=True)

    name = Column(String(200), nullable=False)
    day = Column(Enum(Day, native_enum=False, length=10), nullable=False)
    # Local wall-clock times of the dated occurrence
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)

    __table_args__ = (
        Index("ix_lessons_teacher_day", "teacher_id", "day"),
    )

    # Relationships
    subject = relationship("Subject", back_populates="lessons")
    class_ref = relationship("ClassModel", back_populates="lessons")
    teacher = relationship("Teacher", back_populates="lessons")
    exams = relationship("Exam", back_populates="lesson", cascade="all, delete")
    assignments = relationship("Assignment", back_populates="lesson", cascade="all, delete")
    attendances = relationship("Attendance", back_populates="lesson", cascade="all, delete")
