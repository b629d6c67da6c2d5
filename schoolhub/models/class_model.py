# schoolhub/models/class_model.py
from sqlalchemy import Column, String, Integer, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base


class ClassModel(Base):
    __tablename__ = "classes"

    # Foreign Keys
    grade_id = Column(Uuid(as_uuid=True), ForeignKey("grades.id"), nullable=False, index=True)
    supervisor_id = Column(Uuid(as_uuid=True), ForeignKey("teachers.id", ondelete="SET NULL"), nullable=True, index=True)

    name = Column(String(50), nullable=False, unique=True, index=True)
    capacity = Column(Integer, nullable=False)

    # Relationships
    grade = relationship("Grade", back_populates="classes")
    supervisor = relationship("Teacher", back_populates="supervised_classes")
    students = relationship("Student", back_populates="class_ref")
    lessons = relationship("Lesson", back_populates="class_ref", cascade="all, delete")
    events = relationship("Event", back_populates="class_ref", cascade="all, delete")
    announcements = relationship("Announcement", back_populates="class_ref", cascade="all, delete")
