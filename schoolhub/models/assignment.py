# schoolhub/models/assignment.py
from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base


class Assignment(Base):
    __tablename__ = "assignments"

    lesson_id = Column(Uuid(as_uuid=True), ForeignKey("lessons.id"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    start_date = Column(DateTime, nullable=False, index=True)
    due_date = Column(DateTime, nullable=False)

    lesson = relationship("Lesson", back_populates="assignments")
    results = relationship("Result", back_populates="assignment", cascade="all, delete")
