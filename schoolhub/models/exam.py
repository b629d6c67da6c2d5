# schoolhub/models/exam.py
from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from .base import Base


class Exam(Base):
    __tablename__ = "exams"

    lesson_id = Column(Uuid(as_uuid=True), ForeignKey("lessons.id"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)

    lesson = relationship("Lesson", back_populates="exams")
    results = relationship("Result", back_populates="exam", cascade="all, delete")
