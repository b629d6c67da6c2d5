# schoolhub/models/subject.py
from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from .base import Base
from .teacher import teacher_subjects


class Subject(Base):
    __tablename__ = "subjects"

    name = Column(String(100), nullable=False, unique=True, index=True)

    teachers = relationship("Teacher", secondary=teacher_subjects, back_populates="subjects")
    lessons = relationship("Lesson", back_populates="subject", cascade="all, delete")
