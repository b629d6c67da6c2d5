# schoolhub/models/grade.py
from sqlalchemy import Column, Integer
from sqlalchemy.orm import relationship
from .base import Base


class Grade(Base):
    __tablename__ = "grades"

    level = Column(Integer, nullable=False, unique=True)

    classes = relationship("ClassModel", back_populates="grade")
    students = relationship("Student", back_populates="grade")
