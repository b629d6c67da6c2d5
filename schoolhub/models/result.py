# schoolhub/models/result.py
from sqlalchemy import Column, Integer, ForeignKey, Uuid, CheckConstraint
from sqlalchemy.orm import relationship
from .base import Base


class Result(Base):
    __tablename__ = "results"

    student_id = Column(Uuid(as_uuid=True), ForeignKey("students.id"), nullable=False, index=True)
    exam_id = Column(Uuid(as_uuid=True), ForeignKey("exams.id"), nullable=True, index=True)
    assignment_id = Column(Uuid(as_uuid=True), ForeignKey("assignments.id"), nullable=True, index=True)

    score = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("score >= 0 AND score <= 100", name="ck_results_score_range"),
    )

    student = relationship("Student", back_populates="results")
    exam = relationship("Exam", back_populates="results")
    assignment = relationship("Assignment", back_populates="results")
