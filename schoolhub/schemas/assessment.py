# schoolhub/schemas/assessment.py
"""Exams, assignments and their results."""
from typing import Optional
from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field, field_validator, model_validator

from .common import to_local_naive, today


class ExamBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    start_time: datetime
    end_time: datetime
    lesson_id: UUID

    naive_times = field_validator('start_time', 'end_time')(to_local_naive)

    @model_validator(mode='after')
    def validate_times(self):
        if self.end_time <= self.start_time:
            raise ValueError('End time must be after start time')
        if self.start_time < datetime.now():
            raise ValueError('Start time cannot be in the past')
        return self


class ExamCreate(ExamBase):
    pass


class ExamUpdate(ExamBase):
    pass


class AssignmentBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    start_date: datetime
    due_date: datetime
    lesson_id: UUID

    naive_times = field_validator('start_date', 'due_date')(to_local_naive)

    @model_validator(mode='after')
    def validate_dates(self):
        if self.start_date.date() < today():
            raise ValueError('Start date cannot be in the past!')
        if self.due_date < self.start_date:
            raise ValueError('Due date must be after or equal to start date!')
        return self


class AssignmentCreate(AssignmentBase):
    pass


class AssignmentUpdate(AssignmentBase):
    pass


class ResultBase(BaseModel):
    score: int = Field(..., ge=0, le=100, description="Score between 0 and 100")
    student_id: UUID
    exam_id: Optional[UUID] = None
    assignment_id: Optional[UUID] = None

    @field_validator('exam_id', 'assignment_id', mode='before')
    @classmethod
    def blank_reference(cls, v):
        return None if v == "" else v

    @model_validator(mode='after')
    def validate_assessment(self):
        if (self.exam_id is None) == (self.assignment_id is None):
            raise ValueError('A result belongs to exactly one exam or assignment')
        return self


class ResultCreate(ResultBase):
    pass


class ResultUpdate(ResultBase):
    pass
