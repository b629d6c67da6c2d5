# schoolhub/schemas/lesson.py
"""Lesson schemas, including the weekly template used for recurring generation."""
from typing import List
from datetime import datetime, time
from uuid import UUID
from pydantic import BaseModel, Field, field_validator, model_validator

from ..models.enums import Day
from ..services.scheduling import day_of
from .common import to_local_naive

SCHOOL_DAY_START = time(8, 0)
SCHOOL_DAY_END = time(15, 0)


def _within_school_hours(value: time) -> bool:
    clock = value.replace(second=0, microsecond=0)
    return SCHOOL_DAY_START <= clock <= SCHOOL_DAY_END


class LessonRefs(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    day: Day
    subject_id: UUID
    class_id: UUID
    teacher_id: UUID


class LessonCreate(LessonRefs):
    start_time: datetime
    end_time: datetime

    @field_validator('start_time', 'end_time')
    @classmethod
    def validate_hours(cls, v: datetime, info):
        v = to_local_naive(v).replace(second=0, microsecond=0)
        if not _within_school_hours(v.time()):
            label = "start" if info.field_name == "start_time" else "end"
            raise ValueError(f'The {label} time must be between 08:00 and 15:00.')
        return v

    @model_validator(mode='after')
    def validate_interval(self):
        if self.end_time <= self.start_time:
            raise ValueError('End time must be after start time')
        if self.start_time.date() != self.end_time.date():
            raise ValueError('A lesson must start and end on the same date')
        if day_of(self.start_time.date()) != self.day:
            raise ValueError(f'The lesson date is not a {self.day.value.lower()}')
        return self


class LessonUpdate(LessonCreate):
    pass


class RecurringLessonCreate(LessonRefs):
    """Weekly template materialized once per matching day of a module."""
    start_time: time
    end_time: time
    module_id: UUID

    @field_validator('start_time', 'end_time')
    @classmethod
    def validate_hours(cls, v: time, info):
        if not _within_school_hours(v):
            label = "start" if info.field_name == "start_time" else "end"
            raise ValueError(f'The {label} time must be between 08:00 and 15:00.')
        return v.replace(second=0, microsecond=0, tzinfo=None)

    @model_validator(mode='after')
    def validate_interval(self):
        if self.end_time <= self.start_time:
            raise ValueError('End time must be after start time')
        return self


class BulkDeleteRequest(BaseModel):
    ids: List[UUID] = Field(..., min_length=1)

