# schoolhub/schemas/notices.py
"""Events and announcements; a missing class means school-wide."""
from typing import Optional
from datetime import datetime, timedelta
from uuid import UUID
from pydantic import BaseModel, Field, field_validator, model_validator

from .common import to_local_naive, today

MIN_EVENT_DURATION = timedelta(minutes=15)


class EventBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    start_time: datetime
    end_time: datetime
    class_id: Optional[UUID] = None

    naive_times = field_validator('start_time', 'end_time')(to_local_naive)

    @field_validator('class_id', mode='before')
    @classmethod
    def blank_class(cls, v):
        return None if v == "" else v

    @model_validator(mode='after')
    def validate_times(self):
        if self.start_time < datetime.now():
            raise ValueError('Start time cannot be in the past!')
        if self.end_time <= self.start_time:
            raise ValueError('End time must be after start time')
        if self.end_time - self.start_time < MIN_EVENT_DURATION:
            raise ValueError('Event must be at least 15 minutes long!')
        return self


class EventCreate(EventBase):
    pass


class EventUpdate(EventBase):
    pass


class AnnouncementBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    date: datetime
    class_id: Optional[UUID] = None

    @field_validator('class_id', mode='before')
    @classmethod
    def blank_class(cls, v):
        return None if v == "" else v

    @field_validator('date')
    @classmethod
    def validate_date(cls, v: datetime) -> datetime:
        v = to_local_naive(v)
        if v.date() < today():
            raise ValueError('Date cannot be in the past!')
        return v


class AnnouncementCreate(AnnouncementBase):
    pass


class AnnouncementUpdate(AnnouncementBase):
    pass
