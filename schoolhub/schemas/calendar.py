# schoolhub/schemas/calendar.py
from typing import List, Optional
from datetime import date
from uuid import UUID
from pydantic import BaseModel, Field, model_validator


class HolidayBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    date: date


class HolidayCreate(HolidayBase):
    # Omit for a holiday that applies to every module
    module_id: Optional[UUID] = None


class ModuleBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    start_date: date
    end_date: date

    @model_validator(mode='after')
    def validate_range(self):
        if self.end_date < self.start_date:
            raise ValueError('End date cannot be before start date')
        return self


class ModuleCreate(ModuleBase):
    holidays: List[HolidayBase] = Field(default_factory=list)


class ModuleUpdate(ModuleBase):
    pass
