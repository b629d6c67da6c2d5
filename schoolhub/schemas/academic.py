# schoolhub/schemas/academic.py
from typing import List, Optional
from uuid import UUID
from pydantic import BaseModel, Field, field_validator


class GradeCreate(BaseModel):
    level: int = Field(..., ge=1, le=13, description="Grade level")


class ClassBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    capacity: int = Field(..., ge=1, description="Maximum number of students")
    grade_id: UUID
    supervisor_id: Optional[UUID] = None

    @field_validator('supervisor_id', mode='before')
    @classmethod
    def blank_supervisor(cls, v):
        return None if v == "" else v


class ClassCreate(ClassBase):
    pass


class ClassUpdate(ClassBase):
    pass


class SubjectBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    teacher_ids: List[UUID] = Field(..., min_length=1, description="At least one teacher")

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Subject name is required')
        return v


class SubjectCreate(SubjectBase):
    pass


class SubjectUpdate(SubjectBase):
    pass
