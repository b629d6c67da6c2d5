# schoolhub/schemas/users.py
"""Pydantic schemas for the people of the school: teachers, students and parents."""
from typing import List, Optional
from datetime import date
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field, field_validator

from ..models.enums import Gender
from .common import empty_to_none


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=20)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    role: str
    user_id: UUID
    name: str


class PersonBase(BaseModel):
    username: str = Field(..., min_length=3, max_length=20, description="Login name")
    name: str = Field(..., min_length=1, max_length=100, description="First name")
    surname: str = Field(..., min_length=1, max_length=100, description="Last name")
    phone: str = Field(..., min_length=1, max_length=20)

    @field_validator('username', 'name', 'surname', 'phone')
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Field is required')
        return v


class ProfileBase(PersonBase):
    """Fields shared by teachers and students."""
    email: EmailStr
    img: Optional[str] = Field(default=None, max_length=500)
    blood_type: Optional[str] = Field(default=None, max_length=5)
    birthday: date
    gender: Gender

    blank_optional = field_validator('img', 'blood_type', mode='before')(empty_to_none)


class PasswordOnCreate(BaseModel):
    password: str = Field(..., min_length=8, description="At least 8 characters")


class PasswordOnUpdate(BaseModel):
    # Empty or missing keeps the current password
    password: Optional[str] = Field(default=None)

    @field_validator('password', mode='before')
    @classmethod
    def validate_password(cls, v):
        v = empty_to_none(v)
        if v is not None and len(v) < 8:
            raise ValueError('Password must be at least 8 characters')
        return v


class TeacherBase(ProfileBase):
    address: str = Field(default="", max_length=500)
    subject_ids: List[UUID] = Field(default_factory=list)


class TeacherCreate(TeacherBase, PasswordOnCreate):
    pass


class TeacherUpdate(TeacherBase, PasswordOnUpdate):
    pass


class StudentBase(ProfileBase):
    address: str = Field(..., min_length=1, max_length=500)
    grade_id: UUID
    class_id: UUID
    parent_id: UUID


class StudentCreate(StudentBase, PasswordOnCreate):
    pass


class StudentUpdate(StudentBase, PasswordOnUpdate):
    pass


class ParentBase(PersonBase):
    email: Optional[EmailStr] = None
    address: str = Field(..., min_length=1, max_length=500)

    blank_email = field_validator('email', mode='before')(empty_to_none)


class ParentCreate(ParentBase):
    password: str = Field(..., min_length=6, description="At least 6 characters")


class ParentUpdate(ParentBase):
    password: Optional[str] = None

    @field_validator('password', mode='before')
    @classmethod
    def validate_password(cls, v):
        v = empty_to_none(v)
        if v is not None and len(v) < 6:
            raise ValueError('Password must be at least 6 characters long')
        return v
