# schoolhub/schemas/documents.py
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator


class CertificateRequest(BaseModel):
    number: str = Field(..., min_length=1, max_length=50, description="Registry number of the certificate")
    purpose: str = Field(..., min_length=1, max_length=300, description="What the certificate is needed for")
    school_year_start: int = Field(..., ge=2000, le=2100)
    school_year_end: int = Field(..., ge=2000, le=2100)
    registration_number: Optional[str] = Field(default=None, max_length=50)

    @model_validator(mode='after')
    def validate_years(self):
        if self.school_year_end < self.school_year_start:
            raise ValueError('School year end cannot be before its start')
        return self


class TranscriptRequest(BaseModel):
    personal_code: Optional[str] = Field(default=None, max_length=20)
    birth_place: Optional[str] = Field(default=None, max_length=100)
    nationality: Optional[str] = Field(default=None, max_length=50)


class AbsenceReportRequest(BaseModel):
    month: str = Field(..., description="Month as YYYY-MM")

    @field_validator('month')
    @classmethod
    def validate_month(cls, v: str) -> str:
        parts = v.split('-')
        if len(parts) != 2 or not all(p.isdigit() for p in parts) or len(parts[0]) != 4:
            raise ValueError('Month must use the YYYY-MM format')
        if not 1 <= int(parts[1]) <= 12:
            raise ValueError('Month must be between 01 and 12')
        return f"{parts[0]}-{int(parts[1]):02d}"
