"""Teacher and student request/response schemas."""

import re
from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field

from lessonbook.models.enums import Instrument

NAME_PATTERN = re.compile(r"^[A-Za-z\s'-]+$")


def _clean_name(value: str) -> str:
    value = value.strip()
    if not 2 <= len(value) <= 100:
        raise ValueError("Name must be between 2 and 100 characters")
    if not NAME_PATTERN.match(value):
        raise ValueError("Name must contain only letters, spaces, apostrophes, or hyphens")
    return value


PersonName = Annotated[str, AfterValidator(_clean_name)]


class TeacherCreate(BaseModel):
    first_name: PersonName
    last_name: PersonName
    instrument: Instrument
    experience: int = Field(0, ge=0, le=80)


class TeacherUpdate(BaseModel):
    first_name: Optional[PersonName] = None
    last_name: Optional[PersonName] = None
    instrument: Optional[Instrument] = None
    experience: Optional[int] = Field(None, ge=0, le=80)


class StudentCreate(BaseModel):
    first_name: PersonName
    last_name: PersonName
    instrument: Instrument


class StudentUpdate(BaseModel):
    first_name: Optional[PersonName] = None
    last_name: Optional[PersonName] = None
    instrument: Optional[Instrument] = None


class TeacherResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    instrument: str
    experience: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class StudentResponse(BaseModel):
    id: str
    first_name: str
    last_name: str
    instrument: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
