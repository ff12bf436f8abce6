from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Identity(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    username: Optional[str] = None


class Credentials(BaseModel):
    username: str
    password: str = Field(repr=False)


class ApplicationStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"


# Read models for rows served by the records backend. Unknown fields are ignored
# so the console keeps working when the backend adds columns.


class Applicant(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None


class Program(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    description: Optional[str] = None
    capacity: Optional[int] = None
    deadline: Optional[date] = None


class Application(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    applicant_id: str
    program_id: str
    status: ApplicationStatus = ApplicationStatus.DRAFT
    submitted_at: Optional[datetime] = None
