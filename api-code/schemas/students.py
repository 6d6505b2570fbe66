from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class EnrollmentFilter(str, Enum):
    ALL = "all"
    ENROLLED = "enrolled"
    NOT_ENROLLED = "not_enrolled"


class StudentSummary(BaseModel):
    id: str = Field(..., description="Student identifier.")
    name: str
    email: str
    phone: Optional[str] = None
    role: str = "student"
    created_at: datetime
    enrolled_courses: int = Field(default=0, description="Number of active enrollments.")
    completed_courses: int = Field(default=0, description="Enrollments at 100% progress.")
    avg_progress: int = Field(default=0, description="Mean progress across enrollments, percent.")
    last_activity: Optional[datetime] = Field(
        default=None, description="Most recent activity across all enrollments."
    )
    total_modules: int = Field(default=0)
    completed_modules: int = Field(default=0)


class StudentCourse(BaseModel):
    id: str = Field(..., description="Course identifier.")
    title: str
    description: Optional[str] = None
    progress: int = 0
    modules_count: int = 0
    completed_modules: int = 0
    enrolled_at: Optional[datetime] = None
    last_activity: Optional[datetime] = None


class StudentUpdateRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class PasswordResetRequest(BaseModel):
    new_password: Optional[str] = Field(default=None, alias="newPassword")

    model_config = {"populate_by_name": True}


class StudentListReply(BaseModel):
    success: bool = True
    data: list[StudentSummary]


class StudentReply(BaseModel):
    success: bool = True
    data: StudentSummary


class StudentCoursesReply(BaseModel):
    success: bool = True
    data: list[StudentCourse]


class MessageReply(BaseModel):
    success: bool = True
    message: str
