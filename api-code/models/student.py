from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MongoModel(BaseModel):
    """Base Pydantic model with sensible defaults for MongoDB documents."""

    model_config = {
        "populate_by_name": True,
        "use_enum_values": True,
    }

    def to_mongo(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def _lift_id(document: dict[str, Any], field: str) -> dict[str, Any]:
    if not document:
        raise ValueError("Mongo document is empty.")
    data = {**document}
    if "_id" in data and field not in data:
        data[field] = str(data.pop("_id"))
    return data


class Student(MongoModel):
    student_id: str = Field(..., alias="_id", description="Primary identifier.")
    name: str
    email: str
    phone: Optional[str] = None
    role: str = Field(default="student")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None
    password_hash: Optional[str] = Field(
        default=None, description="PBKDF2 hash; never serialized to API responses."
    )

    @classmethod
    def from_mongo(cls, document: dict[str, Any]) -> "Student":
        return cls.model_validate(_lift_id(document, "student_id"))


class Course(MongoModel):
    course_id: str = Field(..., alias="_id")
    title: str
    description: Optional[str] = None
    modules_count: int = Field(default=0, ge=0)

    @classmethod
    def from_mongo(cls, document: dict[str, Any]) -> "Course":
        return cls.model_validate(_lift_id(document, "course_id"))


class Enrollment(MongoModel):
    enrollment_id: str = Field(..., alias="_id")
    student_id: str
    course_id: str
    progress: int = Field(default=0, ge=0, le=100, description="Percent complete.")
    completed_modules: int = Field(default=0, ge=0)
    enrolled_at: datetime = Field(default_factory=utc_now)
    last_activity: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None or self.progress >= 100

    @classmethod
    def from_mongo(cls, document: dict[str, Any]) -> "Enrollment":
        return cls.model_validate(_lift_id(document, "enrollment_id"))


class StudentUpdate(BaseModel):
    name: str
    email: str
    phone: Optional[str] = None

    def to_update_query(self) -> dict[str, Any]:
        return {
            "$set": {
                "name": self.name,
                "email": self.email,
                "phone": self.phone,
                "updated_at": utc_now(),
            }
        }
