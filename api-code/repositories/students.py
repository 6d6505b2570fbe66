from __future__ import annotations

from typing import Iterable, Optional

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from db.mongo import get_database
from models.student import Course, Enrollment, Student, StudentUpdate, utc_now
from repositories.errors import DuplicateEmailError


STUDENT_ROLE = "student"


class StudentRepository:
    """MongoDB repository over the users, courses and enrollments collections."""

    def __init__(self, database: Optional[AsyncIOMotorDatabase] = None):
        self._db = database if database is not None else get_database()
        self._users: AsyncIOMotorCollection = self._db["users"]
        self._courses: AsyncIOMotorCollection = self._db["courses"]
        self._enrollments: AsyncIOMotorCollection = self._db["enrollments"]

    async def ensure_indexes(self) -> None:
        await self._users.create_index("email", unique=True)
        await self._users.create_index("role")
        await self._enrollments.create_index("student_id")
        await self._enrollments.create_index([("student_id", 1), ("course_id", 1)], unique=True)

    async def ping(self) -> bool:
        try:
            await self._db.command("ping")
        except Exception:  # pylint: disable=broad-except
            return False
        return True

    async def list_students(self) -> list[Student]:
        cursor = self._users.find({"role": STUDENT_ROLE}).sort("created_at", -1)
        return [Student.from_mongo(document) async for document in cursor]

    async def get_student(self, student_id: str) -> Optional[Student]:
        document = await self._users.find_one({"_id": student_id, "role": STUDENT_ROLE})
        if not document:
            return None
        return Student.from_mongo(document)

    async def find_email_owner(self, email: str) -> Optional[str]:
        # the unique email index spans every role, so admins count too
        document = await self._users.find_one({"email": email}, {"_id": 1})
        if not document:
            return None
        return str(document["_id"])

    async def update_student(self, student_id: str, update: StudentUpdate) -> Optional[Student]:
        try:
            document = await self._users.find_one_and_update(
                {"_id": student_id, "role": STUDENT_ROLE},
                update.to_update_query(),
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as exc:
            raise DuplicateEmailError(update.email) from exc
        if not document:
            return None
        return Student.from_mongo(document)

    async def set_password_hash(self, student_id: str, password_hash: str) -> bool:
        result = await self._users.update_one(
            {"_id": student_id, "role": STUDENT_ROLE},
            {"$set": {"password_hash": password_hash, "updated_at": utc_now()}},
        )
        return result.matched_count == 1

    async def list_enrollments(self, student_id: Optional[str] = None) -> list[Enrollment]:
        query = {"student_id": student_id} if student_id else {}
        cursor = self._enrollments.find(query)
        return [Enrollment.from_mongo(document) async for document in cursor]

    async def list_courses(self, course_ids: Optional[Iterable[str]] = None) -> list[Course]:
        query = {"_id": {"$in": list(course_ids)}} if course_ids is not None else {}
        cursor = self._courses.find(query)
        return [Course.from_mongo(document) async for document in cursor]
