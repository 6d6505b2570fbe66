from __future__ import annotations

from typing import Dict, Iterable, Optional

from models.student import Course, Enrollment, Student, StudentUpdate, utc_now
from repositories.errors import DuplicateEmailError


class InMemoryStudentRepository:
    """Fallback repository used when MongoDB is unavailable."""

    def __init__(
        self,
        students: Iterable[Student] = (),
        courses: Iterable[Course] = (),
        enrollments: Iterable[Enrollment] = (),
    ) -> None:
        self._students: Dict[str, Student] = {s.student_id: s for s in students}
        self._courses: Dict[str, Course] = {c.course_id: c for c in courses}
        self._enrollments: Dict[str, Enrollment] = {e.enrollment_id: e for e in enrollments}

    async def ensure_indexes(self) -> None:  # pragma: no cover - no-op
        return

    async def ping(self) -> bool:
        return True

    async def list_students(self) -> list[Student]:
        return sorted(self._students.values(), key=lambda s: s.created_at, reverse=True)

    async def get_student(self, student_id: str) -> Optional[Student]:
        return self._students.get(student_id)

    async def find_email_owner(self, email: str) -> Optional[str]:
        for student in self._students.values():
            if student.email == email:
                return student.student_id
        return None

    async def update_student(self, student_id: str, update: StudentUpdate) -> Optional[Student]:
        student = self._students.get(student_id)
        if not student:
            return None
        owner = await self.find_email_owner(update.email)
        if owner is not None and owner != student_id:
            raise DuplicateEmailError(update.email)
        updated = student.model_copy(
            update={
                "name": update.name,
                "email": update.email,
                "phone": update.phone,
                "updated_at": utc_now(),
            }
        )
        self._students[student_id] = updated
        return updated

    async def set_password_hash(self, student_id: str, password_hash: str) -> bool:
        student = self._students.get(student_id)
        if not student:
            return False
        self._students[student_id] = student.model_copy(
            update={"password_hash": password_hash, "updated_at": utc_now()}
        )
        return True

    async def list_enrollments(self, student_id: Optional[str] = None) -> list[Enrollment]:
        return [
            enrollment
            for enrollment in self._enrollments.values()
            if student_id is None or enrollment.student_id == student_id
        ]

    async def list_courses(self, course_ids: Optional[Iterable[str]] = None) -> list[Course]:
        if course_ids is None:
            return list(self._courses.values())
        wanted = set(course_ids)
        return [course for course in self._courses.values() if course.course_id in wanted]
