from __future__ import annotations

import base64
import csv
import hashlib
import io
import logging
import secrets
from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence

from models.student import Course, Enrollment, Student, StudentUpdate, utc_now
from repositories.errors import DuplicateEmailError
from schemas.students import EnrollmentFilter, StudentCourse, StudentSummary


logger = logging.getLogger("campus-lms.students")

MIN_PASSWORD_LENGTH = 6
CSV_HEADERS: tuple[str, ...] = (
    "Name",
    "Email",
    "Phone",
    "Enrolled Courses",
    "Completed Courses",
    "Average Progress",
    "Completed Modules",
    "Total Modules",
    "Last Activity",
    "Created Date",
)


class StudentServiceError(Exception):
    """Base class for errors surfaced to admin API callers."""

    status_code = 400


class StudentNotFoundError(StudentServiceError):
    status_code = 404

    def __init__(self, student_id: str) -> None:
        self.student_id = student_id
        super().__init__("Student not found")


class StudentValidationError(StudentServiceError):
    status_code = 400


class EmailConflictError(StudentServiceError):
    status_code = 409

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__("Email is already used by another student")


class StudentStore(Protocol):
    async def ping(self) -> bool: ...

    async def list_students(self) -> list[Student]: ...

    async def get_student(self, student_id: str) -> Optional[Student]: ...

    async def find_email_owner(self, email: str) -> Optional[str]: ...

    async def update_student(self, student_id: str, update: StudentUpdate) -> Optional[Student]: ...

    async def set_password_hash(self, student_id: str, password_hash: str) -> bool: ...

    async def list_enrollments(self, student_id: Optional[str] = None) -> list[Enrollment]: ...

    async def list_courses(self, course_ids: Optional[Iterable[str]] = None) -> list[Course]: ...


def hash_password(password: str, *, iterations: int, salt: Optional[bytes] = None) -> str:
    salt = salt or secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    encoded_salt = base64.b64encode(salt).decode("ascii")
    encoded_digest = base64.b64encode(digest).decode("ascii")
    return f"pbkdf2_sha256${iterations}${encoded_salt}${encoded_digest}"


def summarize_student(
    student: Student,
    enrollments: Sequence[Enrollment],
    courses: dict[str, Course],
) -> StudentSummary:
    enrolled = len(enrollments)
    completed = sum(1 for enrollment in enrollments if enrollment.is_completed)
    avg_progress = round(sum(e.progress for e in enrollments) / enrolled) if enrolled else 0
    activity = [e.last_activity for e in enrollments if e.last_activity is not None]
    total_modules = sum(
        courses[e.course_id].modules_count for e in enrollments if e.course_id in courses
    )
    return StudentSummary(
        id=student.student_id,
        name=student.name,
        email=student.email,
        phone=student.phone,
        role=student.role,
        created_at=student.created_at,
        enrolled_courses=enrolled,
        completed_courses=completed,
        avg_progress=avg_progress,
        last_activity=max(activity) if activity else None,
        total_modules=total_modules,
        completed_modules=sum(e.completed_modules for e in enrollments),
    )


def filter_students(
    students: Iterable[StudentSummary],
    search: Optional[str] = None,
    enrollment_filter: EnrollmentFilter = EnrollmentFilter.ALL,
) -> list[StudentSummary]:
    """Case-insensitive search over name, email and phone, then enrollment filter."""
    term = (search or "").strip().lower()
    selected: list[StudentSummary] = []
    for student in students:
        if term and not (
            term in student.name.lower()
            or term in student.email.lower()
            or (student.phone and term in student.phone.lower())
        ):
            continue
        if enrollment_filter == EnrollmentFilter.ENROLLED and student.enrolled_courses == 0:
            continue
        if enrollment_filter == EnrollmentFilter.NOT_ENROLLED and student.enrolled_courses > 0:
            continue
        selected.append(student)
    return selected


def _format_date(value: Optional[datetime]) -> Optional[str]:
    return value.date().isoformat() if value else None


def students_to_csv(students: Iterable[StudentSummary]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for student in students:
        writer.writerow(
            [
                student.name,
                student.email,
                student.phone or "N/A",
                student.enrolled_courses,
                student.completed_courses,
                f"{student.avg_progress}%",
                student.completed_modules,
                student.total_modules,
                _format_date(student.last_activity) or "No activity",
                _format_date(student.created_at),
            ]
        )
    return buffer.getvalue()


def export_filename(today: Optional[datetime] = None) -> str:
    return f"students-{(today or utc_now()).date().isoformat()}.csv"


class StudentService:
    """Admin operations over students and their course enrollments."""

    def __init__(self, repository: StudentStore, *, password_hash_iterations: int = 260_000):
        self.repository = repository
        self.password_hash_iterations = password_hash_iterations

    async def _course_index(self, enrollments: Sequence[Enrollment]) -> dict[str, Course]:
        course_ids = {enrollment.course_id for enrollment in enrollments}
        if not course_ids:
            return {}
        courses = await self.repository.list_courses(course_ids)
        return {course.course_id: course for course in courses}

    async def list_students_with_stats(
        self,
        search: Optional[str] = None,
        enrollment_filter: EnrollmentFilter = EnrollmentFilter.ALL,
    ) -> list[StudentSummary]:
        students = await self.repository.list_students()
        enrollments = await self.repository.list_enrollments()
        courses = await self._course_index(enrollments)

        by_student: dict[str, list[Enrollment]] = {}
        for enrollment in enrollments:
            by_student.setdefault(enrollment.student_id, []).append(enrollment)

        summaries = [
            summarize_student(student, by_student.get(student.student_id, []), courses)
            for student in students
        ]
        return filter_students(summaries, search, enrollment_filter)

    async def get_student(self, student_id: str) -> StudentSummary:
        student = await self.repository.get_student(student_id)
        if not student:
            raise StudentNotFoundError(student_id)
        enrollments = await self.repository.list_enrollments(student_id)
        courses = await self._course_index(enrollments)
        return summarize_student(student, enrollments, courses)

    async def get_student_courses(self, student_id: str) -> list[StudentCourse]:
        if not await self.repository.get_student(student_id):
            raise StudentNotFoundError(student_id)
        enrollments = await self.repository.list_enrollments(student_id)
        courses = await self._course_index(enrollments)

        result: list[StudentCourse] = []
        for enrollment in enrollments:
            course = courses.get(enrollment.course_id)
            if course is None:
                logger.warning(
                    "Enrollment %s references missing course %s",
                    enrollment.enrollment_id,
                    enrollment.course_id,
                )
                continue
            result.append(
                StudentCourse(
                    id=course.course_id,
                    title=course.title,
                    description=course.description,
                    progress=enrollment.progress,
                    modules_count=course.modules_count,
                    completed_modules=enrollment.completed_modules,
                    enrolled_at=enrollment.enrolled_at,
                    last_activity=enrollment.last_activity,
                )
            )
        return result

    async def update_student(
        self,
        student_id: str,
        *,
        name: Optional[str],
        email: Optional[str],
        phone: Optional[str] = None,
    ) -> StudentSummary:
        clean_name = (name or "").strip()
        clean_email = (email or "").strip()
        if not clean_name or not clean_email:
            raise StudentValidationError("Name and email are required")

        if not await self.repository.get_student(student_id):
            raise StudentNotFoundError(student_id)
        owner = await self.repository.find_email_owner(clean_email)
        if owner is not None and owner != student_id:
            raise EmailConflictError(clean_email)

        update = StudentUpdate(name=clean_name, email=clean_email, phone=(phone or "").strip() or None)
        try:
            updated = await self.repository.update_student(student_id, update)
        except DuplicateEmailError as exc:
            raise EmailConflictError(clean_email) from exc
        if not updated:
            raise StudentNotFoundError(student_id)
        logger.info("Updated profile for student %s", student_id)
        return await self.get_student(student_id)

    async def reset_password(self, student_id: str, new_password: Optional[str]) -> None:
        if not new_password:
            raise StudentValidationError("New password is required")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise StudentValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        password_hash = hash_password(new_password, iterations=self.password_hash_iterations)
        if not await self.repository.set_password_hash(student_id, password_hash):
            raise StudentNotFoundError(student_id)
        logger.info("Password reset for student %s", student_id)
