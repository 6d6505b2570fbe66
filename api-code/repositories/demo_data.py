from __future__ import annotations

from datetime import timedelta

from models.student import Course, Enrollment, Student, utc_now

from .in_memory import InMemoryStudentRepository


def build_demo_repository() -> InMemoryStudentRepository:
    """Small fixture set for local development without MongoDB."""
    now = utc_now()
    courses = [
        Course(_id="course-algebra", title="Algebra I", description="Linear equations and functions.", modules_count=8),
        Course(_id="course-mechanics", title="Classical Mechanics", description="Motion, forces and energy.", modules_count=10),
        Course(_id="course-cells", title="Cell Biology", description="Structure and function of cells.", modules_count=6),
    ]
    students = [
        Student(_id="student-ada", name="Ada Lovelace", email="ada@example.edu", phone="555-0101", created_at=now - timedelta(days=120)),
        Student(_id="student-alan", name="Alan Turing", email="alan@example.edu", created_at=now - timedelta(days=90)),
        Student(_id="student-grace", name="Grace Hopper", email="grace@example.edu", phone="555-0103", created_at=now - timedelta(days=30)),
    ]
    enrollments = [
        Enrollment(
            _id="enr-1", student_id="student-ada", course_id="course-algebra",
            progress=100, completed_modules=8, last_activity=now - timedelta(days=2), completed_at=now - timedelta(days=2),
        ),
        Enrollment(
            _id="enr-2", student_id="student-ada", course_id="course-mechanics",
            progress=40, completed_modules=4, last_activity=now - timedelta(hours=5),
        ),
        Enrollment(
            _id="enr-3", student_id="student-alan", course_id="course-cells",
            progress=15, completed_modules=1, last_activity=now - timedelta(days=10),
        ),
    ]
    return InMemoryStudentRepository(students=students, courses=courses, enrollments=enrollments)
