from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse, Response

from schemas import (
    EnrollmentFilter,
    ErrorReply,
    MessageReply,
    PasswordResetRequest,
    StudentCoursesReply,
    StudentListReply,
    StudentReply,
    StudentUpdateRequest,
)
from services import StudentService, StudentServiceError
from services.student_service import export_filename, students_to_csv


ERROR_RESPONSES = {
    400: {"model": ErrorReply},
    404: {"model": ErrorReply},
    409: {"model": ErrorReply},
}


def _error(exc: StudentServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=ErrorReply(error=str(exc)).model_dump())


def build_students_router(student_service: StudentService) -> APIRouter:
    router = APIRouter(prefix="/api/admin/students", tags=["admin-students"])

    @router.get(
        "/stats",
        response_model=StudentListReply,
        summary="List students with enrollment statistics.",
    )
    async def list_students(
        search: Optional[str] = Query(default=None, description="Match on name, email or phone."),
        enrollment_filter: EnrollmentFilter = Query(default=EnrollmentFilter.ALL, alias="filter"),
    ) -> StudentListReply:
        students = await student_service.list_students_with_stats(search, enrollment_filter)
        return StudentListReply(data=students)

    @router.get(
        "/export.csv",
        responses={200: {"content": {"text/csv": {}}}, 404: {"model": ErrorReply}},
        summary="Download the filtered student list as CSV.",
    )
    async def export_students(
        search: Optional[str] = Query(default=None),
        enrollment_filter: EnrollmentFilter = Query(default=EnrollmentFilter.ALL, alias="filter"),
    ):
        students = await student_service.list_students_with_stats(search, enrollment_filter)
        if not students:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content=ErrorReply(error="No students to export").model_dump(),
            )
        return Response(
            content=students_to_csv(students),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
        )

    @router.get("/{student_id}", response_model=StudentReply, responses=ERROR_RESPONSES)
    async def get_student(student_id: str):
        try:
            student = await student_service.get_student(student_id)
        except StudentServiceError as exc:
            return _error(exc)
        return StudentReply(data=student)

    @router.get("/{student_id}/courses", response_model=StudentCoursesReply, responses=ERROR_RESPONSES)
    async def get_student_courses(student_id: str):
        try:
            courses = await student_service.get_student_courses(student_id)
        except StudentServiceError as exc:
            return _error(exc)
        return StudentCoursesReply(data=courses)

    @router.put(
        "/{student_id}",
        response_model=StudentReply,
        responses=ERROR_RESPONSES,
        summary="Update a student's name, email and phone.",
    )
    async def update_student(student_id: str, payload: StudentUpdateRequest):
        try:
            student = await student_service.update_student(
                student_id,
                name=payload.name,
                email=payload.email,
                phone=payload.phone,
            )
        except StudentServiceError as exc:
            return _error(exc)
        return StudentReply(data=student)

    @router.post(
        "/{student_id}/reset-password",
        response_model=MessageReply,
        responses=ERROR_RESPONSES,
        summary="Set a new password for a student.",
    )
    async def reset_password(student_id: str, payload: PasswordResetRequest):
        try:
            await student_service.reset_password(student_id, payload.new_password)
        except StudentServiceError as exc:
            return _error(exc)
        return MessageReply(message="Password reset successfully")

    return router
