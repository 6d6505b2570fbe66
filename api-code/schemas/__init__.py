from .chat import ChatPayload, ChatReply, ErrorReply, SubjectListReply
from .students import (
    EnrollmentFilter,
    MessageReply,
    PasswordResetRequest,
    StudentCourse,
    StudentCoursesReply,
    StudentListReply,
    StudentReply,
    StudentSummary,
    StudentUpdateRequest,
)

__all__ = [
    "ChatPayload",
    "ChatReply",
    "ErrorReply",
    "SubjectListReply",
    "EnrollmentFilter",
    "MessageReply",
    "PasswordResetRequest",
    "StudentCourse",
    "StudentCoursesReply",
    "StudentListReply",
    "StudentReply",
    "StudentSummary",
    "StudentUpdateRequest",
]
