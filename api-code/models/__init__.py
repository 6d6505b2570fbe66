from .chat import (
    NO_RESPONSE_TEXT,
    Answer,
    ChatRequest,
    ChatResult,
    Failure,
    FailureReason,
    WidgetState,
)
from .student import Course, Enrollment, MongoModel, Student, StudentUpdate, utc_now

__all__ = [
    "NO_RESPONSE_TEXT",
    "Answer",
    "ChatRequest",
    "ChatResult",
    "Failure",
    "FailureReason",
    "WidgetState",
    "Course",
    "Enrollment",
    "MongoModel",
    "Student",
    "StudentUpdate",
    "utc_now",
]
