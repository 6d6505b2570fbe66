from .chat_service import GeminiChatService
from .chat_widget import ChatWidget
from .relay_client import RelayClient
from .student_service import (
    EmailConflictError,
    StudentNotFoundError,
    StudentService,
    StudentServiceError,
    StudentValidationError,
)

__all__ = [
    "GeminiChatService",
    "ChatWidget",
    "RelayClient",
    "EmailConflictError",
    "StudentNotFoundError",
    "StudentService",
    "StudentServiceError",
    "StudentValidationError",
]
