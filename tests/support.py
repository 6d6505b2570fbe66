from __future__ import annotations

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
if str(API_CODE_PATH) not in sys.path:
    sys.path.insert(0, str(API_CODE_PATH))

from models import Course, Enrollment, Student  # noqa: E402
from repositories import InMemoryStudentRepository  # noqa: E402
from services import GeminiChatService  # noqa: E402
from settings import GeminiConfig  # noqa: E402


def gemini_response(*texts: Optional[str]) -> SimpleNamespace:
    """Shape-compatible stand-in for a GenerateContentResponse."""
    candidates = [
        SimpleNamespace(content=SimpleNamespace(parts=[SimpleNamespace(text=text)]))
        for text in texts
    ]
    return SimpleNamespace(candidates=candidates)


class FakeGeminiModel:
    def __init__(self, factory: "FakeGeminiFactory") -> None:
        self._factory = factory

    def generate_content(self, prompt: str) -> Any:
        self._factory.prompts.append(prompt)
        if self._factory.error is not None:
            raise self._factory.error
        return self._factory.response


class FakeGeminiFactory:
    """Replaces genai.GenerativeModel and records every outbound call."""

    def __init__(self, response: Any = None, error: Optional[BaseException] = None) -> None:
        self.response = response if response is not None else gemini_response("Default answer")
        self.error = error
        self.prompts: list[str] = []
        self.created: list[dict[str, Any]] = []

    def __call__(self, model_name: str, **kwargs: Any) -> FakeGeminiModel:
        self.created.append({"model_name": model_name, **kwargs})
        return FakeGeminiModel(self)

    @property
    def call_count(self) -> int:
        return len(self.prompts)


def make_chat_service(factory: FakeGeminiFactory, api_key: Optional[str] = "test-key") -> GeminiChatService:
    return GeminiChatService(GeminiConfig(api_key=api_key), model_factory=factory)


CREATED = datetime(2024, 9, 1, 8, 30, tzinfo=timezone.utc)
ACTIVE = datetime(2024, 10, 3, 17, 0, tzinfo=timezone.utc)


def build_student_repository() -> InMemoryStudentRepository:
    return InMemoryStudentRepository(
        students=[
            Student(_id="s1", name="Maria Lopez", email="maria@school.test", phone="555-1234", created_at=CREATED),
            Student(_id="s2", name="Tom Baker", email="tom@school.test", created_at=CREATED + timedelta(days=1)),
            Student(_id="s3", name="Priya Nair", email="priya@school.test", phone="555-9876", created_at=CREATED + timedelta(days=2)),
        ],
        courses=[
            Course(_id="c1", title="Algebra", modules_count=10),
            Course(_id="c2", title="Mechanics", modules_count=6),
        ],
        enrollments=[
            Enrollment(_id="e1", student_id="s1", course_id="c1", progress=100, completed_modules=10, last_activity=ACTIVE - timedelta(days=3)),
            Enrollment(_id="e2", student_id="s1", course_id="c2", progress=45, completed_modules=3, last_activity=ACTIVE),
            Enrollment(_id="e3", student_id="s3", course_id="c2", progress=10, completed_modules=1),
        ],
    )
