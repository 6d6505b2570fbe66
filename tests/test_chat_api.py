from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from support import FakeGeminiFactory, gemini_response, make_chat_service

from app_factory import create_app
from domain import SUBJECT_CHOICES
from repositories import InMemoryStudentRepository
from settings import Settings


def build_client(factory: FakeGeminiFactory, api_key: str | None = "test-key") -> TestClient:
    app = create_app(
        Settings(),
        chat_service=make_chat_service(factory, api_key=api_key),
        student_repository=InMemoryStudentRepository(),
    )
    return TestClient(app)


class ChatEndpointTest(unittest.TestCase):
    def test_answer_is_relayed(self) -> None:
        factory = FakeGeminiFactory(response=gemini_response("Inertia is resistance to motion changes."))
        client = build_client(factory)

        response = client.post("/api/chat", json={"query": "What is inertia?", "subject": "Physics"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"success": True, "response": "Inertia is resistance to motion changes."},
        )
        self.assertEqual(factory.call_count, 1)

    def test_missing_fields_are_rejected(self) -> None:
        factory = FakeGeminiFactory()
        client = build_client(factory)

        for body in ({"query": "What is inertia?"}, {"subject": "Physics"}, {"query": "  ", "subject": "Physics"}, {}):
            response = client.post("/api/chat", json=body)
            self.assertEqual(response.status_code, 400)
            self.assertEqual(
                response.json(), {"success": False, "error": "Query and subject are required"}
            )

        self.assertEqual(factory.call_count, 0)

    def test_unknown_subject_is_rejected(self) -> None:
        factory = FakeGeminiFactory()
        client = build_client(factory)

        response = client.post("/api/chat", json={"query": "Will I be rich?", "subject": "Astrology"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Unsupported subject")
        self.assertEqual(factory.call_count, 0)

    def test_provider_failure_hides_upstream_detail(self) -> None:
        factory = FakeGeminiFactory(error=ConnectionError("dial tcp 10.0.0.7: key=AIza-secret"))
        client = build_client(factory)

        with self.assertLogs("campus-lms.chat", level="ERROR"):
            response = client.post("/api/chat", json={"query": "What is inertia?", "subject": "Physics"})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(
            response.json(),
            {"success": False, "error": "Failed to get response from AI assistant"},
        )
        self.assertNotIn("secret", response.text)
        self.assertNotIn("10.0.0.7", response.text)

    def test_unconfigured_key_is_provider_failure(self) -> None:
        factory = FakeGeminiFactory()
        client = build_client(factory, api_key=None)

        response = client.post("/api/chat", json={"query": "What is a verb?", "subject": "English"})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(factory.call_count, 0)

    def test_malformed_body_uses_error_envelope(self) -> None:
        client = build_client(FakeGeminiFactory())

        response = client.post(
            "/api/chat", content=b"{not json", headers={"Content-Type": "application/json"}
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"success": False, "error": "Invalid request"})

    def test_subjects_are_listed(self) -> None:
        client = build_client(FakeGeminiFactory())

        response = client.get("/api/chat/subjects")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["data"], list(SUBJECT_CHOICES))

    def test_healthz_reports_gemini_configuration(self) -> None:
        client = build_client(FakeGeminiFactory(), api_key=None)

        payload = client.get("/healthz").json()

        self.assertEqual(payload["status"], "degraded")
        self.assertFalse(payload["gemini_configured"])
        self.assertEqual(payload["storage"], "ok")
        self.assertEqual(payload["storage_backend"], "InMemoryStudentRepository")


if __name__ == "__main__":
    unittest.main()
