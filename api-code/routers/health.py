from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter

from services import GeminiChatService, StudentService


def build_health_router(student_service: StudentService, chat_service: GeminiChatService) -> APIRouter:
    router = APIRouter()

    @router.get("/healthz")
    async def healthcheck() -> Dict[str, Any]:
        storage_ok = await student_service.repository.ping()
        gemini_configured = chat_service.config.is_configured

        issues = []
        if not storage_ok:
            issues.append("Student storage ping failed.")
        if not gemini_configured:
            issues.append("GEMINI_API_KEY is not configured.")

        return {
            "status": "healthy" if not issues else "degraded",
            "storage": "ok" if storage_ok else "unreachable",
            "storage_backend": type(student_service.repository).__name__,
            "gemini_configured": gemini_configured,
            "model": chat_service.model_name,
            "issues": issues,
        }

    return router
