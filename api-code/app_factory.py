from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from db.mongo import close_mongo_client, get_database
from repositories import InMemoryStudentRepository, StudentRepository, build_demo_repository
from routers import build_chat_router, build_health_router, build_students_router
from schemas import ErrorReply
from services import GeminiChatService, StudentService
from services.student_service import StudentStore
from settings import Settings, get_settings


logger = logging.getLogger("campus-lms")


def create_app(
    settings: Optional[Settings] = None,
    *,
    chat_service: Optional[GeminiChatService] = None,
    student_repository: Optional[StudentStore] = None,
) -> FastAPI:
    """Build the API. Passing a repository skips the MongoDB startup probe."""
    settings = settings or get_settings()

    app = FastAPI(
        title="Campus LMS API",
        version="0.1.0",
        description="Student administration and subject-scoped AI study assistant.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    chat_service = chat_service or GeminiChatService(settings.gemini_config())
    probe_mongo = student_repository is None
    repository: StudentStore = student_repository or StudentRepository(get_database(settings))
    student_service = StudentService(
        repository, password_hash_iterations=settings.password_hash_iterations
    )

    app.state.settings = settings
    app.state.chat_service = chat_service
    app.state.student_service = student_service

    app.include_router(build_chat_router(chat_service))
    app.include_router(build_students_router(student_service))
    app.include_router(build_health_router(student_service, chat_service))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorReply(error="Invalid request").model_dump(),
        )

    @app.on_event("startup")
    async def on_startup() -> None:
        if not probe_mongo:
            return
        try:
            if not await repository.ping():
                raise RuntimeError("ping failed")
            await repository.ensure_indexes()
            logger.info("MongoDB repository initialized successfully.")
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("MongoDB unavailable (%s); falling back to in-memory repository.", exc)
            fallback = build_demo_repository() if settings.seed_demo_data else InMemoryStudentRepository()
            student_service.repository = fallback

    @app.on_event("shutdown")
    async def on_shutdown() -> None:
        if probe_mongo:
            close_mongo_client()

    return app
