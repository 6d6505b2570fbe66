from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from domain.subjects import SUBJECT_CHOICES, parse_subject
from models.chat import Answer, FailureReason
from schemas import ChatPayload, ChatReply, ErrorReply, SubjectListReply
from services import GeminiChatService


MISSING_FIELDS_ERROR = "Query and subject are required"
UNSUPPORTED_SUBJECT_ERROR = "Unsupported subject"
PROVIDER_ERROR = "Failed to get response from AI assistant"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorReply(error=message).model_dump())


def build_chat_router(chat_service: GeminiChatService) -> APIRouter:
    """Create the chat router wired to the provided chat service."""
    router = APIRouter(prefix="/api/chat", tags=["chat"])

    @router.post(
        "",
        response_model=ChatReply,
        responses={400: {"model": ErrorReply}, 500: {"model": ErrorReply}},
        summary="Ask the study assistant a subject-scoped question.",
    )
    async def chat_endpoint(payload: ChatPayload):
        query = (payload.query or "").strip()
        subject = (payload.subject or "").strip()
        if not query or not subject:
            return _error(status.HTTP_400_BAD_REQUEST, MISSING_FIELDS_ERROR)
        if parse_subject(subject) is None:
            return _error(status.HTTP_400_BAD_REQUEST, UNSUPPORTED_SUBJECT_ERROR)

        result = await chat_service.relay(subject, payload.query)
        if isinstance(result, Answer):
            return ChatReply(response=result.text)
        if result.reason == FailureReason.INVALID_INPUT:
            return _error(status.HTTP_400_BAD_REQUEST, MISSING_FIELDS_ERROR)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, PROVIDER_ERROR)

    @router.get("/subjects", response_model=SubjectListReply, summary="List supported subjects.")
    async def list_subjects() -> SubjectListReply:
        return SubjectListReply(data=list(SUBJECT_CHOICES))

    return router
