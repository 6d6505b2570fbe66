from __future__ import annotations

import logging
from typing import Optional

import httpx

from domain.subjects import Subject
from models.chat import Answer, ChatResult, Failure, FailureReason


logger = logging.getLogger("campus-lms.widget")

CHAT_ENDPOINT = "/api/chat"


class RelayClient:
    """HTTP client for the chat relay endpoint. Never raises; failures become Failure values."""

    def __init__(self, http_client: httpx.AsyncClient, endpoint: str = CHAT_ENDPOINT):
        self._http = http_client
        self.endpoint = endpoint

    async def ask(self, subject: Subject, question: str) -> ChatResult:
        try:
            response = await self._http.post(
                self.endpoint,
                json={"query": question, "subject": subject.value},
            )
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("Chat relay request failed: %s", exc)
            return Failure(reason=FailureReason.UNEXPECTED_CLIENT_ERROR)

        if not isinstance(body, dict):
            return Failure(reason=FailureReason.UNEXPECTED_CLIENT_ERROR)

        if response.status_code == 200 and body.get("success"):
            text: Optional[str] = body.get("response")
            if isinstance(text, str):
                return Answer(text=text)
            return Failure(reason=FailureReason.UNEXPECTED_CLIENT_ERROR)

        if response.status_code == 400:
            return Failure(reason=FailureReason.INVALID_INPUT)
        return Failure(reason=FailureReason.PROVIDER_ERROR)
