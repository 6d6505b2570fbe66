from __future__ import annotations

import asyncio
import logging
import textwrap
from typing import Any, Callable, Optional

import google.generativeai as genai

from domain.subjects import Subject, parse_subject
from models.chat import NO_RESPONSE_TEXT, Answer, ChatResult, Failure, FailureReason
from settings import GeminiConfig


logger = logging.getLogger("campus-lms.chat")

PROMPT_TEMPLATE = textwrap.dedent(
    """\
    You are a helpful study assistant for students.
    Subject: {subject}
    Student Question: {question}

    Please provide a clear, educational answer that helps the student understand the topic.
    Keep your response informative but concise, suitable for a student learning environment.
    If the question is not related to the specified subject, gently redirect them to ask subject-relevant questions."""
)

ModelFactory = Callable[..., Any]


def build_prompt(subject: Subject, question: str) -> str:
    return PROMPT_TEMPLATE.format(subject=subject.value, question=question)


def extract_text(response: Any) -> Optional[str]:
    """Return the first candidate's first text part, or None when absent."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return None
    text = getattr(parts[0], "text", None)
    return text or None


class GeminiChatService:
    """Relays subject-scoped study questions to Gemini, one call per question."""

    def __init__(self, config: GeminiConfig, model_factory: Optional[ModelFactory] = None):
        self.config = config
        self.model_name = config.model_name
        self._model_factory = model_factory or genai.GenerativeModel
        self._uses_sdk_client = model_factory is None
        if not config.is_configured:
            logger.warning("GEMINI_API_KEY missing; the study assistant will report provider errors.")

    @property
    def generation_config(self) -> dict[str, Any]:
        return {
            "max_output_tokens": self.config.max_output_tokens,
            "temperature": self.config.temperature,
            "top_p": self.config.top_p,
        }

    async def relay(self, subject: Optional[str | Subject], question: Optional[str]) -> ChatResult:
        parsed_subject = parse_subject(subject) if subject else None
        if parsed_subject is None or not (question or "").strip():
            return Failure(reason=FailureReason.INVALID_INPUT)

        if not self.config.is_configured:
            logger.warning("Chat relay called without a configured Gemini API key.")
            return Failure(reason=FailureReason.PROVIDER_ERROR)

        prompt = build_prompt(parsed_subject, question)
        try:
            response = await asyncio.to_thread(self._call_gemini, prompt)
            text = extract_text(response)
        except Exception:  # pylint: disable=broad-except
            logger.exception(
                "Gemini request failed (model=%s, subject=%s)", self.model_name, parsed_subject.value
            )
            return Failure(reason=FailureReason.PROVIDER_ERROR)

        if text is None:
            logger.warning("Gemini returned no candidate text (subject=%s).", parsed_subject.value)
            return Answer(text=NO_RESPONSE_TEXT)
        return Answer(text=text)

    def _call_gemini(self, prompt: str) -> Any:
        if self._uses_sdk_client:
            genai.configure(api_key=self.config.api_key)
        model = self._model_factory(self.model_name, generation_config=self.generation_config)
        return model.generate_content(prompt)
