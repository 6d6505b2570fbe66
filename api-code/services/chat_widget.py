from __future__ import annotations

import logging
from typing import Optional, Protocol

from domain.subjects import Subject, parse_subject
from domain.widget_phases import WidgetPhase, is_valid_transition
from models.chat import Answer, ChatRequest, ChatResult, Failure, FailureReason, WidgetState


logger = logging.getLogger("campus-lms.widget")

ERROR_MESSAGE = "Sorry, I encountered an error. Please try again."
THINKING_MESSAGE = "AI is thinking..."


class ChatTransport(Protocol):
    async def ask(self, subject: Subject, question: str) -> ChatResult: ...


class ChatWidget:
    """Floating study-assistant panel.

    Owns the widget state and drives at most one relay call at a time. Every
    submission ends in ANSWERED or FAILED; results that arrive after the user
    cleared the panel or moved on are dropped.
    """

    def __init__(self, transport: ChatTransport):
        self._transport = transport
        self._state = WidgetState()
        self._next_request_id = 0

    @property
    def state(self) -> WidgetState:
        return self._state

    @property
    def phase(self) -> WidgetPhase:
        return self._state.phase

    @property
    def can_submit(self) -> bool:
        if self._state.phase == WidgetPhase.PENDING:
            return False
        return ChatRequest(subject=self._state.subject, question=self._state.question).is_complete

    @property
    def display_text(self) -> str:
        phase = self._state.phase
        if phase == WidgetPhase.PENDING:
            return THINKING_MESSAGE
        if phase == WidgetPhase.FAILED:
            return ERROR_MESSAGE
        if phase == WidgetPhase.ANSWERED and isinstance(self._state.last_result, Answer):
            return self._state.last_result.text
        return ""

    def toggle(self) -> bool:
        self._state = self._state.evolve(is_open=not self._state.is_open)
        return self._state.is_open

    def open(self) -> None:
        self._state = self._state.evolve(is_open=True)

    def close(self) -> None:
        self._state = self._state.evolve(is_open=False)

    def select_subject(self, subject: Optional[str | Subject]) -> None:
        if self._state.phase == WidgetPhase.PENDING:
            return
        self._state = self._state.evolve(subject=parse_subject(subject) if subject else None)

    def set_question(self, text: str) -> None:
        if self._state.phase == WidgetPhase.PENDING:
            return
        self._state = self._state.evolve(question=text)

    def clear(self) -> None:
        if self._state.phase == WidgetPhase.PENDING:
            logger.debug("Clearing widget with request %d still in flight", self._state.request_id)
        self._state = self._state.evolve(
            subject=None,
            question="",
            phase=WidgetPhase.IDLE,
            last_result=None,
            request_id=0,
        )

    async def submit(self) -> bool:
        """Send the current question. Returns False without side effects when the guard fails."""
        if not self.can_submit:
            return False

        subject = self._state.subject
        question = self._state.question
        self._next_request_id += 1
        request_id = self._next_request_id
        self._transition(WidgetPhase.PENDING, last_result=None, request_id=request_id)

        try:
            result = await self._transport.ask(subject, question)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Chat transport raised for request %d", request_id)
            result = Failure(reason=FailureReason.UNEXPECTED_CLIENT_ERROR)

        if self._state.request_id != request_id:
            logger.debug("Discarding stale chat result for request %d", request_id)
            return True

        if isinstance(result, Answer):
            self._transition(WidgetPhase.ANSWERED, last_result=result)
        else:
            logger.info("Chat request %d failed (%s)", request_id, result.reason.value)
            self._transition(WidgetPhase.FAILED, last_result=result)
        return True

    def _transition(self, new_phase: WidgetPhase, **changes) -> None:
        if not is_valid_transition(self._state.phase, new_phase):
            raise RuntimeError(
                f"Invalid widget transition {self._state.phase.value} -> {new_phase.value}"
            )
        self._state = self._state.evolve(phase=new_phase, **changes)
