from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from domain.subjects import Subject
from domain.widget_phases import WidgetPhase


NO_RESPONSE_TEXT = "No response received"


class FailureReason(str, Enum):
    INVALID_INPUT = "invalid_input"
    PROVIDER_ERROR = "provider_error"
    UNEXPECTED_CLIENT_ERROR = "unexpected_client_error"


class ChatRequest(BaseModel):
    subject: Optional[Subject] = None
    question: str = ""

    @property
    def is_complete(self) -> bool:
        return self.subject is not None and bool(self.question.strip())


class Answer(BaseModel):
    kind: Literal["answer"] = "answer"
    text: str


class Failure(BaseModel):
    kind: Literal["failure"] = "failure"
    reason: FailureReason


ChatResult = Annotated[Union[Answer, Failure], Field(discriminator="kind")]


class WidgetState(BaseModel):
    """Snapshot of the chat widget. Phase and result are validated together."""

    is_open: bool = False
    subject: Optional[Subject] = None
    question: str = ""
    phase: WidgetPhase = WidgetPhase.IDLE
    last_result: Optional[ChatResult] = None
    request_id: int = 0

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _phase_matches_result(self) -> "WidgetState":
        phase = self.phase
        result = self.last_result
        if phase in (WidgetPhase.IDLE, WidgetPhase.PENDING) and result is not None:
            raise ValueError(f"{phase.value} state cannot carry a result")
        if phase == WidgetPhase.ANSWERED and not isinstance(result, Answer):
            raise ValueError("answered state requires an Answer result")
        if phase == WidgetPhase.FAILED and not isinstance(result, Failure):
            raise ValueError("failed state requires a Failure result")
        return self

    def evolve(self, **changes) -> "WidgetState":
        # model_copy skips validation; rebuild so the phase/result check runs
        return WidgetState.model_validate({**dict(self), **changes})
