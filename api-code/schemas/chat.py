from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class ChatPayload(BaseModel):
    # Both optional so a missing field is reported through the 400 envelope.
    query: Optional[str] = Field(default=None, description="Student question.")
    subject: Optional[str] = Field(default=None, description="Subject the question belongs to.")


class ChatReply(BaseModel):
    success: bool = Field(default=True)
    response: str = Field(..., description="Assistant answer text.")


class ErrorReply(BaseModel):
    success: bool = Field(default=False)
    error: str = Field(..., description="User-facing error message.")


class SubjectListReply(BaseModel):
    success: bool = Field(default=True)
    data: list[str] = Field(..., description="Subjects the assistant accepts.")
