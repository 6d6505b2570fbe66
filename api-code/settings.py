from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field


class GeminiConfig(BaseModel):
    """Everything the chat relay needs to reach the Generative Language API."""

    api_key: Optional[str] = None
    model_name: str = "gemini-2.5-flash"
    max_output_tokens: int = 2000
    temperature: float = 0.7
    top_p: float = 1.0

    @property
    def is_configured(self) -> bool:
        return bool((self.api_key or "").strip())


class Settings(BaseModel):
    """Runtime configuration resolved from environment variables."""

    gemini_api_key: Optional[str] = Field(
        default=None, alias="GEMINI_API_KEY", description="Google Gemini API key"
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash",
        alias="GEMINI_MODEL",
        description="Generative model used by the study assistant.",
    )
    gemini_max_output_tokens: int = Field(
        default=2000,
        alias="GEMINI_MAX_OUTPUT_TOKENS",
        description="Upper bound on tokens generated per answer.",
    )
    gemini_temperature: float = Field(
        default=0.7,
        alias="GEMINI_TEMPERATURE",
        description="Sampling temperature for study answers.",
    )
    gemini_top_p: float = Field(
        default=1.0,
        alias="GEMINI_TOP_P",
        description="Nucleus sampling threshold for study answers.",
    )
    mongodb_uri: str = Field(
        default="mongodb://127.0.0.1:27017",
        alias="MONGODB_URI",
        description="MongoDB connection string",
    )
    mongodb_db_name: str = Field(
        default="campus_lms",
        alias="MONGODB_DB_NAME",
        description="MongoDB database name",
    )
    cors_origins: str = Field(
        default="*",
        alias="CORS_ORIGINS",
        description="Comma-separated list of origins allowed to call the API.",
    )
    seed_demo_data: bool = Field(
        default=False,
        alias="SEED_DEMO_DATA",
        description="Populate the in-memory fallback repository with sample students.",
    )
    password_hash_iterations: int = Field(
        default=260_000,
        alias="PASSWORD_HASH_ITERATIONS",
        description="PBKDF2 iteration count used when an admin resets a password.",
    )

    model_config = {"populate_by_name": True}

    @classmethod
    def from_env(cls) -> "Settings":
        return cls.model_validate(dict(os.environ))

    @property
    def allowed_origins(self) -> list[str]:
        origins = [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
        return origins or ["*"]

    def gemini_config(self) -> GeminiConfig:
        return GeminiConfig(
            api_key=(self.gemini_api_key or "").strip() or None,
            model_name=self.gemini_model,
            max_output_tokens=self.gemini_max_output_tokens,
            temperature=self.gemini_temperature,
            top_p=self.gemini_top_p,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance built from environment variables."""
    return Settings.from_env()
