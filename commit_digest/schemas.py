from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from commit_digest.config import (
    COMMIT_MESSAGE_PROMPT,
    DEFAULT_CONTEXT_LENGTH,
    DEFAULT_OLLAMA_MODEL,
    DEFAULT_OLLAMA_URL,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_TEMPERATURE,
    SUMMARY_PROMPT,
    SYSTEM_PROMPT,
)
from commit_digest.prompts import PromptTemplate


class CommitDigestConfig(BaseModel):
    """Settings for one run, built once at startup and passed down explicitly."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ollama_url: str = DEFAULT_OLLAMA_URL
    ollama_model: str = DEFAULT_OLLAMA_MODEL
    context_length: int = Field(default=DEFAULT_CONTEXT_LENGTH, gt=0)
    temperature: float = Field(default=DEFAULT_TEMPERATURE, ge=0.0, le=1.0)
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0.0)
    system_prompt: str = SYSTEM_PROMPT
    summary_prompt: str = SUMMARY_PROMPT
    commit_message_prompt: str = COMMIT_MESSAGE_PROMPT

    @field_validator("ollama_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("ollama_url must not be empty")
        return value.strip().rstrip("/")

    @field_validator("summary_prompt", "commit_message_prompt")
    @classmethod
    def require_single_slot(cls, value: str) -> str:
        return PromptTemplate.validate(value)


class GenerateRequest(BaseModel):
    model: str
    prompt: str
    temperature: float
    system: str
    stream: Literal[False] = False
    num_ctx: int

    @classmethod
    def from_config(cls, prompt: str, config: CommitDigestConfig) -> "GenerateRequest":
        return cls(
            model=config.ollama_model,
            prompt=prompt,
            temperature=config.temperature,
            system=config.system_prompt,
            num_ctx=config.context_length,
        )


class GenerateResponse(BaseModel):
    """The part of Ollama's generate reply we rely on; other fields are ignored."""

    response: Optional[str] = None
