from enum import Enum
from typing import TypedDict

from pydantic import BaseModel, ConfigDict, Field, SecretStr


class Provider(str, Enum):
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GROQ = "groq"
    GEMINI = "gemini"
    BEDROCK = "bedrock"


class CaptionSnippet(TypedDict):
    text: str
    start: float
    duration: float


class VideoTranscript(TypedDict):
    video_id: str
    language: str
    language_code: str
    is_generated: bool
    snippets: list[CaptionSnippet]


class ModelSpec(BaseModel):
    """A selectable model: where it runs and how much text it gets per call."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    provider: Provider
    model_id: str = Field(
        description="Identifier sent to the provider with every request."
    )
    max_words_per_chunk: int = Field(gt=0)


class Settings(BaseModel):
    """Credentials for every provider, resolved once at startup."""

    openai_api_key: SecretStr | None = None
    anthropic_api_key: SecretStr | None = None
    groq_api_key: SecretStr | None = None
    gemini_api_key: SecretStr | None = None
    aws_region: str | None = None
    aws_access_key_id: SecretStr | None = None
    aws_secret_access_key: SecretStr | None = None
    aws_session_token: SecretStr | None = None
