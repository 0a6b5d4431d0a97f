from os import getenv

from dotenv import load_dotenv

from ytt.core.exceptions import ConfigurationError
from ytt.core.types import ModelSpec, Provider, Settings

load_dotenv()

# Captions
DEFAULT_LANGUAGE = "en"

# Output
TIMESTAMP_FORMAT = "%Y-%m-%d-%H%M%S"
RAW_FILENAME = "raw_transcript_{suffix}.txt"
CLEANED_FILENAME = "cleaned_transcript_{suffix}.txt"

# LLM calls
MAX_TOKENS = 8192  # Message-style APIs cut long transcripts short without it
MAX_ELAPSED_SECONDS = 10 * 60
BACKOFF_INITIAL_SECONDS = 0.5
BACKOFF_MULTIPLIER = 1.5
BACKOFF_MAX_SECONDS = 60
BACKOFF_JITTER_SECONDS = 0.5

# OpenAI-compatible chat completion endpoints
GROQ_BASE_URL = "https://api.groq.com/openai/v1"
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"

DEFAULT_MODEL = "gpt-4o"
MODELS = {
    "gpt-4o": ModelSpec(
        provider=Provider.OPENAI, model_id="gpt-4o", max_words_per_chunk=3000
    ),
    "gpt-4o-mini": ModelSpec(
        provider=Provider.OPENAI,
        model_id="gpt-4o-mini",
        max_words_per_chunk=3000,
    ),
    "claude-3-5-sonnet": ModelSpec(
        provider=Provider.ANTHROPIC,
        model_id="claude-3-5-sonnet-20241022",
        max_words_per_chunk=6000,
    ),
    "claude-3-5-haiku": ModelSpec(
        provider=Provider.ANTHROPIC,
        model_id="claude-3-5-haiku-20241022",
        max_words_per_chunk=6000,
    ),
    "llama-3.3-70b": ModelSpec(
        provider=Provider.GROQ,
        model_id="llama-3.3-70b-versatile",
        max_words_per_chunk=3000,
    ),
    "llama-3.1-8b": ModelSpec(
        provider=Provider.GROQ,
        model_id="llama-3.1-8b-instant",
        max_words_per_chunk=3000,
    ),
    "gemini-2.0-flash": ModelSpec(
        provider=Provider.GEMINI,
        model_id="gemini-2.0-flash",
        max_words_per_chunk=6000,
    ),
    "bedrock-claude-3-5-sonnet": ModelSpec(
        provider=Provider.BEDROCK,
        model_id="anthropic.claude-3-5-sonnet-20241022-v2:0",
        max_words_per_chunk=6000,
    ),
    "bedrock-claude-3-5-haiku": ModelSpec(
        provider=Provider.BEDROCK,
        model_id="anthropic.claude-3-5-haiku-20241022-v1:0",
        max_words_per_chunk=6000,
    ),
}
MODEL_ALIASES = {
    "chatgpt": "gpt-4o",
    "claude": "claude-3-5-sonnet",
}

# Settings field -> environment variable
ENV_VARS = {
    "openai_api_key": "OPENAI_API_KEY",
    "anthropic_api_key": "ANTHROPIC_API_KEY",
    "groq_api_key": "GROQ_API_KEY",
    "gemini_api_key": "GEMINI_API_KEY",
    "aws_region": "AWS_REGION",
    "aws_access_key_id": "AWS_ACCESS_KEY_ID",
    "aws_secret_access_key": "AWS_SECRET_ACCESS_KEY",
    "aws_session_token": "AWS_SESSION_TOKEN",
}


def resolve_model(name: str) -> ModelSpec:
    """Looks up a model by CLI name or legacy alias, ignoring case."""
    key = name.strip().lower()
    key = MODEL_ALIASES.get(key, key)
    try:
        return MODELS[key]
    except KeyError:
        choices = ", ".join(sorted(MODELS))
        raise ConfigurationError(
            f"unsupported model: {name} (choose from {choices})"
        ) from None


def load_settings(overrides: dict[str, str | None] | None = None) -> Settings:
    """Builds Settings from the environment; non-empty overrides win."""
    values: dict[str, str] = {}
    for field, env_var in ENV_VARS.items():
        value = getenv(env_var, default="")
        if overrides and overrides.get(field):
            value = overrides[field] or ""
        if value:
            values[field] = value
    return Settings(**values)
