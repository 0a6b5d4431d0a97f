import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterator

import anthropic
import openai
from botocore.config import Config
from botocore.exceptions import ClientError
from langchain_anthropic import ChatAnthropic
from langchain_aws import ChatBedrockConverse
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langchain_openai import ChatOpenAI
from pydantic import SecretStr

from ytt.core.config import GEMINI_BASE_URL, GROQ_BASE_URL, MAX_TOKENS
from ytt.core.exceptions import ConfigurationError, EmptyResponseError
from ytt.core.types import ModelSpec, Provider, Settings
from ytt.transformers.utils.helpers import message_text

logger = logging.getLogger(__name__)

ANTHROPIC_OVERLOADED_STATUS = 529
BEDROCK_RETRYABLE_CODES = {
    "ThrottlingException",
    "ServiceUnavailableException",
    "ModelNotReadyException",
}


def _error_chain(error: BaseException) -> Iterator[BaseException]:
    """Yields an error followed by its causes, so wrapped SDK errors count."""
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


class LLMClient(ABC):
    """
    One LLM backend behind a single-call contract.

    `invoke` makes exactly one request and never retries; callers decide
    what to retry by asking `is_retryable` about the error it raised.
    """

    provider: Provider

    def __init__(self, llm: BaseChatModel, model_id: str) -> None:
        self.llm = llm
        self.model_id = model_id

    def invoke(self, prompt: str) -> str:
        try:
            response = self.llm.invoke([HumanMessage(content=prompt)])
        except IndexError as e:
            # Chat completion with zero choices
            raise EmptyResponseError(
                f"no choices returned from {self.provider.value}"
                f" model {self.model_id}"
            ) from e

        usage = getattr(response, "usage_metadata", None)
        if usage:
            logger.debug(f"Usage ({self.model_id}): {usage}")

        text = message_text(response.content)
        if not text:
            raise EmptyResponseError(
                f"no content returned from {self.provider.value}"
                f" model {self.model_id}"
            )
        return text

    @abstractmethod
    def is_retryable(self, error: BaseException) -> bool:
        """True for rate-limit or overload errors worth waiting out."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model_id={self.model_id!r})"


class ChatCompletionClient(LLMClient):
    """OpenAI-compatible chat completions (OpenAI, Groq, Gemini)."""

    def __init__(
        self, llm: BaseChatModel, model_id: str, provider: Provider
    ) -> None:
        super().__init__(llm, model_id)
        self.provider = provider

    def is_retryable(self, error: BaseException) -> bool:
        return any(
            isinstance(e, openai.APIStatusError) and e.status_code == 429
            for e in _error_chain(error)
        )


class AnthropicMessagesClient(LLMClient):
    provider = Provider.ANTHROPIC

    def is_retryable(self, error: BaseException) -> bool:
        for e in _error_chain(error):
            if isinstance(e, anthropic.RateLimitError):
                return True
            if (
                isinstance(e, anthropic.APIStatusError)
                and e.status_code == ANTHROPIC_OVERLOADED_STATUS
            ):
                return True
        return False


class BedrockMessagesClient(LLMClient):
    provider = Provider.BEDROCK

    def is_retryable(self, error: BaseException) -> bool:
        return any(
            isinstance(e, ClientError)
            and e.response.get("Error", {}).get("Code")
            in BEDROCK_RETRYABLE_CODES
            for e in _error_chain(error)
        )


def _require(value: SecretStr | None, what: str, spec_name: str) -> SecretStr:
    if value is None or not value.get_secret_value():
        raise ConfigurationError(f"{what} required for model {spec_name}")
    return value


def _build_openai(spec: ModelSpec, settings: Settings) -> LLMClient:
    api_key = _require(
        settings.openai_api_key,
        "OpenAI API key (OPENAI_API_KEY or --openai-api-key)",
        spec.model_id,
    )
    llm = ChatOpenAI(model=spec.model_id, api_key=api_key, max_retries=0)
    return ChatCompletionClient(llm, spec.model_id, Provider.OPENAI)


def _build_groq(spec: ModelSpec, settings: Settings) -> LLMClient:
    api_key = _require(
        settings.groq_api_key,
        "Groq API key (GROQ_API_KEY or --groq-api-key)",
        spec.model_id,
    )
    llm = ChatOpenAI(
        model=spec.model_id,
        api_key=api_key,
        base_url=GROQ_BASE_URL,
        max_retries=0,
    )
    return ChatCompletionClient(llm, spec.model_id, Provider.GROQ)


def _build_gemini(spec: ModelSpec, settings: Settings) -> LLMClient:
    api_key = _require(
        settings.gemini_api_key,
        "Gemini API key (GEMINI_API_KEY or --gemini-api-key)",
        spec.model_id,
    )
    llm = ChatOpenAI(
        model=spec.model_id,
        api_key=api_key,
        base_url=GEMINI_BASE_URL,
        max_retries=0,
    )
    return ChatCompletionClient(llm, spec.model_id, Provider.GEMINI)


def _build_anthropic(spec: ModelSpec, settings: Settings) -> LLMClient:
    api_key = _require(
        settings.anthropic_api_key,
        "Anthropic API key (ANTHROPIC_API_KEY or --anthropic-api-key)",
        spec.model_id,
    )
    llm = ChatAnthropic(
        model=spec.model_id,
        api_key=api_key,
        max_tokens=MAX_TOKENS,
        max_retries=0,
    )
    return AnthropicMessagesClient(llm, spec.model_id)


def _build_bedrock(spec: ModelSpec, settings: Settings) -> LLMClient:
    if not settings.aws_region:
        raise ConfigurationError(
            f"AWS region (AWS_REGION or --aws-region) required for model"
            f" {spec.model_id}"
        )
    access_key_id = _require(
        settings.aws_access_key_id,
        "AWS access key ID (AWS_ACCESS_KEY_ID or --aws-access-key-id)",
        spec.model_id,
    )
    secret_access_key = _require(
        settings.aws_secret_access_key,
        "AWS secret access key"
        " (AWS_SECRET_ACCESS_KEY or --aws-secret-access-key)",
        spec.model_id,
    )
    llm = ChatBedrockConverse(
        model=spec.model_id,
        region_name=settings.aws_region,
        aws_access_key_id=access_key_id,
        aws_secret_access_key=secret_access_key,
        aws_session_token=settings.aws_session_token,
        max_tokens=MAX_TOKENS,
        config=Config(retries={"max_attempts": 1, "mode": "standard"}),
    )
    return BedrockMessagesClient(llm, spec.model_id)


_BUILDERS: dict[Provider, Callable[[ModelSpec, Settings], LLMClient]] = {
    Provider.OPENAI: _build_openai,
    Provider.GROQ: _build_groq,
    Provider.GEMINI: _build_gemini,
    Provider.ANTHROPIC: _build_anthropic,
    Provider.BEDROCK: _build_bedrock,
}


def get_llm_client(spec: ModelSpec, settings: Settings) -> LLMClient:
    """Builds the client for a model, failing early on missing credentials."""
    return _BUILDERS[spec.provider](spec, settings)
