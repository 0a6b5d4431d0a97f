import logging
from time import sleep as _sleep
from typing import Callable

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_before_delay,
    wait_exponential_jitter,
)

from ytt.core.config import (
    BACKOFF_INITIAL_SECONDS,
    BACKOFF_JITTER_SECONDS,
    BACKOFF_MAX_SECONDS,
    BACKOFF_MULTIPLIER,
    MAX_ELAPSED_SECONDS,
)
from ytt.transformers.providers import LLMClient

logger = logging.getLogger(__name__)


def _log_retry(retry_state: RetryCallState) -> None:
    assert retry_state.outcome is not None
    delay = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.warning(f"{retry_state.outcome.exception()}")
    logger.warning(
        f"Retrying in {delay:.1f}s"
        f" (attempt {retry_state.attempt_number} failed)..."
    )


def invoke_with_backoff(
    client: LLMClient,
    prompt: str,
    max_elapsed_seconds: float = MAX_ELAPSED_SECONDS,
    sleep: Callable[[float], None] | None = None,
) -> str:
    """
    Calls `client.invoke(prompt)` with jittered exponential backoff.

    Only errors the client classifies as retryable are retried; anything
    else is raised straight away. A wait that would end past
    `max_elapsed_seconds` is never started; the last retryable error is
    raised instead.
    """
    retryer = Retrying(
        sleep=sleep or _sleep,
        retry=retry_if_exception(client.is_retryable),
        stop=stop_before_delay(max_elapsed_seconds),
        wait=wait_exponential_jitter(
            multiplier=BACKOFF_INITIAL_SECONDS,
            max=BACKOFF_MAX_SECONDS,
            exp_base=BACKOFF_MULTIPLIER,
            jitter=BACKOFF_JITTER_SECONDS,
        ),
        before_sleep=_log_retry,
        reraise=True,
    )
    return retryer(client.invoke, prompt)
