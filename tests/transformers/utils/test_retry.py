from unittest.mock import MagicMock

import pytest

from ytt.transformers.utils import retry as retry_utils


class RateLimited(Exception):
    pass


class Unauthorized(Exception):
    pass


@pytest.fixture
def client():
    """A client that treats only RateLimited as retryable."""
    mock_client = MagicMock()
    mock_client.is_retryable.side_effect = lambda e: isinstance(
        e, RateLimited
    )
    return mock_client


@pytest.fixture
def mock_sleep():
    return MagicMock()


def test_invoke_with_backoff_first_try(client, mock_sleep):
    client.invoke.return_value = "<transcript>ok</transcript>"

    result = retry_utils.invoke_with_backoff(
        client, "prompt", sleep=mock_sleep
    )

    assert result == "<transcript>ok</transcript>"
    client.invoke.assert_called_once_with("prompt")
    mock_sleep.assert_not_called()


def test_invoke_with_backoff_retries_rate_limits(client, mock_sleep, mocker):
    """Two retryable failures are waited out, then the reply comes back."""
    mock_logger = mocker.patch("ytt.transformers.utils.retry.logger")
    client.invoke.side_effect = [
        RateLimited("429 Too Many Requests"),
        RateLimited("429 Too Many Requests"),
        "reply",
    ]

    result = retry_utils.invoke_with_backoff(
        client, "prompt", sleep=mock_sleep
    )

    assert result == "reply"
    assert client.invoke.call_count == 3
    assert mock_sleep.call_count == 2
    # Delays grow but stay within the configured ceiling
    first_delay = mock_sleep.call_args_list[0].args[0]
    second_delay = mock_sleep.call_args_list[1].args[0]
    assert 0 < first_delay <= retry_utils.BACKOFF_MAX_SECONDS
    assert 0 < second_delay <= retry_utils.BACKOFF_MAX_SECONDS
    assert mock_logger.warning.call_count == 4


def test_invoke_with_backoff_permanent_error_does_not_sleep(
    client, mock_sleep
):
    client.invoke.side_effect = Unauthorized("invalid api key")

    with pytest.raises(Unauthorized, match="invalid api key"):
        retry_utils.invoke_with_backoff(client, "prompt", sleep=mock_sleep)

    client.invoke.assert_called_once()
    mock_sleep.assert_not_called()


def test_invoke_with_backoff_permanent_error_after_retry(client, mock_sleep):
    """A permanent error ends the loop even after earlier retries."""
    client.invoke.side_effect = [
        RateLimited("slow down"),
        Unauthorized("revoked"),
        "never reached",
    ]

    with pytest.raises(Unauthorized):
        retry_utils.invoke_with_backoff(client, "prompt", sleep=mock_sleep)

    assert client.invoke.call_count == 2
    assert mock_sleep.call_count == 1


def test_invoke_with_backoff_gives_up_after_max_elapsed(client, mock_sleep):
    """Once the time budget is spent the last retryable error surfaces."""
    client.invoke.side_effect = RateLimited("still limited")

    with pytest.raises(RateLimited, match="still limited"):
        retry_utils.invoke_with_backoff(
            client, "prompt", max_elapsed_seconds=0, sleep=mock_sleep
        )

    client.invoke.assert_called_once()
    mock_sleep.assert_not_called()


def test_invoke_with_backoff_skips_wait_past_budget(client, mock_sleep):
    """A wait that would overrun the time budget is never started."""
    client.invoke.side_effect = [RateLimited("slow down"), "never reached"]

    with pytest.raises(RateLimited, match="slow down"):
        retry_utils.invoke_with_backoff(
            client,
            "prompt",
            max_elapsed_seconds=retry_utils.BACKOFF_INITIAL_SECONDS,
            sleep=mock_sleep,
        )

    client.invoke.assert_called_once()
    mock_sleep.assert_not_called()


def test_invoke_with_backoff_defaults_to_time_sleep(client, mocker):
    mock_time_sleep = mocker.patch("ytt.transformers.utils.retry._sleep")
    client.invoke.side_effect = [RateLimited("slow down"), "reply"]

    assert retry_utils.invoke_with_backoff(client, "prompt") == "reply"

    mock_time_sleep.assert_called_once()
