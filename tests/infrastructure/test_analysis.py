"""Tests for the OpenAI chat-completion provider."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest

from asset_monitor.application.errors import (
    AnalysisError,
    AnalysisNotConfiguredError,
    InvalidApiKeyError,
    RateLimitedError,
)
from asset_monitor.infrastructure.analysis import OpenAIAnalysisProvider


REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _reply(content):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )


def _provider(client, api_key="sk-test"):
    return OpenAIAnalysisProvider(
        api_key=api_key,
        model="gpt-4",
        client=client,
        logger=MagicMock(),
    )


def _status_error(error_type, status):
    return error_type(
        "failed",
        response=httpx.Response(status, request=REQUEST),
        body=None,
    )


def test_complete_sends_system_and_user_messages():
    client = MagicMock()
    client.chat.completions.create.return_value = _reply("  Diversified.  ")

    text = _provider(client).complete("Analyze", system_prompt="Be brief")

    assert text == "Diversified."
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4"
    assert kwargs["messages"] == [
        {"role": "system", "content": "Be brief"},
        {"role": "user", "content": "Analyze"},
    ]
    assert kwargs["max_tokens"] == 1500
    assert kwargs["temperature"] == 0.7


def test_missing_key_is_not_configured():
    client = MagicMock()
    provider = _provider(client, api_key=None)

    assert not provider.is_configured
    with pytest.raises(AnalysisNotConfiguredError):
        provider.complete("Analyze")
    client.chat.completions.create.assert_not_called()


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (_status_error(openai.AuthenticationError, 401), InvalidApiKeyError),
        (_status_error(openai.RateLimitError, 429), RateLimitedError),
        (_status_error(openai.InternalServerError, 500), AnalysisError),
        (openai.APIConnectionError(request=REQUEST), AnalysisError),
    ],
)
def test_sdk_errors_are_mapped(error, expected):
    client = MagicMock()
    client.chat.completions.create.side_effect = error

    with pytest.raises(expected):
        _provider(client).complete("Analyze")


def test_empty_reply_is_an_error():
    client = MagicMock()
    client.chat.completions.create.return_value = _reply("")

    with pytest.raises(AnalysisError, match="Failed to parse AI response"):
        _provider(client).complete("Analyze")


def test_missing_choices_is_an_error():
    client = MagicMock()
    client.chat.completions.create.return_value = SimpleNamespace(choices=[])

    with pytest.raises(AnalysisError, match="Failed to parse AI response"):
        _provider(client).complete("Analyze")
