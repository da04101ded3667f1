"""GeminiClient against an in-process httpx transport (no network)."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from profile_qa.core.llm.deps import get_gemini_client
from profile_qa.core.llm.gemini_client import (
    GeminiClient,
    GeminiConfig,
    GeminiResponseError,
    GeminiTransportError,
    GeminiUpstreamError,
    extract_answer_text,
)
from profile_qa.core.settings import Settings


def _client(handler) -> GeminiClient:
    config = GeminiConfig(
        api_key="secret-key",
        base_url="https://generativelanguage.googleapis.com/v1beta/",
        model="gemini-1.5-flash",
        timeout_seconds=5.0,
    )
    return GeminiClient(config=config, transport=httpx.MockTransport(handler))


def _answer_body(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def test_generate_text_sends_single_user_message_with_fixed_config() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_answer_body("Hello"))

    result = asyncio.run(_client(handler).generate_text(prompt="the prompt"))

    assert result == "Hello"
    assert len(seen) == 1
    request = seen[0]
    assert request.method == "POST"
    assert request.url.path == "/v1beta/models/gemini-1.5-flash:generateContent"
    assert request.url.params["key"] == "secret-key"
    assert request.headers["content-type"] == "application/json"
    assert json.loads(request.content) == {
        "contents": [{"role": "user", "parts": [{"text": "the prompt"}]}],
        "generationConfig": {"temperature": 0.3, "topP": 0.9, "topK": 40, "maxOutputTokens": 512},
    }


def test_non_success_status_raises_upstream_error_with_raw_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, text="rate limited")

    with pytest.raises(GeminiUpstreamError) as exc_info:
        asyncio.run(_client(handler).generate_text(prompt="p"))

    assert exc_info.value.status_code == 429
    assert exc_info.value.details == "rate limited"


def test_transport_failure_raises_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(GeminiTransportError):
        asyncio.run(_client(handler).generate_text(prompt="p"))


def test_invalid_json_raises_response_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>not json</html>")

    with pytest.raises(GeminiResponseError):
        asyncio.run(_client(handler).generate_text(prompt="p"))


def test_missing_answer_path_returns_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"candidates": []})

    assert asyncio.run(_client(handler).generate_text(prompt="p")) is None


@pytest.mark.parametrize(
    "data",
    [
        {},
        None,
        [],
        {"candidates": None},
        {"candidates": [{}]},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
        {"candidates": [{"content": {"parts": [{"text": 42}]}}]},
    ],
)
def test_extract_answer_text_absent_or_empty(data) -> None:
    assert extract_answer_text(data) is None


def test_dependency_returns_none_without_key() -> None:
    assert get_gemini_client(settings=Settings(_env_file=None)) is None


def test_dependency_builds_client_from_settings() -> None:
    settings = Settings(_env_file=None, google_api_key="g-key", gemini_model="gemini-test")

    client = get_gemini_client(settings=settings)

    assert isinstance(client, GeminiClient)
    assert client.generate_url == (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-test:generateContent"
    )
