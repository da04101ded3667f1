from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

GENERATION_CONFIG: dict[str, Any] = {
    "temperature": 0.3,
    "topP": 0.9,
    "topK": 40,
    "maxOutputTokens": 512,
}


class GeminiError(Exception):
    """Base error for Gemini client failures."""


class GeminiUpstreamError(GeminiError):
    """Raised when Gemini answers with a non-2xx status.

    `details` is the raw response body, passed through to callers as a diagnostic.
    """

    def __init__(self, *, status_code: int, details: str):
        super().__init__(f"Gemini returned HTTP {status_code}")
        self.status_code = status_code
        self.details = details


class GeminiTransportError(GeminiError):
    """Raised when the request could not be completed (DNS, connect, timeout...)."""


class GeminiResponseError(GeminiError):
    """Raised when a 2xx response body is not valid JSON."""


@dataclass(frozen=True)
class GeminiConfig:
    api_key: str
    base_url: str
    model: str
    timeout_seconds: float


def extract_answer_text(data: Any) -> str | None:
    """Return `candidates[0].content.parts[0].text`, or None when absent or empty."""

    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text:
        return None
    return text


class GeminiClient:
    """
    Minimal client for the Gemini `generateContent` endpoint.

    Design notes:
    - No logging in this module (prompts and answers may contain personal data).
    - Fixed generation parameters and a single user message per request.
    - The API key travels as the `key` query parameter, as the API expects.
    """

    def __init__(self, *, config: GeminiConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._transport = transport

    @property
    def generate_url(self) -> str:
        return f"{self._config.base_url.rstrip('/')}/models/{self._config.model}:generateContent"

    async def generate_text(self, *, prompt: str) -> str | None:
        payload: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": dict(GENERATION_CONFIG),
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(
                    self.generate_url,
                    params={"key": self._config.api_key},
                    headers={"Content-Type": "application/json"},
                    json=payload,
                )
        except httpx.HTTPError as exc:
            raise GeminiTransportError("Gemini request failed") from exc

        if not resp.is_success:
            raise GeminiUpstreamError(status_code=resp.status_code, details=resp.text)

        try:
            data = resp.json()
        except ValueError as exc:
            raise GeminiResponseError("Gemini response was not valid JSON") from exc

        return extract_answer_text(data)
