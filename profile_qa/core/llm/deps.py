from __future__ import annotations

from fastapi import Depends

from profile_qa.core.llm.gemini_client import GeminiClient, GeminiConfig
from profile_qa.core.settings import Settings, get_settings


def get_gemini_client(settings: Settings = Depends(get_settings)) -> GeminiClient | None:
    """
    Dependency provider for GeminiClient.

    Returns None when no API key is configured so the route can answer with its
    own 500 payload instead of failing during dependency resolution.
    """

    api_key = settings.generation_api_key
    if not api_key:
        return None

    config = GeminiConfig(
        api_key=api_key,
        base_url=settings.gemini_base_url,
        model=settings.gemini_model,
        timeout_seconds=float(settings.gemini_timeout_seconds),
    )
    return GeminiClient(config=config)
