from __future__ import annotations

import pytest

_SETTINGS_ENV_VARS = (
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_BASE_URL",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_ROLE_KEY",
    "SUPABASE_KEY",
    "QUERY_LOG_TABLE",
    "QUERY_LOG_SOURCE",
)


@pytest.fixture(autouse=True)
def _isolate_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    # Tests inject Settings explicitly; keep the host environment out of them.
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    from profile_qa.core.settings import get_settings

    get_settings.cache_clear()


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from profile_qa.main import create_app

    app = create_app()
    with TestClient(app) as c:
        yield c
