from __future__ import annotations

from fastapi import Depends

from profile_qa.core.query_log.supabase_logger import SupabaseConfig, SupabaseQueryLogger
from profile_qa.core.settings import Settings, get_settings


def get_query_logger(settings: Settings = Depends(get_settings)) -> SupabaseQueryLogger | None:
    """Dependency provider for the query logger; None when the store is not configured."""

    if not settings.query_log_enabled:
        return None

    config = SupabaseConfig(
        url=str(settings.supabase_url),
        key=str(settings.supabase_key),
        table=settings.query_log_table,
        source=settings.query_log_source,
        timeout_seconds=float(settings.query_log_timeout_seconds),
    )
    return SupabaseQueryLogger(config=config)
