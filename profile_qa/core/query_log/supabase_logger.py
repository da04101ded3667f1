from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from profile_qa.core.metrics import query_log_writes_total
from profile_qa.core.query_log.schemas import QueryLogRecord, QueryLogStatus

logger = logging.getLogger("profile_qa.query_log")


class QueryLogger(Protocol):
    async def record(
        self,
        *,
        query: str,
        ai_response: str,
        status: QueryLogStatus,
        request_id: str | None = None,
    ) -> None: ...


@dataclass(frozen=True)
class SupabaseConfig:
    url: str
    key: str
    table: str
    source: str
    timeout_seconds: float


class SupabaseQueryLogger:
    """
    Insert query log rows through the Supabase PostgREST API.

    `record()` is the only entry point and it never raises: every failure is
    written to the server log and counted, then discarded.
    """

    def __init__(self, *, config: SupabaseConfig, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._transport = transport

    @property
    def insert_url(self) -> str:
        return f"{self._config.url.rstrip('/')}/rest/v1/{self._config.table}"

    def _headers(self) -> dict[str, str]:
        return {
            "apikey": self._config.key,
            "Authorization": f"Bearer {self._config.key}",
            "Content-Type": "application/json",
            "Prefer": "return=minimal",
        }

    async def record(
        self,
        *,
        query: str,
        ai_response: str,
        status: QueryLogStatus,
        request_id: str | None = None,
    ) -> None:
        try:
            entry = QueryLogRecord(
                query=query,
                ai_response=ai_response,
                source=self._config.source,
                status=status,
            )
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds, transport=self._transport
            ) as client:
                resp = await client.post(
                    self.insert_url, headers=self._headers(), json=entry.model_dump()
                )
            resp.raise_for_status()
        except Exception:  # noqa: BLE001 - query logging must never affect the response
            query_log_writes_total.labels(outcome="failed").inc()
            logger.warning(
                "Query log write failed",
                exc_info=True,
                extra={"request_id": request_id, "outcome": "query_log_failed"},
            )
            return

        query_log_writes_total.labels(outcome="written").inc()
