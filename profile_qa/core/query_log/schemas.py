from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

QueryLogStatus = Literal["success", "error"]


class QueryLogRecord(BaseModel):
    """One row of the query log table."""

    query: str
    ai_response: str
    source: str
    status: QueryLogStatus
