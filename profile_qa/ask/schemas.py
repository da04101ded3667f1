from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AskIn(BaseModel):
    """
    Inbound question payload.

    Fields are optional at the schema level so that presence checks produce the
    route's own 400 payload instead of a framework 422. Text fields never fail
    validation: other JSON values are rendered as text, falsy ones count as absent.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    question: str | None = None
    profile: Any = None
    system_prompt: str | None = Field(default=None, alias="systemPrompt")

    @field_validator("question", "system_prompt", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        if not value:
            return None
        if isinstance(value, (bool, int, float)):
            return str(value)
        return json.dumps(value, ensure_ascii=False)

    @property
    def is_complete(self) -> bool:
        return bool(self.question) and bool(self.profile)


class AskOut(BaseModel):
    answer: str = Field(description="Generated answer, or a fixed placeholder when none was produced.")


class ErrorOut(BaseModel):
    error: str = Field(examples=["Missing question or profile"])
    details: str | None = Field(
        default=None,
        description="Raw upstream response body; only present for upstream errors.",
    )
