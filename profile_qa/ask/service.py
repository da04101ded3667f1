from __future__ import annotations

from typing import Protocol

from profile_qa.ask.prompt import build_ask_prompt
from profile_qa.ask.schemas import AskIn

FALLBACK_ANSWER = "No answer available."


class AnswerGenerator(Protocol):
    async def generate_text(self, *, prompt: str) -> str | None: ...


class AskService:
    def __init__(self, *, llm_client: AnswerGenerator):
        self._llm = llm_client

    async def answer(self, *, ask: AskIn) -> str:
        """Make exactly one generation call; upstream errors propagate to the caller."""

        prompt = build_ask_prompt(
            question=str(ask.question),
            profile=ask.profile,
            system_prompt=ask.system_prompt,
        )
        text = await self._llm.generate_text(prompt=prompt)
        return text or FALLBACK_ANSWER
