from __future__ import annotations

import json
from typing import Any


def build_ask_prompt(*, question: str, profile: Any, system_prompt: str | None = None) -> str:
    """
    Create the single user message sent to the model.

    Layout: optional caller instructions, the profile as labeled pretty-printed JSON,
    the labeled question, then an "Answer:" cue.
    """

    sections: list[str] = []
    if system_prompt:
        sections.append(system_prompt)
    sections.append("PROFILE JSON:\n" + json.dumps(profile, indent=2, ensure_ascii=False))
    sections.append(f"USER QUESTION: {question}")
    sections.append("Answer:")
    return "\n\n".join(sections)
