from __future__ import annotations

from profile_qa.ask.prompt import build_ask_prompt


def test_prompt_layout_with_system_prompt() -> None:
    prompt = build_ask_prompt(
        question="What is her role?",
        profile={"name": "Ada", "skills": ["math", "poetry"]},
        system_prompt="You are a concise assistant.",
    )

    assert prompt == (
        "You are a concise assistant.\n\n"
        "PROFILE JSON:\n"
        "{\n"
        '  "name": "Ada",\n'
        '  "skills": [\n'
        '    "math",\n'
        '    "poetry"\n'
        "  ]\n"
        "}\n\n"
        "USER QUESTION: What is her role?\n\n"
        "Answer:"
    )


def test_prompt_without_system_prompt_starts_with_profile() -> None:
    prompt = build_ask_prompt(question="Age?", profile={"age": 36})

    assert prompt == 'PROFILE JSON:\n{\n  "age": 36\n}\n\nUSER QUESTION: Age?\n\nAnswer:'


def test_prompt_keeps_non_ascii_profile_text() -> None:
    prompt = build_ask_prompt(question="Ville ?", profile={"city": "Montréal"})

    assert '"city": "Montréal"' in prompt
