"""Gemini integration layer.

Kept small on purpose:
- No prompt/answer logging (profiles may contain personal data).
- One attempt per call; no retries.
- Callers treat it as a stateless function.
"""
