"""
Serverless entry point.

Vercel's Python runtime serves the ASGI `app` exported here for requests to /api/ask.
"""

from profile_qa.main import app

__all__ = ["app"]
