"""Best-effort audit logging of query/answer pairs to a remote store.

Writes are fire-and-forget: `QueryLogger.record()` returns nothing and never raises,
so the outcome of a write can never change an HTTP response.
"""
