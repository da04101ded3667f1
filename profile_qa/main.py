from __future__ import annotations

from fastapi import FastAPI

from profile_qa.api.exception_handlers import register_exception_handlers
from profile_qa.api.schemas import HealthOut
from profile_qa.ask.router import router as ask_router
from profile_qa.core.logging import setup_logging
from profile_qa.core.metrics import PrometheusMetricsMiddleware, metrics_router
from profile_qa.core.middleware.http_logging import HttpLoggingMiddleware

setup_logging()


def create_app() -> FastAPI:
    # Settings are resolved per request through dependencies, never at import time,
    # so the app can be built without any credentials present.
    app = FastAPI(
        title="Profile Q&A API",
        description=(
            "Answers questions about a caller-supplied JSON profile using a "
            "generative-language model.\n\n"
            "Design principles:\n"
            "- Stateless: one inbound request, one upstream generation call.\n"
            "- Query logging is optional and best-effort; it never changes a response.\n"
            "- Logs and metrics carry metadata only, never questions, profiles or answers."
        ),
        docs_url="/swagger",
        redoc_url="/docs",
        openapi_tags=[
            {
                "name": "health",
                "description": "Basic uptime check for load balancers and monitoring.",
            },
            {
                "name": "ask",
                "description": "Question answering grounded on a JSON profile.",
            },
            {
                "name": "monitoring",
                "description": "Prometheus-compatible metrics endpoint.",
            },
        ],
    )

    app.add_middleware(PrometheusMetricsMiddleware)
    app.add_middleware(HttpLoggingMiddleware)

    register_exception_handlers(app)

    @app.get(
        "/health",
        response_model=HealthOut,
        tags=["health"],
        summary="Health check",
        description=(
            "Lightweight endpoint to verify the API process is running.\n\n"
            "Does not call the generative-language service or the query log store."
        ),
    )
    async def health() -> HealthOut:
        return HealthOut(status="ok")

    app.include_router(metrics_router)
    app.include_router(ask_router)
    return app


app = create_app()
