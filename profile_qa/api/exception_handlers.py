from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("profile_qa.http_errors")


def register_exception_handlers(app: FastAPI) -> None:
    """Render framework HTTP errors with the same `{"error": ...}` shape the API uses."""

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        # Do not log bodies or query strings.
        logger.info(
            "HTTP error response",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "http_method": request.method,
                "request_path": request.url.path,
                "status_code": exc.status_code,
            },
        )
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            # Methods the ask route does not list still get its exact 405 body.
            error = "Method not allowed"
        else:
            error = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": error},
            headers=getattr(exc, "headers", None),
        )
