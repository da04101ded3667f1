from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from fastapi.responses import JSONResponse

from profile_qa.ask.schemas import AskIn, AskOut, ErrorOut
from profile_qa.ask.service import AskService
from profile_qa.core.llm.deps import get_gemini_client
from profile_qa.core.llm.gemini_client import GeminiClient, GeminiUpstreamError
from profile_qa.core.metrics import ask_generation_total
from profile_qa.core.query_log.deps import get_query_logger
from profile_qa.core.query_log.schemas import QueryLogStatus
from profile_qa.core.query_log.supabase_logger import QueryLogger

router = APIRouter(prefix="/api", tags=["ask"])
logger = logging.getLogger("profile_qa.ask")

# Methods not listed here are rejected by the framework; the exception handler
# gives that 405 the same body.
_ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _error_response(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorOut(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def _read_ask_payload(request: Request) -> AskIn:
    """Parse the JSON body; an unparseable or non-object body counts as empty."""

    try:
        body = await request.json()
    except ValueError:
        return AskIn()
    if not isinstance(body, dict):
        return AskIn()
    return AskIn.model_validate(body)


def _set_outcome(request: Request, outcome: str) -> None:
    # Read by HttpLoggingMiddleware for the access log line.
    request.state.ask_outcome = outcome


def _schedule_query_log(
    background_tasks: BackgroundTasks,
    query_logger: QueryLogger | None,
    *,
    request_id: str | None,
    query: str,
    ai_response: str,
    status: QueryLogStatus,
) -> None:
    if query_logger is None:
        return
    background_tasks.add_task(
        query_logger.record,
        query=query,
        ai_response=ai_response,
        status=status,
        request_id=request_id,
    )


@router.api_route(
    "/ask",
    methods=_ALL_METHODS,
    response_model=AskOut,
    summary="Answer a question about a profile",
    description=(
        "Forwards the question and the JSON profile to the generative-language service "
        "and returns the generated answer. Only `POST` is accepted.\n\n"
        "When a query log store is configured, the query and the answer (or upstream "
        "error) are recorded after the response is produced. Logging failures never "
        "change the response."
    ),
    responses={
        400: {"model": ErrorOut, "description": "Missing question or profile"},
        405: {"model": ErrorOut, "description": "Method not allowed"},
        500: {"model": ErrorOut, "description": "Missing API key or unexpected server error"},
        502: {"model": ErrorOut, "description": "Generative-language service error"},
    },
)
async def ask(
    request: Request,
    background_tasks: BackgroundTasks,
    gemini_client: GeminiClient | None = Depends(get_gemini_client),
    query_logger: QueryLogger | None = Depends(get_query_logger),
) -> AskOut | JSONResponse:
    if request.method != "POST":
        _set_outcome(request, "method_not_allowed")
        return _error_response(status.HTTP_405_METHOD_NOT_ALLOWED, "Method not allowed")

    request_id = getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID")

    if gemini_client is None:
        _set_outcome(request, "not_configured")
        logger.error(
            "Answer generation unavailable (API key not configured)",
            extra={"request_id": request_id, "outcome": "not_configured"},
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Missing GEMINI_API_KEY")

    payload = await _read_ask_payload(request)
    if not payload.is_complete:
        _set_outcome(request, "invalid_input")
        return _error_response(status.HTTP_400_BAD_REQUEST, "Missing question or profile")

    question = str(payload.question)
    svc = AskService(llm_client=gemini_client)
    try:
        answer = await svc.answer(ask=payload)
    except GeminiUpstreamError as exc:
        _set_outcome(request, "upstream_error")
        ask_generation_total.labels(outcome="upstream_error").inc()
        logger.warning(
            "Answer generation failed upstream",
            extra={
                "request_id": request_id,
                "outcome": "upstream_error",
                "upstream_status": exc.status_code,
            },
        )
        _schedule_query_log(
            background_tasks,
            query_logger,
            request_id=request_id,
            query=question,
            ai_response=exc.details,
            status="error",
        )
        return _error_response(status.HTTP_502_BAD_GATEWAY, "Upstream error", details=exc.details)
    except Exception as exc:  # noqa: BLE001 - any failure maps to a generic 500 without details
        _set_outcome(request, "server_error")
        ask_generation_total.labels(outcome="server_error").inc()
        logger.exception(
            "Answer generation failed",
            extra={"request_id": request_id, "outcome": "server_error"},
        )
        _schedule_query_log(
            background_tasks,
            query_logger,
            request_id=request_id,
            query=question,
            ai_response=f"{type(exc).__name__}: {exc}",
            status="error",
        )
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")

    _set_outcome(request, "success")
    ask_generation_total.labels(outcome="success").inc()
    logger.info(
        "Answer generated",
        extra={"request_id": request_id, "outcome": "success"},
    )
    _schedule_query_log(
        background_tasks,
        query_logger,
        request_id=request_id,
        query=question,
        ai_response=answer,
        status="success",
    )
    return AskOut(answer=answer)
