"""
Exception handlers mapping service failures to the API error envelope.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from career_guide.api.responses import error_body
from career_guide.services.ai_errors import AIError
from career_guide.services.history_service import HistoryNotFoundError

logger = logging.getLogger(__name__)


async def ai_error_handler(request: Request, exc: AIError) -> JSONResponse:
    # raw_text stays in the logs; clients only see the safe message
    logger.error(
        f"❌ {request.method} {request.url.path} failed: {exc.kind.value} - {exc.message}"
    )
    if exc.raw_text:
        logger.debug(f"   Raw AI output: {exc.raw_text[:500]}")

    return JSONResponse(
        status_code=exc.kind.http_status,
        content=error_body(exc.message, exc.kind.code),
    )


async def history_not_found_handler(request: Request, exc: HistoryNotFoundError) -> JSONResponse:
    logger.info(f"🔍 History not found: {exc}")
    return JSONResponse(status_code=404, content=error_body("History not found", "NOT_FOUND"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AIError, ai_error_handler)
    app.add_exception_handler(HistoryNotFoundError, history_not_found_handler)
