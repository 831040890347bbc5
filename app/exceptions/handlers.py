import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import QueryTooLongError

logger = logging.getLogger(__name__)


async def query_too_long_error_handler(_request: Request, exc: QueryTooLongError) -> JSONResponse:
    logger.warning("Rejected query of %d characters (limit=%d)", exc.length, exc.limit)
    return JSONResponse(
        status_code=413,
        content={"detail": f"Query too long: {exc.length} characters (max {exc.limit})"},
    )
