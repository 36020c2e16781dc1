"""Error taxonomy for the admin API and its HTTP rendering."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from chat_admin.infra.logging_config import get_logger

logger = get_logger("errors")


class AdminAPIError(Exception):
    """Base class for errors rendered by the admin API."""


class NotFoundError(AdminAPIError):
    """A lookup by identifier, handle or conversation id matched no rows."""

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f"{entity} not found")


class UpstreamError(AdminAPIError):
    """A database-layer failure, labelled with the operation that triggered it."""

    def __init__(self, context: str, message: str) -> None:
        self.context = context
        self.message = message
        super().__init__(f"[{context}] {message}")


@contextmanager
def upstream_errors(context: str) -> Iterator[None]:
    """Log database failures under ``context`` and re-raise them as UpstreamError."""
    try:
        yield
    except (SQLAlchemyError, OSError) as e:
        logger.error("[%s] %s", context, e)
        raise UpstreamError(context, str(e)) from e


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": str(exc)})


async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": exc.message,
            "context": exc.context,
        },
    )
