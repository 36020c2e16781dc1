from typing import Callable, Optional

from fastapi import Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from chat_admin.constants import MAX_DAYS
from chat_admin.query import PageRequest
from chat_admin.query.pagination import coerce_int
from chat_admin.schemas.message import MessageFilters


def page_params(default_limit: int) -> Callable[..., PageRequest]:
    """Build a dependency reading ``page``/``limit``; bad values fall back to defaults."""

    def dependency(
        page: Optional[str] = Query(None),
        limit: Optional[str] = Query(None),
    ) -> PageRequest:
        return PageRequest.from_query(page, limit, default_limit=default_limit)

    return dependency


def limit_param(default: int) -> Callable[..., int]:
    def dependency(limit: Optional[str] = Query(None)) -> int:
        return max(coerce_int(limit, default), 1)

    return dependency


def days_param(default: int) -> Callable[..., int]:
    def dependency(days: Optional[str] = Query(None)) -> int:
        value = coerce_int(days, default, maximum=MAX_DAYS)
        return value if value > 0 else default

    return dependency


def get_message_filters(
    conversation_id: Optional[str] = Query(None),
    user_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    date_from: Optional[str] = Query(None),
    date_to: Optional[str] = Query(None),
) -> MessageFilters:
    """FastAPI dependency parsing message filters; malformed values yield a 422."""
    try:
        return MessageFilters(
            conversation_id=conversation_id,
            user_id=user_id,
            search=search,
            date_from=date_from,
            date_to=date_to,
        )
    except ValidationError as e:
        raise RequestValidationError(
            [
                {**error, "loc": ("query", *error["loc"])}
                for error in e.errors(include_url=False, include_context=False)
            ]
        ) from e
