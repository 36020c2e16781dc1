"""Users API: list, detail by id or handle, per-user conversations, search."""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query

from chat_admin.constants import (
    MAX_ID,
    MIN_ID,
    USER_CONVERSATIONS_PAGE_SIZE,
    USER_SEARCH_LIMIT,
    USERS_PAGE_SIZE,
)
from chat_admin.db import Database, get_db
from chat_admin.errors import NotFoundError, upstream_errors
from chat_admin.query import PageRequest
from chat_admin.routers.utils.dependencies import limit_param, page_params
from chat_admin.schemas.conversation import UserConversationList
from chat_admin.schemas.user import UserDetail, UserList, UserSearchResult
from chat_admin.services.user_service import UserService

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=UserList)
async def list_users(
    page: PageRequest = Depends(page_params(USERS_PAGE_SIZE)),
    search: Optional[str] = Query(None),
    gender: Optional[str] = Query(None),
    db: Database = Depends(get_db),
) -> UserList:
    """List users, newest id first, optionally filtered by handle substring and gender."""
    with upstream_errors("get users"):
        return await UserService(db).list_users(page, search=search, gender=gender)


@router.get("/search/{query}", response_model=UserSearchResult)
async def search_users(
    query: str,
    limit: int = Depends(limit_param(USER_SEARCH_LIMIT)),
    db: Database = Depends(get_db),
) -> UserSearchResult:
    """Match users by handle substring or exact numeric id."""
    with upstream_errors("search users"):
        return await UserService(db).search_users(query, limit)


@router.get("/{user_id}/conversations", response_model=UserConversationList)
async def list_user_conversations(
    user_id: int = Path(..., ge=MIN_ID, le=MAX_ID),
    page: PageRequest = Depends(page_params(USER_CONVERSATIONS_PAGE_SIZE)),
    db: Database = Depends(get_db),
) -> UserConversationList:
    with upstream_errors("get user conversations"):
        return await UserService(db).list_user_conversations(user_id, page)


@router.get("/{identifier}", response_model=UserDetail)
async def get_user(
    identifier: str,
    db: Database = Depends(get_db),
) -> UserDetail:
    """Get a user by numeric id or handle, with counts and recent conversations."""
    with upstream_errors("get user details"):
        detail = await UserService(db).get_user_detail(identifier)
    if detail is None:
        raise NotFoundError("User")
    return detail
