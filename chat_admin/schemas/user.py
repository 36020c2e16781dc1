"""Schemas for users and the per-user views."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from chat_admin.schemas.base import CamelModel, RowModel
from chat_admin.schemas.pagination import UserPagination


class UserRead(RowModel):
    """A user row. Gender is free-form and may be missing."""

    user_id: int
    username: str
    gender: Optional[str] = None


class UserStats(CamelModel):
    conversation_count: int = 0
    message_count: int = 0


class PartnerConversation(RowModel):
    """A conversation seen from one participant's side."""

    id: int
    partner_id: Optional[int] = None
    partner_username: Optional[str] = None
    started_at: datetime
    ended_at: Optional[datetime] = None
    status: str
    message_count: int = 0


class UserDetail(CamelModel):
    user: UserRead
    stats: UserStats
    recent_conversations: List[PartnerConversation]


class UserList(CamelModel):
    users: List[UserRead]
    pagination: UserPagination


class UserSearchResult(CamelModel):
    users: List[UserRead]
