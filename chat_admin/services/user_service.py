"""User listing, lookup by id or handle, per-user conversations and search."""

from __future__ import annotations

import asyncio
from typing import Optional

from chat_admin.constants import RECENT_CONVERSATIONS_LIMIT
from chat_admin.core.identifiers import resolve_user_identifier
from chat_admin.db import Database, Row
from chat_admin.query import PageRequest, PaginatedQuery, PredicateBuilder, fetch_page
from chat_admin.query.predicate import escape_like
from chat_admin.schemas.pagination import ConversationPagination, UserPagination
from chat_admin.schemas.user import (
    PartnerConversation,
    UserDetail,
    UserList,
    UserRead,
    UserSearchResult,
    UserStats,
)
from chat_admin.schemas.conversation import UserConversationList

USERS_PAGE = PaginatedQuery(
    relation="usernames",
    columns="user_id, username, gender",
    order_by="user_id DESC",
)

# The participant predicate is the only filter, so the user id is always :p1.
USER_CONVERSATIONS_PAGE = PaginatedQuery(
    relation="conversations",
    columns="""
        id,
        CASE WHEN user1_id = :p1 THEN user2_id ELSE user1_id END AS partner_id,
        CASE WHEN user1_id = :p1 THEN user2_username ELSE user1_username END
            AS partner_username,
        started_at,
        ended_at,
        status,
        (SELECT COUNT(*) FROM chat_logs WHERE conversation_id = conversations.id)
            AS message_count
    """,
    order_by="started_at DESC",
)

CONVERSATION_COUNT_SQL = """
    SELECT COUNT(*) AS conversation_count
    FROM conversations
    WHERE user1_id = :p1 OR user2_id = :p1
"""

MESSAGE_COUNT_SQL = """
    SELECT COUNT(*) AS message_count
    FROM chat_logs
    WHERE sender_user_id = :p1
"""

RECENT_CONVERSATIONS_SQL = """
    SELECT
        id,
        CASE WHEN user1_id = :p1 THEN user2_username ELSE user1_username END
            AS partner_username,
        started_at,
        ended_at,
        status,
        (SELECT COUNT(*) FROM chat_logs WHERE conversation_id = conversations.id)
            AS message_count
    FROM conversations
    WHERE user1_id = :p1 OR user2_id = :p1
    ORDER BY started_at DESC
    LIMIT :p2
"""

SEARCH_USERS_SQL = """
    SELECT user_id, username, gender
    FROM usernames
    WHERE username ILIKE :p1 OR user_id::text = :p2
    ORDER BY username
    LIMIT :p3
"""


class UserService:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_users(
        self,
        page: PageRequest,
        search: Optional[str] = None,
        gender: Optional[str] = None,
    ) -> UserList:
        predicate = (
            PredicateBuilder()
            .contains("username", search)
            .equals("gender", gender)
            .build()
        )
        rows, info = await fetch_page(self.db, USERS_PAGE, page, predicate)
        return UserList(
            users=[UserRead.model_validate(row) for row in rows],
            pagination=UserPagination.from_page(info),
        )

    async def get_user(self, identifier: str) -> Optional[Row]:
        """Fetch the full user row by numeric id or handle."""
        lookup = resolve_user_identifier(identifier)
        if not lookup.matchable:
            return None
        sql = f"SELECT * FROM usernames WHERE {lookup.column} = :p1"
        return await self.db.fetch_one(sql, {"p1": lookup.value})

    async def get_user_detail(self, identifier: str) -> Optional[UserDetail]:
        user = await self.get_user(identifier)
        if user is None:
            return None
        params = {"p1": user["user_id"]}
        conversation_count, message_count, recent = await asyncio.gather(
            self.db.fetch_value(CONVERSATION_COUNT_SQL, params, key="conversation_count"),
            self.db.fetch_value(MESSAGE_COUNT_SQL, params, key="message_count"),
            self.db.fetch_all(
                RECENT_CONVERSATIONS_SQL, {**params, "p2": RECENT_CONVERSATIONS_LIMIT}
            ),
        )
        return UserDetail(
            user=UserRead.model_validate(user),
            stats=UserStats(
                conversation_count=int(conversation_count or 0),
                message_count=int(message_count or 0),
            ),
            recent_conversations=[
                PartnerConversation.model_validate(row) for row in recent
            ],
        )

    async def list_user_conversations(
        self, user_id: int, page: PageRequest
    ) -> UserConversationList:
        predicate = PredicateBuilder().equals(("user1_id", "user2_id"), user_id).build()
        rows, info = await fetch_page(
            self.db, USER_CONVERSATIONS_PAGE, page, predicate
        )
        return UserConversationList(
            conversations=[PartnerConversation.model_validate(row) for row in rows],
            pagination=ConversationPagination.from_page(info),
        )

    async def search_users(self, query: str, limit: int) -> UserSearchResult:
        rows = await self.db.fetch_all(
            SEARCH_USERS_SQL,
            {"p1": f"%{escape_like(query)}%", "p2": query, "p3": limit},
        )
        return UserSearchResult(users=[UserRead.model_validate(row) for row in rows])
