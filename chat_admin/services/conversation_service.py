"""Conversation listing and detail."""

from __future__ import annotations

import asyncio
from typing import Optional

from chat_admin.core.identifiers import fits_id
from chat_admin.db import Database
from chat_admin.query import PageRequest, PaginatedQuery, PredicateBuilder, fetch_page
from chat_admin.schemas.conversation import (
    ConversationDetail,
    ConversationList,
    ConversationRead,
    ConversationRecord,
)
from chat_admin.schemas.message import MessageRead
from chat_admin.schemas.pagination import ConversationPagination

CONVERSATIONS_PAGE = PaginatedQuery(
    relation="conversations",
    columns="""
        id,
        user1_id,
        user1_username,
        user2_id,
        user2_username,
        started_at,
        ended_at,
        status,
        (SELECT COUNT(*) FROM chat_logs WHERE conversation_id = conversations.id)
            AS message_count
    """,
    order_by="started_at DESC",
)

CONVERSATION_SQL = """
    SELECT *,
        (SELECT COUNT(*) FROM chat_logs WHERE conversation_id = conversations.id)
            AS actual_message_count
    FROM conversations
    WHERE id = :p1
"""

CONVERSATION_MESSAGES_SQL = """
    SELECT
        sender_user_id,
        sender_username,
        receiver_user_id,
        receiver_username,
        message,
        timestamp
    FROM chat_logs
    WHERE conversation_id = :p1
    ORDER BY timestamp ASC
"""


class ConversationService:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_conversations(
        self,
        page: PageRequest,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> ConversationList:
        """List conversations newest first; ``search`` matches either participant."""
        predicate = (
            PredicateBuilder()
            .equals("status", status)
            .contains(("user1_username", "user2_username"), search)
            .build()
        )
        rows, info = await fetch_page(self.db, CONVERSATIONS_PAGE, page, predicate)
        return ConversationList(
            conversations=[ConversationRead.model_validate(row) for row in rows],
            pagination=ConversationPagination.from_page(info),
        )

    async def get_conversation_detail(
        self, conversation_id: int
    ) -> Optional[ConversationDetail]:
        if not fits_id(conversation_id):
            return None
        params = {"p1": conversation_id}
        conversation, messages = await asyncio.gather(
            self.db.fetch_one(CONVERSATION_SQL, params),
            self.db.fetch_all(CONVERSATION_MESSAGES_SQL, params),
        )
        if conversation is None:
            return None
        return ConversationDetail(
            conversation=ConversationRecord.model_validate(conversation),
            messages=[MessageRead.model_validate(row) for row in messages],
        )
