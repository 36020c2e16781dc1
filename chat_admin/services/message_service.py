"""Filtered, paginated message log."""

from __future__ import annotations

from typing import Optional

from chat_admin.db import Database
from chat_admin.query import PageRequest, PaginatedQuery, PredicateBuilder, fetch_page
from chat_admin.schemas.message import MessageFilters, MessageList, MessageRead
from chat_admin.schemas.pagination import MessagePagination

MESSAGES_PAGE = PaginatedQuery(
    relation="chat_logs",
    columns="""
        conversation_id,
        sender_user_id,
        sender_username,
        receiver_user_id,
        receiver_username,
        message,
        timestamp
    """,
    order_by="timestamp DESC",
)


class MessageService:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def list_messages(
        self, page: PageRequest, filters: Optional[MessageFilters] = None
    ) -> MessageList:
        filters = filters or MessageFilters()
        predicate = (
            PredicateBuilder()
            .equals("conversation_id", filters.conversation_id)
            .equals(("sender_user_id", "receiver_user_id"), filters.user_id)
            .contains("message", filters.search)
            .at_least("timestamp", filters.date_from)
            .at_most("timestamp", filters.date_to)
            .build()
        )
        rows, info = await fetch_page(self.db, MESSAGES_PAGE, page, predicate)
        return MessageList(
            messages=[MessageRead.model_validate(row) for row in rows],
            pagination=MessagePagination.from_page(info),
        )
