"""Schemas for conversations."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from chat_admin.schemas.base import CamelModel, RowModel
from chat_admin.schemas.message import MessageRead
from chat_admin.schemas.pagination import ConversationPagination
from chat_admin.schemas.user import PartnerConversation


class ConversationRead(RowModel):
    id: int
    user1_id: int
    user1_username: Optional[str] = None
    user2_id: int
    user2_username: Optional[str] = None
    started_at: datetime
    ended_at: Optional[datetime] = None
    status: str
    message_count: int = 0


class ConversationRecord(RowModel):
    """Every stored column of a conversation plus the counted messages."""

    id: int
    actual_message_count: int = 0


class ConversationList(CamelModel):
    conversations: List[ConversationRead]
    pagination: ConversationPagination


class ConversationDetail(CamelModel):
    conversation: ConversationRecord
    messages: List[MessageRead]


class UserConversationList(CamelModel):
    conversations: List[PartnerConversation]
    pagination: ConversationPagination
