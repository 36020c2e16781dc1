"""Dashboard statistics response."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from chat_admin.schemas.base import CamelModel, RowModel


class GenderCount(RowModel):
    gender: Optional[str] = None
    count: int


class DailyMessageCount(RowModel):
    message_date: date
    daily_messages: int


class UserTotals(CamelModel):
    total: int
    by_gender: List[GenderCount]


class ConversationTotals(CamelModel):
    total: int
    active: int
    ended: int
    avg_messages: int
    today: int


class MessageTotals(CamelModel):
    total: int
    unique_senders: int
    daily_stats: List[DailyMessageCount]


class DashboardStats(CamelModel):
    users: UserTotals
    conversations: ConversationTotals
    messages: MessageTotals
