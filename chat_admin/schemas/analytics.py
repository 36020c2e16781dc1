"""Usage analytics response."""

from __future__ import annotations

import datetime as dt
from typing import List

from chat_admin.schemas.base import CamelModel, RowModel


class UserRegistrations(RowModel):
    date: str
    new_users: int


class DailyConversations(RowModel):
    date: dt.date
    new_conversations: int


class DailyMessages(RowModel):
    date: dt.date
    messages: int


class DailyActiveUsers(RowModel):
    date: dt.date
    active_users: int


class UsageAnalytics(CamelModel):
    user_registrations: List[UserRegistrations]
    conversations: List[DailyConversations]
    messages: List[DailyMessages]
    active_users: List[DailyActiveUsers]
