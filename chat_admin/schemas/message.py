"""Schemas for chat log entries and the message list filters."""

from __future__ import annotations

import re
from datetime import date, datetime, time
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from chat_admin.constants import MAX_ID, MIN_ID
from chat_admin.schemas.base import CamelModel, RowModel
from chat_admin.schemas.pagination import MessagePagination

_DATE_ONLY = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class MessageRead(RowModel):
    conversation_id: Optional[int] = None
    sender_user_id: int
    sender_username: Optional[str] = None
    receiver_user_id: Optional[int] = None
    receiver_username: Optional[str] = None
    message: Optional[str] = None
    timestamp: datetime


class MessageList(CamelModel):
    messages: List[MessageRead]
    pagination: MessagePagination


class MessageFilters(BaseModel):
    """Optional filters for the message list, in the order they are applied."""

    conversation_id: Optional[int] = Field(None, ge=MIN_ID, le=MAX_ID)
    user_id: Optional[int] = Field(None, ge=MIN_ID, le=MAX_ID)
    search: Optional[str] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def date_at_midnight(cls, value):
        # A bare date bounds the range at the start of that day
        if isinstance(value, str) and _DATE_ONLY.fullmatch(value.strip()):
            return datetime.combine(date.fromisoformat(value.strip()), time.min)
        return value
