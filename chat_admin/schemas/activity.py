"""Recent activity feed items."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field

from chat_admin.schemas.base import CamelModel, RowModel


class ConversationActivity(RowModel):
    type: Literal["conversation"] = "conversation"
    reference_id: int
    user1_username: Optional[str] = None
    user2_username: Optional[str] = None
    timestamp: datetime
    status: Optional[str] = None


class MessageActivity(RowModel):
    type: Literal["message"] = "message"
    reference_id: int
    sender_username: Optional[str] = None
    receiver_username: Optional[str] = None
    preview: Optional[str] = None
    timestamp: datetime


ActivityItem = Annotated[
    Union[ConversationActivity, MessageActivity], Field(discriminator="type")
]


class RecentActivity(CamelModel):
    activity: List[ActivityItem]
