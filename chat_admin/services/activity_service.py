"""Recent activity across conversations and messages."""

from __future__ import annotations

import asyncio

from chat_admin.constants import MESSAGE_PREVIEW_LENGTH
from chat_admin.core.activity import merge_activity
from chat_admin.db import Database
from chat_admin.schemas.activity import RecentActivity

RECENT_CONVERSATIONS_SQL = """
    SELECT
        id AS reference_id,
        user1_username,
        user2_username,
        started_at AS timestamp,
        status
    FROM conversations
    ORDER BY started_at DESC
    LIMIT :p1
"""

RECENT_MESSAGES_SQL = """
    SELECT
        conversation_id AS reference_id,
        sender_username,
        receiver_username,
        LEFT(message, :p2) AS preview,
        timestamp
    FROM chat_logs
    ORDER BY timestamp DESC
    LIMIT :p1
"""


class ActivityService:
    def __init__(self, db: Database) -> None:
        self.db = db

    async def recent_activity(self, limit: int) -> RecentActivity:
        conversations, messages = await asyncio.gather(
            self.db.fetch_all(RECENT_CONVERSATIONS_SQL, {"p1": limit}),
            self.db.fetch_all(
                RECENT_MESSAGES_SQL, {"p1": limit, "p2": MESSAGE_PREVIEW_LENGTH}
            ),
        )
        return RecentActivity(activity=merge_activity(conversations, messages, limit))
