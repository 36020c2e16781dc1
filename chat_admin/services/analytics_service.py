"""Usage analytics bucketed by day in the display timezone."""

from __future__ import annotations

import asyncio

from chat_admin.constants import RECENT_USER_ID_WINDOW
from chat_admin.db import Database
from chat_admin.schemas.analytics import UsageAnalytics

# Registration time is not stored; the highest user ids stand in for new users.
USER_GROWTH_SQL = """
    SELECT 'Recent' AS date, COUNT(*) AS new_users
    FROM usernames
    WHERE user_id > (SELECT COALESCE(MAX(user_id) - :window, 0) FROM usernames)
"""

DAILY_CONVERSATIONS_SQL = """
    SELECT
        DATE(started_at AT TIME ZONE :tz) AS date,
        COUNT(*) AS new_conversations
    FROM conversations
    WHERE started_at >= NOW() - make_interval(days => :days)
    GROUP BY 1
    ORDER BY 1 DESC
"""

DAILY_MESSAGES_SQL = """
    SELECT
        DATE(timestamp AT TIME ZONE :tz) AS date,
        COUNT(*) AS messages
    FROM chat_logs
    WHERE timestamp >= NOW() - make_interval(days => :days)
    GROUP BY 1
    ORDER BY 1 DESC
"""

DAILY_ACTIVE_USERS_SQL = """
    SELECT
        DATE(timestamp AT TIME ZONE :tz) AS date,
        COUNT(DISTINCT sender_user_id) AS active_users
    FROM chat_logs
    WHERE timestamp >= NOW() - make_interval(days => :days)
    GROUP BY 1
    ORDER BY 1 DESC
"""


class AnalyticsService:
    def __init__(self, db: Database, timezone: str) -> None:
        self.db = db
        self.timezone = timezone

    async def usage(self, days: int) -> UsageAnalytics:
        window = {"tz": self.timezone, "days": days}
        registrations, conversations, messages, active_users = await asyncio.gather(
            self.db.fetch_all(USER_GROWTH_SQL, {"window": RECENT_USER_ID_WINDOW}),
            self.db.fetch_all(DAILY_CONVERSATIONS_SQL, window),
            self.db.fetch_all(DAILY_MESSAGES_SQL, window),
            self.db.fetch_all(DAILY_ACTIVE_USERS_SQL, window),
        )
        return UsageAnalytics(
            user_registrations=registrations,
            conversations=conversations,
            messages=messages,
            active_users=active_users,
        )
