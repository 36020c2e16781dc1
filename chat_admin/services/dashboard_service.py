"""
Dashboard statistics.

Conversation totals come from the precomputed ``conversation_stats`` summary
when that relation exists and holds a row; otherwise they are aggregated from
the raw relations. Both variants produce the same ``ConversationTotals``.
"""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError

from chat_admin.constants import DAILY_STATS_DAYS
from chat_admin.db import Database, Row
from chat_admin.infra.logging_config import get_logger
from chat_admin.schemas.dashboard import (
    ConversationTotals,
    DashboardStats,
    MessageTotals,
    UserTotals,
)

logger = get_logger("dashboard")

SUMMARY_RELATION = "conversation_stats"

SUMMARY_EXISTS_SQL = "SELECT to_regclass(:relation) IS NOT NULL AS present"

SUMMARY_SQL = """
    SELECT
        total_conversations,
        active_conversations,
        ended_conversations,
        avg_messages_per_conversation,
        conversations_today
    FROM conversation_stats
    LIMIT 1
"""

SUMMARY_FALLBACK_SQL = """
    SELECT
        COUNT(*) AS total_conversations,
        COUNT(CASE WHEN c.status = 'active' THEN 1 END) AS active_conversations,
        COUNT(CASE WHEN c.status = 'ended' THEN 1 END) AS ended_conversations,
        AVG(COALESCE(m.message_count, 0)) AS avg_messages_per_conversation,
        COUNT(
            CASE WHEN DATE(c.started_at AT TIME ZONE :tz) = DATE(NOW() AT TIME ZONE :tz)
            THEN 1 END
        ) AS conversations_today
    FROM conversations c
    LEFT JOIN (
        SELECT conversation_id, COUNT(*) AS message_count
        FROM chat_logs
        GROUP BY conversation_id
    ) m ON m.conversation_id = c.id
"""

USER_COUNT_SQL = "SELECT COUNT(*) AS total_users FROM usernames"

GENDER_STATS_SQL = """
    SELECT gender, COUNT(*) AS count
    FROM usernames
    GROUP BY gender
"""

MESSAGE_STATS_SQL = """
    SELECT
        COUNT(*) AS total_messages,
        COUNT(DISTINCT sender_user_id) AS unique_senders
    FROM chat_logs
"""

DAILY_MESSAGES_SQL = """
    SELECT
        DATE(timestamp AT TIME ZONE :tz) AS message_date,
        COUNT(*) AS daily_messages
    FROM chat_logs
    WHERE timestamp >= NOW() - make_interval(days => :days)
    GROUP BY 1
    ORDER BY 1 DESC
    LIMIT :max_days
"""


def as_int(value: Any) -> int:
    """Counts may arrive as int, Decimal or numeric text; null means zero."""
    if value is None:
        return 0
    return int(float(value))


def round_half_up(value: Any) -> int:
    if value is None:
        return 0
    return math.floor(float(value) + 0.5)


class SummarySource(str, Enum):
    PRIMARY = "primary"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ConversationSummary:
    """Conversation totals tagged with the source they were read from."""

    source: SummarySource
    row: Row = field(default_factory=dict)

    @classmethod
    def primary(cls, row: Row) -> "ConversationSummary":
        return cls(SummarySource.PRIMARY, row)

    @classmethod
    def fallback(cls, row: Optional[Row]) -> "ConversationSummary":
        return cls(SummarySource.FALLBACK, row or {})

    def totals(self) -> ConversationTotals:
        return ConversationTotals(
            total=as_int(self.row.get("total_conversations")),
            active=as_int(self.row.get("active_conversations")),
            ended=as_int(self.row.get("ended_conversations")),
            avg_messages=round_half_up(self.row.get("avg_messages_per_conversation")),
            today=as_int(self.row.get("conversations_today")),
        )


class DashboardService:
    def __init__(self, db: Database, timezone: str) -> None:
        self.db = db
        self.timezone = timezone

    async def _read_summary(self) -> Optional[Row]:
        """The precomputed summary row, or None when it is missing, empty or unreadable."""
        try:
            present = await self.db.fetch_value(
                SUMMARY_EXISTS_SQL, {"relation": SUMMARY_RELATION}, key="present"
            )
            if not present:
                logger.debug("Summary relation %s does not exist", SUMMARY_RELATION)
                return None
            row = await self.db.fetch_one(SUMMARY_SQL)
        except SQLAlchemyError as e:
            logger.warning("Summary read failed, aggregating from raw tables: %s", e)
            return None
        if row is None:
            logger.debug("Summary relation %s is empty", SUMMARY_RELATION)
        return row

    async def conversation_summary(self) -> ConversationSummary:
        row = await self._read_summary()
        if row is not None:
            return ConversationSummary.primary(row)
        fallback = await self.db.fetch_one(SUMMARY_FALLBACK_SQL, {"tz": self.timezone})
        return ConversationSummary.fallback(fallback)

    async def stats(self) -> DashboardStats:
        (
            total_users,
            genders,
            message_stats,
            daily,
            summary,
        ) = await asyncio.gather(
            self.db.fetch_value(USER_COUNT_SQL, key="total_users"),
            self.db.fetch_all(GENDER_STATS_SQL),
            self.db.fetch_one(MESSAGE_STATS_SQL),
            self.db.fetch_all(
                DAILY_MESSAGES_SQL,
                {
                    "tz": self.timezone,
                    "days": DAILY_STATS_DAYS,
                    "max_days": DAILY_STATS_DAYS,
                },
            ),
            self.conversation_summary(),
        )
        message_stats = message_stats or {}
        return DashboardStats(
            users=UserTotals(total=as_int(total_users), by_gender=genders),
            conversations=summary.totals(),
            messages=MessageTotals(
                total=as_int(message_stats.get("total_messages")),
                unique_senders=as_int(message_stats.get("unique_senders")),
                daily_stats=daily,
            ),
        )
