"""Merge recent conversations and messages into one activity feed."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

CONVERSATION = "conversation"
MESSAGE = "message"


def tag(rows: Iterable[Dict[str, Any]], kind: str) -> List[Dict[str, Any]]:
    return [{**row, "type": kind} for row in rows]


def merge_activity(
    conversations: Iterable[Dict[str, Any]],
    messages: Iterable[Dict[str, Any]],
    limit: int,
) -> List[Dict[str, Any]]:
    """
    Tag, concatenate and re-sort both feeds newest first, keeping ``limit`` items.

    The sort is stable: on equal timestamps conversations precede messages and
    each feed keeps its fetch order.
    """
    combined = tag(conversations, CONVERSATION) + tag(messages, MESSAGE)
    combined.sort(key=lambda item: item["timestamp"], reverse=True)
    return combined[: max(limit, 0)]
