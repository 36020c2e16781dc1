"""Paginated query executor: concurrent count + page fetch over one predicate."""

from __future__ import annotations

import asyncio
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from chat_admin.constants import MAX_QUERY_INT
from chat_admin.db import Database, Row
from chat_admin.query.predicate import Predicate, placeholder


def coerce_int(value: Any, default: int, maximum: int = MAX_QUERY_INT) -> int:
    """
    Parse a loosely typed query value.

    Missing, non-numeric and zero values fall back to ``default``; values above
    ``maximum`` are clamped to it.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return default
    # zero takes the endpoint default, not the minimum of 1; callers clamp negatives
    return min(parsed or default, maximum)


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    limit: int = 20

    def __post_init__(self) -> None:
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "page", min(max(self.page, 1), MAX_QUERY_INT))
        object.__setattr__(self, "limit", min(max(self.limit, 1), MAX_QUERY_INT))

    @classmethod
    def from_query(
        cls, page: Any = None, limit: Any = None, default_limit: int = 20
    ) -> "PageRequest":
        return cls(page=coerce_int(page, 1), limit=coerce_int(limit, default_limit))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PageInfo:
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total > 0 else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


@dataclass(frozen=True)
class PaginatedQuery:
    """Fixed per-endpoint parts of a paginated read."""

    relation: str
    columns: str
    order_by: str

    def count_sql(self, predicate: Predicate) -> str:
        return f"SELECT COUNT(*) AS total FROM {self.relation} {predicate.where}".rstrip()

    def page_sql(self, predicate: Predicate) -> str:
        limit_ref = placeholder(predicate.next_index)
        offset_ref = placeholder(predicate.next_index + 1)
        return (
            f"SELECT {self.columns} FROM {self.relation} {predicate.where} "
            f"ORDER BY {self.order_by} LIMIT {limit_ref} OFFSET {offset_ref}"
        )


async def fetch_page(
    db: Database,
    query: PaginatedQuery,
    page: PageRequest,
    predicate: Optional[Predicate] = None,
) -> Tuple[List[Row], PageInfo]:
    """Run the count and page queries concurrently and derive pagination info."""
    predicate = predicate or Predicate()
    total, rows = await asyncio.gather(
        db.fetch_value(query.count_sql(predicate), predicate.bind(), key="total"),
        db.fetch_all(
            query.page_sql(predicate), predicate.bind(page.limit, page.offset)
        ),
    )
    return rows, PageInfo(page=page.page, limit=page.limit, total=int(total or 0))
