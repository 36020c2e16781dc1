"""Database access: one async engine per process, parameterized text queries."""

from __future__ import annotations

import ssl
from typing import Any, AsyncIterator, Dict, List, Mapping, Optional

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from chat_admin.config import Settings, get_settings

Row = Dict[str, Any]


def _ssl_context() -> ssl.SSLContext:
    # TLS without certificate verification
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def create_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    """Build the pooled async engine from settings."""
    settings = settings or get_settings()
    connect_args: Dict[str, Any] = {}
    if settings.database_ssl:
        connect_args["ssl"] = _ssl_context()
    return create_async_engine(
        settings.async_database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


class Database:
    """
    Read-only query handle used by the services.

    Every statement checks a connection out of the engine's pool and returns it
    when the statement completes or fails, so independent statements can be
    awaited concurrently with asyncio.gather.
    """

    def __init__(self, engine: Optional[AsyncEngine]) -> None:
        self.engine = engine

    async def fetch_all(
        self, sql: str, params: Optional[Mapping[str, Any]] = None
    ) -> List[Row]:
        async with self.engine.connect() as conn:
            result = await conn.execute(text(sql), dict(params or {}))
            return [dict(row) for row in result.mappings().all()]

    async def fetch_one(
        self, sql: str, params: Optional[Mapping[str, Any]] = None
    ) -> Optional[Row]:
        rows = await self.fetch_all(sql, params)
        return rows[0] if rows else None

    async def fetch_value(
        self,
        sql: str,
        params: Optional[Mapping[str, Any]] = None,
        key: Optional[str] = None,
    ) -> Any:
        """First column (or ``key``) of the first row, None when no row matched."""
        row = await self.fetch_one(sql, params)
        if row is None:
            return None
        if key is not None:
            return row.get(key)
        return next(iter(row.values()), None)


async def get_db(request: Request) -> AsyncIterator[Database]:
    """FastAPI dependency yielding a Database bound to the application engine."""
    yield Database(request.app.state.engine)
