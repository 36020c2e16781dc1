"""Shared fixtures: an in-memory Database double and a TestClient bound to it."""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import pytest
from fastapi.testclient import TestClient

from chat_admin.db import Database, get_db
from chat_admin.main import create_app

BASE_TIME = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)

Response = Union[List[Dict[str, Any]], BaseException, Callable[..., List[Dict[str, Any]]]]


class FakeDatabase(Database):
    """
    Records every statement and answers from canned responses.

    Responses are keyed by a fragment of the SQL text; the first registered
    fragment contained in the statement wins. Unmatched statements return no rows.
    """

    def __init__(self) -> None:
        super().__init__(engine=None)
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self._responses: List[Tuple[str, Response]] = []

    def respond(self, fragment: str, result: Response) -> "FakeDatabase":
        self._responses.append((fragment, result))
        return self

    def calls_matching(self, fragment: str) -> List[Tuple[str, Dict[str, Any]]]:
        return [call for call in self.calls if fragment in call[0]]

    async def fetch_all(self, sql, params=None):
        params = dict(params or {})
        self.calls.append((sql, params))
        for fragment, result in self._responses:
            if fragment not in sql:
                continue
            if isinstance(result, BaseException):
                raise result
            if callable(result):
                return [dict(row) for row in result(sql, params)]
            return [dict(row) for row in result]
        return []


@pytest.fixture
def fake_db_factory():
    return FakeDatabase


@pytest.fixture
def fake_db(fake_db_factory) -> FakeDatabase:
    return fake_db_factory()


@pytest.fixture
def client(fake_db):
    """Client with the database dependency replaced by ``fake_db``."""
    app = create_app(testing=True)

    async def override_get_db():
        yield fake_db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def at() -> Callable[[int], datetime]:
    """Timestamp ``minutes`` after a fixed base time."""
    return lambda minutes: BASE_TIME + timedelta(minutes=minutes)


@pytest.fixture
def page_slice():
    """Build a response serving rows honouring the trailing LIMIT/OFFSET parameters."""

    def build(rows: List[Dict[str, Any]]):
        def respond(sql: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
            keys = sorted(params, key=lambda k: int(k[1:]))
            limit, offset = params[keys[-2]], params[keys[-1]]
            return rows[offset : offset + limit]

        return respond

    return build


@pytest.fixture
def make_user(faker):
    def build(user_id: int, gender: Optional[str] = "female") -> Dict[str, Any]:
        return {
            "user_id": user_id,
            "username": f"@{faker.user_name()}",
            "gender": gender,
        }

    return build


@pytest.fixture
def make_conversation(faker):
    def build(
        conversation_id: int, started_at: Optional[datetime] = None, **overrides
    ) -> Dict[str, Any]:
        row = {
            "id": conversation_id,
            "user1_id": faker.random_int(1, 500),
            "user1_username": f"@{faker.user_name()}",
            "user2_id": faker.random_int(501, 1000),
            "user2_username": f"@{faker.user_name()}",
            "started_at": started_at or BASE_TIME,
            "ended_at": None,
            "status": "active",
            "message_count": faker.random_int(0, 40),
        }
        row.update(overrides)
        return row

    return build


@pytest.fixture
def make_message(faker):
    def build(
        conversation_id: int, timestamp: Optional[datetime] = None, **overrides
    ) -> Dict[str, Any]:
        row = {
            "conversation_id": conversation_id,
            "sender_user_id": faker.random_int(1, 500),
            "sender_username": f"@{faker.user_name()}",
            "receiver_user_id": faker.random_int(501, 1000),
            "receiver_username": f"@{faker.user_name()}",
            "message": faker.sentence(),
            "timestamp": timestamp or BASE_TIME,
        }
        row.update(overrides)
        return row

    return build
