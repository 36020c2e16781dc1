"""Tests for users router."""

from sqlalchemy.exc import OperationalError, SQLAlchemyError

from chat_admin.constants import MAX_QUERY_INT

USERS_COUNT = "SELECT COUNT(*) AS total FROM usernames"
USERS_PAGE = "ORDER BY user_id DESC"
USER_ROW = "SELECT * FROM usernames WHERE"


def test_list_users_second_page_with_gender_filter(client, fake_db, make_user, page_slice):
    """GET /users?page=2&limit=10&gender=female over 25 matches returns the middle page."""
    rows = [make_user(i, gender="female") for i in range(25, 0, -1)]
    fake_db.respond(USERS_COUNT, [{"total": 25}])
    fake_db.respond(USERS_PAGE, page_slice(rows))

    r = client.get("/api/users", params={"page": 2, "limit": 10, "gender": "female"})

    assert r.status_code == 200
    data = r.json()
    assert len(data["users"]) == 10
    assert data["users"][0]["user_id"] == 15
    assert data["pagination"] == {
        "currentPage": 2,
        "totalPages": 3,
        "totalUsers": 25,
        "hasNext": True,
        "hasPrev": True,
    }
    sql, params = fake_db.calls_matching(USERS_COUNT)[0]
    assert sql.endswith("WHERE gender = :p1")
    assert params == {"p1": "female"}


def test_list_users_defaults(client, fake_db):
    """GET /users with no params uses page 1 and limit 20."""
    fake_db.respond(USERS_COUNT, [{"total": 0}])

    r = client.get("/api/users", params={"page": "abc", "search": ""})

    assert r.status_code == 200
    assert r.json() == {
        "users": [],
        "pagination": {
            "currentPage": 1,
            "totalPages": 0,
            "totalUsers": 0,
            "hasNext": False,
            "hasPrev": False,
        },
    }
    _, params = fake_db.calls_matching(USERS_PAGE)[0]
    assert params == {"p1": 20, "p2": 0}


def test_list_users_search_is_substring(client, fake_db):
    fake_db.respond(USERS_COUNT, [{"total": 0}])

    client.get("/api/users", params={"search": "ann", "gender": "male"})

    sql, params = fake_db.calls_matching(USERS_COUNT)[0]
    assert "username ILIKE :p1 AND gender = :p2" in sql
    assert params == {"p1": "%ann%", "p2": "male"}


def test_get_user_by_id(client, fake_db, make_user, at):
    """GET /users/{id} returns user, stats and recent conversations."""
    user = make_user(7)
    fake_db.respond(USER_ROW, [user])
    fake_db.respond("AS conversation_count", [{"conversation_count": 2}])
    fake_db.respond("WHERE sender_user_id = :p1", [{"message_count": 11}])
    fake_db.respond(
        "LIMIT :p2",
        [
            {
                "id": 3,
                "partner_username": "@carol",
                "started_at": at(0),
                "ended_at": at(30),
                "status": "ended",
                "message_count": 6,
            }
        ],
    )

    r = client.get("/api/users/7")

    assert r.status_code == 200
    data = r.json()
    assert data["user"] == user
    assert data["stats"] == {"conversationCount": 2, "messageCount": 11}
    assert data["recentConversations"][0]["partner_username"] == "@carol"
    assert data["recentConversations"][0]["status"] == "ended"


def test_get_user_by_handle(client, fake_db, make_user):
    fake_db.respond(USER_ROW, [make_user(3)])

    r = client.get("/api/users/alice")

    assert r.status_code == 200
    assert fake_db.calls_matching(USER_ROW)[0][1] == {"p1": "@alice"}


def test_get_user_not_found_by_id(client, fake_db):
    """GET /users/{id} returns 404 for unknown id."""
    r = client.get("/api/users/999999")
    assert r.status_code == 404
    assert r.json() == {"error": "User not found"}


def test_get_user_id_beyond_bigint_is_not_found(client, fake_db):
    r = client.get("/api/users/99999999999999999999999")

    assert r.status_code == 404
    assert r.json() == {"error": "User not found"}
    assert fake_db.calls == []


def test_get_user_not_found_by_handle(client, fake_db):
    r = client.get("/api/users/@nobody")
    assert r.status_code == 404
    assert r.json() == {"error": "User not found"}


def test_get_user_database_failure(client, fake_db):
    """Database errors surface as 500 with the operation context."""
    fake_db.respond(USER_ROW, SQLAlchemyError("connection refused"))

    r = client.get("/api/users/1")

    assert r.status_code == 500
    body = r.json()
    assert body["error"] == "Internal server error"
    assert body["context"] == "get user details"
    assert "connection refused" in body["message"]


def test_list_users_database_failure(client, fake_db):
    fake_db.respond(
        USERS_COUNT, OperationalError("SELECT", {}, Exception("server closed the connection"))
    )

    r = client.get("/api/users")

    assert r.status_code == 500
    assert r.json()["context"] == "get users"


def test_list_user_conversations(client, fake_db, at, page_slice):
    rows = [
        {
            "id": i,
            "partner_id": 100 + i,
            "partner_username": f"@p{i}",
            "started_at": at(-i),
            "ended_at": None,
            "status": "active",
            "message_count": i,
        }
        for i in range(1, 4)
    ]
    fake_db.respond("SELECT COUNT(*) AS total FROM conversations", [{"total": 3}])
    fake_db.respond("partner_id", page_slice(rows))

    r = client.get("/api/users/5/conversations", params={"limit": 2})

    assert r.status_code == 200
    data = r.json()
    assert [c["id"] for c in data["conversations"]] == [1, 2]
    assert data["pagination"]["totalConversations"] == 3
    assert data["pagination"]["totalPages"] == 2
    assert data["pagination"]["hasNext"] is True


def test_list_user_conversations_rejects_non_numeric_id(client):
    r = client.get("/api/users/abc/conversations")
    assert r.status_code == 422


def test_list_user_conversations_rejects_id_beyond_bigint(client, fake_db):
    r = client.get("/api/users/99999999999999999999999/conversations")

    assert r.status_code == 422
    assert fake_db.calls == []


def test_list_users_huge_paging_values_are_clamped(client, fake_db):
    fake_db.respond(USERS_COUNT, [{"total": 0}])

    r = client.get(
        "/api/users",
        params={"page": "99999999999999999999999", "limit": "99999999999999999999999"},
    )

    assert r.status_code == 200
    assert r.json()["pagination"]["currentPage"] == MAX_QUERY_INT
    _, params = fake_db.calls_matching(USERS_PAGE)[0]
    assert params == {"p1": MAX_QUERY_INT, "p2": (MAX_QUERY_INT - 1) * MAX_QUERY_INT}


def test_search_users(client, fake_db, make_user):
    fake_db.respond("user_id::text", [make_user(12), make_user(120)])

    r = client.get("/api/users/search/12", params={"limit": 5})

    assert r.status_code == 200
    assert [u["user_id"] for u in r.json()["users"]] == [12, 120]
    assert fake_db.calls_matching("user_id::text")[0][1]["p3"] == 5
