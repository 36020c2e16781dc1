"""Tests for dashboard router."""

from sqlalchemy.exc import SQLAlchemyError


def test_dashboard_stats_from_fallback(client, fake_db):
    fake_db.respond("AS total_users FROM usernames", [{"total_users": 4}])
    fake_db.respond("GROUP BY gender", [{"gender": "male", "count": 4}])
    fake_db.respond("AS unique_senders", [{"total_messages": 10, "unique_senders": 3}])
    fake_db.respond("to_regclass", [{"present": False}])
    fake_db.respond(
        "FROM conversations c",
        [
            {
                "total_conversations": 6,
                "active_conversations": 1,
                "ended_conversations": 5,
                "avg_messages_per_conversation": 1.5,
                "conversations_today": 1,
            }
        ],
    )

    r = client.get("/api/dashboard/stats")

    assert r.status_code == 200
    assert r.json() == {
        "users": {"total": 4, "byGender": [{"gender": "male", "count": 4}]},
        "conversations": {
            "total": 6,
            "active": 1,
            "ended": 5,
            "avgMessages": 2,
            "today": 1,
        },
        "messages": {"total": 10, "uniqueSenders": 3, "dailyStats": []},
    }


def test_dashboard_stats_failure(client, fake_db):
    fake_db.respond("AS total_users FROM usernames", SQLAlchemyError("timeout"))

    r = client.get("/api/dashboard/stats")

    assert r.status_code == 500
    assert r.json()["context"] == "dashboard stats"
