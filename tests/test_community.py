from __future__ import annotations

from app.models import AnonymousMessage, User
from app.services.community import is_valid_message
from tests.helpers import count_rows


def test_message_of_exactly_max_length_is_accepted(client, settings):
    response = client.post("/api/community/message", json={"message": "x" * 500, "days_clean": 12})
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert count_rows(settings, AnonymousMessage) == 1


def test_message_over_max_length_is_rejected(client, settings):
    response = client.post("/api/community/message", json={"message": "x" * 501})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid message"}
    assert count_rows(settings, AnonymousMessage) == 0


def test_empty_or_missing_message_is_rejected(client):
    assert client.post("/api/community/message", json={"message": ""}).status_code == 400
    assert client.post("/api/community/message", json={"days_clean": 3}).status_code == 400


def test_posting_needs_no_auth_key_and_creates_no_user(client, settings):
    client.post("/api/community/message", json={"message": "hang in there"})
    assert count_rows(settings, User) == 0


def test_defaults_for_days_clean_and_emoji(client):
    client.post("/api/community/message", json={"message": "day one"})
    messages = client.get("/api/community/messages").json()
    assert messages[0]["message"] == "day one"
    assert messages[0]["days_clean"] == 0
    assert messages[0]["emoji"] == "💪"
    assert messages[0]["created_at"]


def test_messages_listed_most_recent_first_with_limit(client):
    for i in range(4):
        client.post("/api/community/message", json={"message": f"msg {i}", "days_clean": i, "emoji": "🌱"})

    messages = client.get("/api/community/messages").json()
    assert [m["message"] for m in messages] == ["msg 3", "msg 2", "msg 1", "msg 0"]
    assert set(messages[0]) == {"message", "days_clean", "emoji", "created_at"}

    limited = client.get("/api/community/messages", params={"limit": 2}).json()
    assert [m["message"] for m in limited] == ["msg 3", "msg 2"]


def test_is_valid_message():
    assert is_valid_message("a")
    assert is_valid_message("a" * 500)
    assert not is_valid_message("a" * 501)
    assert not is_valid_message("")
    assert not is_valid_message(None)
