"""Mood log and mood statistics tests."""

import pytest

from mindhaven.core.errors import ValidationError
from mindhaven.models.user import User
from mindhaven.services.mood_service import compute_mood_stats, create_mood, get_user_moods


def test_can_log_mood(client, make_user):
    headers, user_id = make_user()
    r = client.post("/moods", headers=headers, json={"rating": 3, "note": "Feeling better today"})
    assert r.status_code == 200
    data = r.json()
    assert data["rating"] == 3
    assert data["note"] == "Feeling better today"
    assert data["user_id"] == user_id
    assert "created_at" in data


def test_note_is_optional(client, make_user):
    headers, _ = make_user()
    r = client.post("/moods", headers=headers, json={"rating": 0})
    assert r.status_code == 200
    assert r.json()["note"] is None


def test_rating_range(client, make_user):
    """rating must be 0-4."""
    headers, _ = make_user()
    assert client.post("/moods", headers=headers, json={"rating": 4}).status_code == 200
    assert client.post("/moods", headers=headers, json={"rating": 5}).status_code == 400
    assert client.post("/moods", headers=headers, json={"rating": -1}).status_code == 400


def test_moods_require_auth(client):
    assert client.post("/moods", json={"rating": 2}).status_code == 401
    assert client.get("/moods").status_code == 401


def test_moods_newest_first_and_scoped_to_user(client, make_user):
    alice, _ = make_user()
    bob, _ = make_user()
    for rating in (1, 2, 3):
        client.post("/moods", headers=alice, json={"rating": rating})
    client.post("/moods", headers=bob, json={"rating": 0})

    items = client.get("/moods", headers=alice).json()
    assert [m["rating"] for m in items] == [3, 2, 1]

    bob_items = client.get("/moods", headers=bob).json()
    assert [m["rating"] for m in bob_items] == [0]


def _user(db, name):
    user = User(username=name, hashed_password="x")
    db.add(user)
    db.commit()
    return user


def test_create_mood_service_validates(db):
    user = _user(db, "svc")
    with pytest.raises(ValidationError) as exc:
        create_mood(db, user.id, 7)
    assert exc.value.errors[0]["loc"] == ["rating"]
    assert get_user_moods(db, user.id) == []


def test_stats_over_every_rating(db):
    """Ratings 0..4 average to 2.0 with one of each."""
    a = _user(db, "a")
    b = _user(db, "b")
    for rating in (0, 1, 2):
        create_mood(db, a.id, rating)
    for rating in (3, 4):
        create_mood(db, b.id, rating)

    stats = compute_mood_stats(db)
    assert stats.average_rating == 2.0
    assert stats.total_entries == 5
    assert stats.rating_distribution == {0: 1, 1: 1, 2: 1, 3: 1, 4: 1}


def test_stats_empty(db):
    stats = compute_mood_stats(db)
    assert stats.average_rating == 0
    assert stats.total_entries == 0
    assert stats.rating_distribution == {}


def test_stats_omit_unseen_ratings(db):
    user = _user(db, "c")
    for rating in (4, 4, 1):
        create_mood(db, user.id, rating)
    stats = compute_mood_stats(db)
    assert stats.rating_distribution == {4: 2, 1: 1}
    assert stats.average_rating == pytest.approx(3.0)


def test_admin_sees_mood_stats(client, make_user):
    user, _ = make_user()
    admin, _ = make_user(admin=True)
    for rating in (0, 1, 2, 3, 4):
        client.post("/moods", headers=user, json={"rating": rating})

    r = client.get("/admin/mood-stats", headers=admin)
    assert r.status_code == 200
    assert r.json() == {
        "average_rating": 2.0,
        "total_entries": 5,
        "rating_distribution": {"0": 1, "1": 1, "2": 1, "3": 1, "4": 1},
    }


def test_mood_stats_empty_over_http(client, make_user):
    admin, _ = make_user(admin=True)
    r = client.get("/admin/mood-stats", headers=admin)
    assert r.json() == {"average_rating": 0.0, "total_entries": 0, "rating_distribution": {}}
