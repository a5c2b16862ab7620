"""Forum service tests against a session."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from mindhaven.core.errors import NotFound, ValidationError
from mindhaven.models.comment import Comment
from mindhaven.models.like import Like
from mindhaven.models.user import User
from mindhaven.services import forum_service
from mindhaven.services.forum_service import (
    create_comment,
    create_post,
    delete_post,
    list_comments,
    list_posts,
    toggle_like,
)


@pytest.fixture
def author(db):
    user = User(username="author", hashed_password="x")
    db.add(user)
    db.commit()
    return user


def _like_rows(db, user_id, post_id):
    return db.execute(
        select(func.count(Like.id)).where(Like.user_id == user_id, Like.post_id == post_id)
    ).scalar_one()


def test_create_post_validates(db, author):
    with pytest.raises(ValidationError) as exc:
        create_post(db, author.id, "", "body")
    assert exc.value.errors[0]["loc"] == ["title"]


def test_toggle_parity_never_duplicates(db, author):
    post = create_post(db, author.id, "t", "c")
    for i in range(1, 8):
        liked = toggle_like(db, author.id, post.id)
        assert liked is (i % 2 == 1)
        assert _like_rows(db, author.id, post.id) == (1 if liked else 0)


def test_toggle_treats_insert_conflict_as_liked(db, author, monkeypatch):
    """A concurrent like that wins the insert race leaves exactly one row."""
    post_id = create_post(db, author.id, "t", "c").id
    user_id = author.id
    assert toggle_like(db, user_id, post_id) is True

    real_execute = db.execute
    faked = []

    class _NothingFound:
        def scalar_one_or_none(self):
            return None

    def stale_execute(statement, *args, **kwargs):
        # Only the existence check misses the row; other queries run for real.
        if not faked and "FROM likes" in str(statement):
            faked.append(statement)
            return _NothingFound()
        return real_execute(statement, *args, **kwargs)

    monkeypatch.setattr(db, "execute", stale_execute)
    assert toggle_like(db, user_id, post_id) is True
    monkeypatch.undo()

    assert faked
    assert _like_rows(db, user_id, post_id) == 1


def test_toggle_missing_post(db, author):
    with pytest.raises(NotFound):
        toggle_like(db, author.id, 12345)


def test_list_posts_without_viewer(db, author):
    post = create_post(db, author.id, "t", "c")
    toggle_like(db, author.id, post.id)
    [listed] = list_posts(db)
    assert listed.likes_count == 1
    assert listed.user_liked is False


def test_comment_on_missing_post(db, author):
    with pytest.raises(NotFound):
        create_comment(db, author.id, 999, "hello")


def test_list_comments_degrades_to_empty(db, author, monkeypatch):
    post_id = create_post(db, author.id, "t", "c").id
    create_comment(db, author.id, post_id, "hello")

    def broken_execute(*args, **kwargs):
        raise OperationalError("SELECT comments", {}, Exception("connection lost"))

    monkeypatch.setattr(db, "execute", broken_execute)
    assert list_comments(db, post_id) == []


def test_list_comments_logs_failure(db, author, monkeypatch, caplog):
    def broken_execute(*args, **kwargs):
        raise OperationalError("SELECT comments", {}, Exception("connection lost"))

    monkeypatch.setattr(db, "execute", broken_execute)
    with caplog.at_level("ERROR", logger=forum_service.logger.name):
        list_comments(db, 7)
    assert "comments for post 7" in caplog.text


def test_delete_post_cascades(db, author):
    post = create_post(db, author.id, "t", "c")
    create_comment(db, author.id, post.id, "one")
    toggle_like(db, author.id, post.id)

    delete_post(db, post.id, author)

    assert list_comments(db, post.id) == []
    assert db.execute(select(func.count(Comment.id))).scalar_one() == 0
    assert db.execute(select(func.count(Like.id))).scalar_one() == 0
