# tests/test_client.py
"""Tests for the Python API client driven against the app."""

import pytest

from blog_platform.client import ApiError, BlogClient
from tests.conftest import DEFAULT_PASSWORD


@pytest.fixture()
def blog_client(make_client) -> BlogClient:
    return BlogClient(make_client(base_url="http://testserver/api"))


@pytest.fixture()
def second_client(make_client) -> BlogClient:
    return BlogClient(make_client(base_url="http://testserver/api"))


def test_startup_without_session(blog_client) -> None:
    assert blog_client.is_loading is True

    assert blog_client.check_auth_status() is None
    assert blog_client.is_loading is False
    assert blog_client.is_authenticated is False


def test_register_then_restore_session(blog_client) -> None:
    user = blog_client.register("alice", "alice@example.com", DEFAULT_PASSWORD)
    assert blog_client.is_authenticated
    assert user["username"] == "alice"

    # новая "вкладка" с теми же cookie
    restored = BlogClient(blog_client._http)
    assert restored.check_auth_status()["_id"] == user["_id"]
    assert restored.is_authenticated


def test_login_failure_keeps_state(blog_client, second_client) -> None:
    second_client.register("alice", "alice@example.com", DEFAULT_PASSWORD)

    with pytest.raises(ApiError) as exc_info:
        blog_client.login("alice@example.com", "wrong-password")

    assert exc_info.value.status_code == 401
    assert exc_info.value.message == "Invalid email or password"
    assert blog_client.user is None

    blog_client.login("alice@example.com", DEFAULT_PASSWORD)
    assert blog_client.user["username"] == "alice"


def test_logout_resets_state(blog_client) -> None:
    blog_client.register("alice", "alice@example.com", DEFAULT_PASSWORD)
    blog_client.logout()

    assert blog_client.user is None
    assert blog_client.check_auth_status() is None


def test_blog_flow(blog_client, second_client) -> None:
    blog_client.register("alice", "alice@example.com", DEFAULT_PASSWORD)
    second_client.register("bob", "bob@example.com", DEFAULT_PASSWORD)

    created = blog_client.create_blog("Hello", "First post", tags=["intro"])
    blog_client.update_blog(created["_id"], content="Edited")

    page = second_client.list_blogs(tag="intro")
    assert page["totalBlogs"] == 1
    assert page["blogs"][0]["author"]["username"] == "alice"

    blog = second_client.get_blog(created["_id"])
    assert blog["content"] == "Edited"

    result = second_client.toggle_blog_like(blog)
    assert result == {"likes": 1, "isLiked": True}
    assert blog["likes"] == [second_client.user["_id"]]
    assert blog["isLiked"] is True

    second_client.toggle_blog_like(blog)
    assert blog["likes"] == []
    assert blog["isLiked"] is False

    assert [b["_id"] for b in blog_client.list_my_blogs()] == [created["_id"]]
    assert [b["_id"] for b in second_client.list_user_blogs(blog_client.user["_id"])] == [created["_id"]]


def test_comment_flow(blog_client, second_client) -> None:
    blog_client.register("alice", "alice@example.com", DEFAULT_PASSWORD)
    second_client.register("bob", "bob@example.com", DEFAULT_PASSWORD)
    blog = blog_client.create_blog("Hello", "First post")

    comment = second_client.add_comment(blog["_id"], "Great!")
    second_client.update_comment(comment["_id"], "Great post!")

    comments = blog_client.list_comments(blog["_id"])
    assert [c["content"] for c in comments] == ["Great post!"]

    assert blog_client.toggle_comment_like(comments[0]) == {"likes": 1, "isLiked": True}
    assert comments[0]["likes"] == [blog_client.user["_id"]]

    with pytest.raises(ApiError) as exc_info:
        blog_client.update_comment(comment["_id"], "not mine")
    assert exc_info.value.status_code == 403

    blog_client.delete_blog(blog["_id"])
    assert blog_client.list_comments(blog["_id"]) == []


def test_profile_flow(blog_client) -> None:
    user = blog_client.register("alice", "alice@example.com", DEFAULT_PASSWORD)

    updated = blog_client.update_profile(bio="Writer")
    assert updated["bio"] == "Writer"
    assert blog_client.user["bio"] == "Writer"
    assert blog_client.get_profile(user["_id"])["bio"] == "Writer"

    blog_client.change_password(DEFAULT_PASSWORD, "another-secret")
    blog_client.logout()
    blog_client.login("alice@example.com", "another-secret")
    assert blog_client.is_authenticated
