"""
Security tests for session and flash-message cookies.

Verifies the Set-Cookie attributes emitted after login, that sessions
are really ended server-side on logout, and that text carried in the
``message`` cookie is HTML-escaped when rendered into the login page.

Key SDET Concepts Demonstrated:
- Configuration-level assertions (config class inspection)
- Set-Cookie header parsing for security attribute validation
- Replay of a session token after logout
- Output encoding of attacker-controlled cookie values
"""

from __future__ import annotations

import pytest

from config import ProductionConfig, TestingConfig
from tests.helpers import assert_redirected_to, set_cookie_header

pytestmark = pytest.mark.security


def test_cookie_flags_are_hardened():
    """Session cookie should be HttpOnly with a SameSite policy."""
    assert TestingConfig.SESSION_COOKIE_HTTPONLY is True
    assert TestingConfig.SESSION_COOKIE_SAMESITE in {"Lax", "Strict"}


def test_production_enables_secure_session_cookie_flag():
    """Production config should require HTTPS-only session cookies by default."""
    assert ProductionConfig.SESSION_COOKIE_SECURE is True


def test_login_sets_httponly_and_samesite_cookie(client):
    """Successful login should emit a hardened session cookie."""
    # Act
    response = client.post("/login", data={"username": "sayima"})

    # Assert
    session_cookie = set_cookie_header(response, "sessionid")
    assert session_cookie
    assert "HttpOnly" in session_cookie
    assert "SameSite=Lax" in session_cookie


def test_each_login_issues_a_new_token(client, session_store):
    first = set_cookie_header(client.post("/login", data={"username": "sayima"}), "sessionid")
    second = set_cookie_header(client.post("/login", data={"username": "sayima"}), "sessionid")

    first_token = first.split(";")[0].split("=", 1)[1]
    assert first.split(";")[0] != second.split(";")[0]
    assert session_store.get(first_token) is None
    assert len(session_store) == 1


def test_token_is_rejected_after_logout(client, logged_in_user):
    """A copied session cookie must stop working once the user logs out."""
    # Arrange
    token = client.get_cookie("sessionid").value

    # Act
    client.get("/logout")
    client.set_cookie("sessionid", token)
    response = client.get("/home")

    # Assert
    assert_redirected_to(response, "/login")


def test_session_for_deleted_user_is_anonymous(client, session_store):
    client.set_cookie("sessionid", session_store.create("ghost"))

    assert_redirected_to(client.get("/home"), "/login")


def test_flash_message_is_escaped(client):
    """Script tags smuggled into the message cookie must not render as markup."""
    # Arrange
    client.set_cookie("message", "<script>alert(1)</script>")

    # Act
    response = client.get("/login")

    # Assert
    assert b"<script>" not in response.data
    assert b"&lt;script&gt;" in response.data


def test_other_users_todo_cannot_be_selected(client, user_store, login_as):
    """currentTodo ids are resolved against the logged-in user only."""
    # Arrange
    private = user_store.add_user("other").add_todo("private")
    login_as("sayima")
    client.set_cookie("currentTodo", str(private.id))

    # Act
    response = client.get("/viewTodo")

    # Assert
    assert_redirected_to(response, "/login")


def test_repeated_logins_do_not_accumulate_sessions(client, session_store):
    """Logging in again replaces the previous session instead of adding one."""
    # Arrange
    for _ in range(20):
        client.post("/login", data={"username": "sayima"})

    # Act
    client.get("/logout")

    # Assert
    assert len(session_store) == 0


def test_session_cookie_lifetime_matches_store(client):
    response = client.post("/login", data={"username": "sayima"})

    session_cookie = set_cookie_header(response, "sessionid")
    assert f"Max-Age={TestingConfig.SESSION_LIFETIME_SECONDS}" in session_cookie


class TestSecureDeployment:
    """With SESSION_COOKIE_SECURE on, every cookie the app sets is Secure."""

    @pytest.fixture(autouse=True)
    def _secure_cookies(self, app):
        app.config["SESSION_COOKIE_SECURE"] = True

    def test_session_cookie_is_secure(self, client):
        response = client.post("/login", data={"username": "sayima"})

        assert "Secure" in set_cookie_header(response, "sessionid")

    def test_flash_message_cookie_is_secure(self, client):
        response = client.post("/login", data={"username": "nobody"})

        assert "Secure" in set_cookie_header(response, "message")

    def test_current_todo_cookie_is_secure(self, client, todo_factory):
        # Arrange
        todo_factory(title="sort")

        # Act
        response = client.get("/todo-sort")

        # Assert
        assert "Secure" in set_cookie_header(response, "currentTodo")

    def test_current_todo_deletion_is_secure(self, client, selected_todo):
        response = client.get("/deleteTodo")

        assert "Secure" in set_cookie_header(response, "currentTodo")
