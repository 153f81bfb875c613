"""
Session store and one-shot flash messages.

A login creates an opaque random token, stored in ``SessionStore`` and
handed to the browser in the ``sessionid`` cookie. Each request resolves
that cookie back to a username; logout clears the token on both sides.

Flash messages travel in a short-lived ``message`` cookie: the handler
that fails a login sets it, the next page render reads it once and
expires it in the same response.

Key Concepts Demonstrated:
- Explicit session-store abstraction (get / set / clear by token)
- Cryptographically random session identifiers via ``secrets``
- Cookie flags driven by app configuration
"""

from __future__ import annotations

import logging
import secrets
import time

from flask import Request, Response, current_app

logger = logging.getLogger(__name__)


class SessionStore:
    """
    In-memory mapping from session token to username.

    Each session lives for ``lifetime`` seconds from its creation; expired
    entries resolve to None and are dropped on the next lookup or login.
    A ``lifetime`` of None keeps sessions until they are cleared.
    """

    def __init__(self, lifetime: int | None = None, clock=time.time) -> None:
        self.lifetime = lifetime
        self._clock = clock
        self._sessions: dict[str, tuple[str, float | None]] = {}

    def create(self, username: str) -> str:
        """Start a session for *username* and return its token."""
        self.purge_expired()
        token = secrets.token_urlsafe(32)
        self.set(token, username)
        return token

    def get(self, token: str | None) -> str | None:
        if not token:
            return None
        entry = self._sessions.get(token)
        if entry is None:
            return None
        username, expires_at = entry
        if expires_at is not None and expires_at <= self._clock():
            del self._sessions[token]
            return None
        return username

    def set(self, token: str, username: str) -> None:
        expires_at = None
        if self.lifetime is not None:
            expires_at = self._clock() + self.lifetime
        self._sessions[token] = (username, expires_at)

    def clear(self, token: str | None) -> bool:
        """
        End the session identified by *token*.

        Returns:
            True if a session was removed.
        """
        if not token:
            return False
        return self._sessions.pop(token, None) is not None

    def purge_expired(self) -> int:
        """Drop every expired session and return how many were removed."""
        now = self._clock()
        expired = [
            token for token, (_, expires_at) in self._sessions.items()
            if expires_at is not None and expires_at <= now
        ]
        for token in expired:
            del self._sessions[token]
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session token cookie with the configured hardening flags."""
    response.set_cookie(
        current_app.config["SESSION_ID_COOKIE"],
        token,
        max_age=current_app.config["SESSION_LIFETIME_SECONDS"],
        httponly=current_app.config["SESSION_COOKIE_HTTPONLY"],
        samesite=current_app.config["SESSION_COOKIE_SAMESITE"],
        secure=current_app.config["SESSION_COOKIE_SECURE"],
    )


def expire_session_cookie(response: Response) -> None:
    """Overwrite the session cookie with an already-expired placeholder."""
    response.set_cookie(
        current_app.config["SESSION_ID_COOKIE"],
        "0",
        expires=0,
        httponly=current_app.config["SESSION_COOKIE_HTTPONLY"],
        samesite=current_app.config["SESSION_COOKIE_SAMESITE"],
        secure=current_app.config["SESSION_COOKIE_SECURE"],
    )


class FlashMessage:
    """
    One-time message carried in a cookie between two requests.

    Usage::

        FlashMessage.set(response, "Wrong username")   # failing request
        text = FlashMessage.read(request)              # next request
        FlashMessage.clear(response)
    """

    @staticmethod
    def _cookie_name() -> str:
        return current_app.config["MESSAGE_COOKIE"]

    @classmethod
    def set(cls, response: Response, text: str) -> None:
        response.set_cookie(
            cls._cookie_name(),
            text,
            max_age=current_app.config["MESSAGE_COOKIE_MAX_AGE"],
            httponly=True,
            samesite=current_app.config["SESSION_COOKIE_SAMESITE"],
            secure=current_app.config["SESSION_COOKIE_SECURE"],
        )

    @classmethod
    def read(cls, request: Request) -> str | None:
        return request.cookies.get(cls._cookie_name()) or None

    @classmethod
    def clear(cls, response: Response) -> None:
        response.delete_cookie(
            cls._cookie_name(),
            secure=current_app.config["SESSION_COOKIE_SECURE"],
        )
