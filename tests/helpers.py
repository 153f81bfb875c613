"""Assertion helpers for redirects and Set-Cookie headers."""

from __future__ import annotations


def set_cookie_header(response, name: str) -> str | None:
    """Return the Set-Cookie header for cookie *name*, or None."""
    for header in response.headers.getlist("Set-Cookie"):
        if header.startswith(f"{name}="):
            return header
    return None


def assert_redirected_to(response, path: str) -> None:
    assert response.status_code == 302
    assert response.headers["Location"].endswith(path)


def assert_no_cookie(response, name: str) -> None:
    assert set_cookie_header(response, name) is None


def assert_expiring_cookie(response, name: str, value: str) -> None:
    """Assert *name* is set to *value* with a bounded lifetime."""
    header = set_cookie_header(response, name)
    assert header is not None
    assert value in header
    assert "Max-Age=" in header or "Expires=" in header
