"""
Authentication routes and the login guard.

Every request first resolves the ``sessionid`` cookie to a registered
user and stores it on ``g.user`` (``None`` for anonymous visitors).
Protected views are wrapped in ``login_required``, which bounces
anonymous visitors to the login page.

Routes:
    GET  /        - Login page
    GET  /login   - Login page, showing a pending flash message once
    POST /login   - Start a session for a registered username
    GET  /logout  - End the session
"""

from __future__ import annotations

import logging
from functools import wraps

from flask import (
    Blueprint,
    abort,
    current_app,
    g,
    make_response,
    redirect,
    render_template_string,
    request,
    url_for,
)

from todo_app import get_file_system, get_session_store, get_user_store, page_path
from todo_app.sessions import (
    FlashMessage,
    expire_session_cookie,
    set_session_cookie,
)

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)

WRONG_USERNAME_MESSAGE = "Wrong username"


def _session_token() -> str | None:
    return request.cookies.get(current_app.config["SESSION_ID_COOKIE"])


@auth_bp.before_app_request
def load_logged_in_user() -> None:
    """Resolve the session cookie into ``g.user``."""
    g.user = None
    username = get_session_store().get(_session_token())
    if username is not None:
        g.user = get_user_store().get_user(username)


def login_required(view_func):
    """
    Decorator that requires a logged-in user for view routes.

    Args:
        view_func: The Flask view function to protect.

    Returns:
        The decorated view function.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        if g.user is None:
            return redirect(url_for("auth.login"))
        return view_func(*args, **kwargs)

    return wrapper


@auth_bp.route("/", methods=["GET"])
def index():
    """Serve the login page at the site root."""
    return login()


@auth_bp.route("/login", methods=["GET"])
def login():
    """
    Render the login page.

    A pending flash message is substituted into the page and its cookie
    expired in the same response. Logged-in users go straight home.

    Returns:
        The rendered login page, or a redirect to the home page.
    """
    if g.user is not None:
        return redirect(url_for("pages.home"))

    try:
        source = get_file_system().read_text(page_path("login.html"))
    except FileNotFoundError:
        logger.error(f"Login page missing from {current_app.config['PUBLIC_DIR']}")
        abort(404)

    message = FlashMessage.read(request)
    response = make_response(render_template_string(source, message=message or ""))
    if message is not None:
        FlashMessage.clear(response)
    return response


@auth_bp.route("/login", methods=["POST"])
def login_submit():
    """
    Handle login form submission.

    Form Data:
        username: Name of a registered user

    Returns:
        Redirect home with a fresh session cookie, or back to the login
        page with a flash message when the username is unknown.
    """
    username = request.form.get("username", "").strip()
    user = get_user_store().get_user(username) if username else None

    if user is None:
        logger.warning(f"POST /login - Rejected unknown username {username!r}")
        response = redirect(url_for("auth.login"))
        FlashMessage.set(response, WRONG_USERNAME_MESSAGE)
        return response

    sessions = get_session_store()
    sessions.clear(_session_token())
    token = sessions.create(user.username)
    logger.info(f"POST /login - Started session for {user.username}")

    response = redirect(url_for("pages.home"))
    set_session_cookie(response, token)
    return response


@auth_bp.route("/logout", methods=["GET"])
def logout():
    """
    End the current session and redirect to the login page.

    An expired session cookie is only sent when there was a session to end.
    """
    response = redirect(url_for("auth.login"))
    if g.user is None:
        return response

    get_session_store().clear(_session_token())
    expire_session_cookie(response)
    logger.info(f"GET /logout - Ended session for {g.user.username}")
    return response
