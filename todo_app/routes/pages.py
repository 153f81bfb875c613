"""
Static HTML page routes.

Pages are plain HTML files under ``PUBLIC_DIR``; the browser-side
scripts in them call the JSON routes in ``todos`` to fill in content.

Routes:
    GET /home    - List of the user's todos
    GET /create  - New todo form
    GET /view    - The selected todo
"""

import logging

from flask import Blueprint, Response, abort, redirect, url_for

from todo_app import get_file_system, page_path
from todo_app.routes.auth import login_required
from todo_app.routes.todos import current_todo

logger = logging.getLogger(__name__)

pages_bp = Blueprint("pages", __name__)


def serve_page(name: str) -> Response:
    """
    Return the static page *name* as an HTML response.

    Aborts with 404 when the file is not present.
    """
    try:
        content = get_file_system().read_text(page_path(name))
    except FileNotFoundError:
        logger.warning(f"Static page {name} not found")
        abort(404)
    return Response(content, mimetype="text/html")


@pages_bp.route("/home", methods=["GET"])
@login_required
def home():
    logger.info("GET /home - Rendering todo list page")
    return serve_page("home.html")


@pages_bp.route("/create", methods=["GET"])
@login_required
def create_form():
    logger.info("GET /create - Rendering new todo form")
    return serve_page("create.html")


@pages_bp.route("/view", methods=["GET"])
@login_required
def view():
    """
    Render the page for the selected todo.

    Returns:
        The view page, or a redirect home when no todo is selected.
    """
    if current_todo() is None:
        return redirect(url_for("pages.home"))
    logger.info("GET /view - Rendering todo page")
    return serve_page("view.html")
