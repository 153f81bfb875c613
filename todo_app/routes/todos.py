"""
Todo routes for the logged-in user.

The todo being viewed or edited is selected with ``/todo-<title>``,
which stores its id in the ``currentTodo`` cookie. Item-level routes
act on that todo and address items by their id.

Routes:
    GET  /getAllTodo    - All of the user's todos as JSON
    POST /create        - Create a todo from the new-todo form
    GET  /todo-<title>  - Select a todo by title
    GET  /viewTodo      - The selected todo as JSON
    GET  /deleteTodo    - Delete the selected todo
    POST /editTodo      - Edit title, description or item labels
    POST /additem       - Append items
    POST /deleteitem    - Delete one item
    POST /mark          - Mark one item done
    POST /unmark        - Mark one item not done

Every mutation is written back to the users file before responding.
"""

from __future__ import annotations

import logging
import re
from functools import wraps

from flask import (
    Blueprint,
    Response,
    abort,
    current_app,
    g,
    jsonify,
    redirect,
    request,
    url_for,
)

from todo_app import get_user_store
from todo_app.models import Todo
from todo_app.routes.auth import login_required

logger = logging.getLogger(__name__)

todos_bp = Blueprint("todos", __name__)

LABEL_FIELD = re.compile(r"^label(\d+)$")


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def current_todo() -> Todo | None:
    """
    Resolve the ``currentTodo`` cookie against the logged-in user.

    Returns:
        The selected Todo, or None when there is no user, no cookie,
        or the cookie does not name one of the user's todos.
    """
    if g.user is None:
        return None
    raw_id = request.cookies.get(current_app.config["CURRENT_TODO_COOKIE"])
    if raw_id is None:
        return None
    try:
        todo_id = int(raw_id)
    except ValueError:
        logger.warning(f"Ignoring malformed currentTodo cookie {raw_id!r}")
        return None
    return g.user.get_todo(todo_id)


def todo_required(view_func):
    """
    Decorator passing the selected todo to the view as its first argument.

    Redirects home when no todo is selected. Apply below ``login_required``.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        todo = current_todo()
        if todo is None:
            logger.warning(f"{request.method} {request.path} - No todo selected")
            return redirect(url_for("pages.home"))
        return view_func(todo, *args, **kwargs)

    return wrapper


def form_int(field: str) -> int | None:
    """Parse an integer form field, returning None when absent or invalid."""
    try:
        return int(request.form.get(field, ""))
    except ValueError:
        return None


def form_labels(field: str = "items") -> list[str]:
    """Return the non-blank values of a repeated form field, stripped."""
    return [label.strip() for label in request.form.getlist(field) if label.strip()]


def save_users() -> None:
    get_user_store().save()


def redirect_to_view() -> Response:
    return redirect(url_for("pages.view"))


# -----------------------------------------------------------------------------
# Todo Endpoints
# -----------------------------------------------------------------------------

@todos_bp.route("/getAllTodo", methods=["GET"])
@login_required
def get_all_todos():
    """Return the logged-in user's todos as a JSON array."""
    logger.info(f"GET /getAllTodo - {len(g.user.todos)} todos for {g.user.username}")
    return jsonify([todo.to_dict() for todo in g.user.todos])


@todos_bp.route("/create", methods=["POST"])
@login_required
def create_todo():
    """
    Handle new todo form submission.

    Form Data:
        title: Todo title (required)
        description: Todo description
        items: Zero or more item labels

    Returns:
        Redirect to the home page.
    """
    title = request.form.get("title", "").strip()
    if not title:
        logger.warning("POST /create - Missing title, nothing created")
        return redirect(url_for("pages.home"))

    todo = g.user.add_todo(
        title,
        request.form.get("description", "").strip(),
        form_labels(),
    )
    save_users()

    logger.info(f"POST /create - Created todo {todo.id} with {len(todo.items)} items")
    return redirect(url_for("pages.home"))


@todos_bp.route("/todo-<path:title>", methods=["GET"])
def select_todo(title: str):
    """
    Select the todo named *title* for viewing.

    Anonymous visitors get a 404, since todo pages only exist for
    logged-in users.

    Returns:
        Redirect to the view page with the ``currentTodo`` cookie set,
        or home when the user has no todo with that title.
    """
    if g.user is None:
        abort(404)

    todo = g.user.find_todo(title)
    if todo is None:
        logger.warning(f"GET /todo-{title} - No such todo")
        return redirect(url_for("pages.home"))

    response = redirect_to_view()
    response.set_cookie(
        current_app.config["CURRENT_TODO_COOKIE"],
        str(todo.id),
        httponly=True,
        samesite=current_app.config["SESSION_COOKIE_SAMESITE"],
        secure=current_app.config["SESSION_COOKIE_SECURE"],
    )
    return response


@todos_bp.route("/viewTodo", methods=["GET"])
def view_todo():
    """Return the selected todo as JSON, or redirect to login."""
    todo = current_todo()
    if todo is None:
        return redirect(url_for("auth.login"))
    return jsonify(todo.to_dict())


@todos_bp.route("/deleteTodo", methods=["GET"])
@login_required
def delete_todo():
    """Delete the selected todo and clear the selection."""
    todo = current_todo()
    if todo is not None:
        g.user.remove_todo(todo.id)
        save_users()
        logger.info(f"GET /deleteTodo - Deleted todo {todo.id}")

    response = redirect(url_for("pages.home"))
    response.delete_cookie(
        current_app.config["CURRENT_TODO_COOKIE"],
        secure=current_app.config["SESSION_COOKIE_SECURE"],
    )
    return response


@todos_bp.route("/editTodo", methods=["POST"])
@login_required
@todo_required
def edit_todo(todo: Todo):
    """
    Apply edits to the selected todo.

    Form Data:
        title: New title (ignored when blank)
        description: New description
        label<N>: New label for item N; empty deletes the item

    Returns:
        Redirect to the view page.
    """
    title = request.form.get("title", "").strip()
    if title:
        todo.title = title
    if "description" in request.form:
        todo.description = request.form["description"].strip()

    for field, value in request.form.items():
        match = LABEL_FIELD.match(field)
        if match:
            todo.edit_item(int(match.group(1)), value.strip())

    save_users()
    logger.info(f"POST /editTodo - Updated todo {todo.id}")
    return redirect_to_view()


@todos_bp.route("/additem", methods=["POST"])
@login_required
@todo_required
def add_items(todo: Todo):
    """Append one item per non-blank ``items`` field."""
    for label in form_labels():
        todo.add_item(label)
    save_users()
    return redirect_to_view()


@todos_bp.route("/deleteitem", methods=["POST"])
@login_required
@todo_required
def delete_item(todo: Todo):
    item_id = form_int("id")
    if item_id is not None and todo.remove_item(item_id):
        save_users()
        logger.info(f"POST /deleteitem - Deleted item {item_id} of todo {todo.id}")
    return redirect_to_view()


@todos_bp.route("/mark", methods=["POST"])
@login_required
@todo_required
def mark_item(todo: Todo):
    item_id = form_int("id")
    if item_id is not None and todo.mark_item(item_id):
        save_users()
    return redirect_to_view()


@todos_bp.route("/unmark", methods=["POST"])
@login_required
@todo_required
def unmark_item(todo: Todo):
    item_id = form_int("id")
    if item_id is not None and todo.unmark_item(item_id):
        save_users()
    return redirect_to_view()
