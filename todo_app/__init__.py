"""
Flask application factory module.

This module creates and configures the Flask application using
the factory pattern, allowing for different configurations
(development, testing, production).

The file system, user store and session store are passed in (or
built from configuration) per application instance and kept in
``app.extensions``, so two apps never share mutable state.
"""

import logging
import os

import click
from flask import Flask, current_app
from flask.cli import with_appcontext

from config import get_config
from todo_app.file_system import FileSystem
from todo_app.sessions import SessionStore
from todo_app.users import Users

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

EXTENSION_KEY = "todo_app"


def create_app(
    config_name: str | None = None,
    *,
    file_system: FileSystem | None = None,
    user_store: Users | None = None,
    session_store: SessionStore | None = None,
) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     If None, uses FLASK_ENV environment variable.
        file_system: Source of static pages and the users file.
                     Defaults to the local disk.
        user_store: Registered users. Defaults to a store loaded from
                    ``USER_STORE_PATH`` through *file_system*.
        session_store: Active login sessions. Defaults to an empty store.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info(f"Creating app with config: {config_class.__name__}")

    if file_system is None:
        file_system = FileSystem()
    if user_store is None:
        user_store = Users(app.config["USER_STORE_PATH"], file_system).load()
    if session_store is None:
        session_store = SessionStore(app.config["SESSION_LIFETIME_SECONDS"])

    app.extensions[EXTENSION_KEY] = {
        "file_system": file_system,
        "user_store": user_store,
        "session_store": session_store,
    }

    # Register blueprints
    from todo_app.routes.auth import auth_bp
    from todo_app.routes.pages import pages_bp
    from todo_app.routes.todos import todos_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(pages_bp)
    app.register_blueprint(todos_bp)

    register_error_handlers(app)
    app.cli.add_command(add_user_command)

    return app


def get_file_system() -> FileSystem:
    return current_app.extensions[EXTENSION_KEY]["file_system"]


def get_user_store() -> Users:
    return current_app.extensions[EXTENSION_KEY]["user_store"]


def get_session_store() -> SessionStore:
    return current_app.extensions[EXTENSION_KEY]["session_store"]


def page_path(name: str) -> str:
    """Return the location of the static page *name* under ``PUBLIC_DIR``."""
    return os.path.join(current_app.config["PUBLIC_DIR"], name)


def register_error_handlers(app: Flask) -> None:
    """Attach plain-text handlers for 404 and 500 responses."""

    @app.errorhandler(404)
    def not_found(error: Exception) -> tuple[str, int]:
        """Handle 404 Not Found errors."""
        return "Page not found", 404

    @app.errorhandler(500)
    def internal_error(error: Exception) -> tuple[str, int]:
        """Handle 500 Internal Server errors."""
        logger.error(f"Internal server error: {error}")
        return "Internal server error", 500


@click.command("add-user")
@click.argument("username")
@with_appcontext
def add_user_command(username: str) -> None:
    """Register USERNAME and save the users file."""
    username = username.strip()
    if not username:
        raise click.BadParameter("username must not be blank")

    store = get_user_store()
    if username in store:
        click.echo(f"User '{username}' already exists")
        return
    store.add_user(username)
    store.save()
    click.echo(f"Added user '{username}'")
