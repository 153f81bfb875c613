"""
Shared pytest fixtures for the Todo List test suite.

Every test gets its own application wired to a fresh in-memory file
system, user store and session store, so no state leaks between tests
and tests never touch files on disk.

Key Concepts Demonstrated:
- Dependency injection of collaborators into the app factory
- Factory fixtures (``login_as``, ``todo_factory``)
- Test data generation with Faker
"""

import os

import pytest
from faker import Faker

# Set testing environment before importing app
os.environ["FLASK_ENV"] = "testing"

from config import TestingConfig
from todo_app import create_app
from todo_app.models import Todo, User
from todo_app.sessions import SessionStore
from todo_app.users import Users
from tests.mocks.file_system import MockFileSystem


# Initialize Faker for generating test data
fake = Faker()

REGISTERED_USERNAME = "sayima"

STATIC_PAGES = {
    "login.html": "Login {{ message }}",
    "home.html": "Log Out",
    "create.html": "Log Out",
    "view.html": "Log Out Delete",
}


# -----------------------------------------------------------------------------
# Collaborator Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def file_system() -> MockFileSystem:
    """Provide a mock file system pre-loaded with the static pages."""
    fs = MockFileSystem()
    for name, content in STATIC_PAGES.items():
        fs.add_file(os.path.join(TestingConfig.PUBLIC_DIR, name), content)
    return fs


@pytest.fixture
def user_store(file_system) -> Users:
    """Provide a user store with one registered user."""
    store = Users(TestingConfig.USER_STORE_PATH, file_system)
    store.add_user(REGISTERED_USERNAME)
    return store


@pytest.fixture
def session_store() -> SessionStore:
    return SessionStore(TestingConfig.SESSION_LIFETIME_SECONDS)


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def app(file_system, user_store, session_store):
    """
    Create an application instance wired to the test collaborators.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app(
        "testing",
        file_system=file_system,
        user_store=user_store,
        session_store=session_store,
    )
    yield application


@pytest.fixture
def client(app):
    """
    Create a test client for making HTTP requests.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


# -----------------------------------------------------------------------------
# Session and Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def login_as(client, user_store, session_store):
    """
    Factory fixture that logs the test client in as a given user.

    The user is registered if needed and a session cookie is placed in
    the client's cookie jar, exactly as a successful POST /login would.

    Example:
        def test_something(client, login_as):
            user = login_as("alice")
            client.get("/home")
    """

    def _login(username: str = REGISTERED_USERNAME) -> User:
        user = user_store.add_user(username)
        token = session_store.create(username)
        client.set_cookie(TestingConfig.SESSION_ID_COOKIE, token)
        return user

    return _login


@pytest.fixture
def logged_in_user(login_as) -> User:
    """Log the client in as the registered user and return that user."""
    return login_as()


@pytest.fixture
def select_todo(client):
    """Return a function that sets the ``currentTodo`` cookie for a todo."""

    def _select(todo: Todo) -> None:
        client.set_cookie(TestingConfig.CURRENT_TODO_COOKIE, str(todo.id))

    return _select


@pytest.fixture
def todo_factory(logged_in_user):
    """
    Factory fixture that adds todos to the logged-in user.

    Args:
        logged_in_user: The user receiving the todos.

    Returns:
        Function creating and returning Todo instances.
    """

    def _create_todo(
        title: str | None = None,
        description: str | None = None,
        items: list[str] | None = None
    ) -> Todo:
        return logged_in_user.add_todo(
            title or fake.word(),
            description if description is not None else fake.sentence(),
            items if items is not None else [],
        )

    return _create_todo


@pytest.fixture
def selected_todo(todo_factory, select_todo) -> Todo:
    """A todo with two items, selected as the current todo."""
    todo = todo_factory(title="groceries", items=["milk", "bread"])
    select_todo(todo)
    return todo
