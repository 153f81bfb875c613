"""
Registered-user store.

``Users`` keeps the username -> User mapping in memory and round-trips
it through a JSON file of the form::

    {"users": [{"username": "...", "todos": [...]}]}

A missing file means an empty store; a malformed one is rejected at
load time so the application never starts with half-read data.
"""

import json
import logging

from todo_app.file_system import FileSystem
from todo_app.models import User

logger = logging.getLogger(__name__)


class UserStoreError(Exception):
    """Raised when the users file cannot be parsed."""


class Users:
    """
    In-memory user store backed by a JSON file.

    Attributes:
        path: Location of the users file.
    """

    def __init__(self, path: str, file_system: FileSystem | None = None) -> None:
        self.path = path
        self._fs = file_system or FileSystem()
        self._users: dict[str, User] = {}

    def load(self) -> "Users":
        """
        Replace the in-memory users with the contents of the file.

        Returns:
            This store, to allow ``Users(path).load()``.

        Raises:
            UserStoreError: If the file exists but is not a valid users file.
        """
        if not self._fs.exists(self.path):
            logger.info(f"No users file at {self.path}, starting empty")
            self._users = {}
            return self

        try:
            payload = json.loads(self._fs.read_text(self.path))
            users = [User.from_dict(entry) for entry in payload.get("users", [])]
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise UserStoreError(f"Invalid users file at '{self.path}': {exc}") from exc

        self._users = {user.username: user for user in users}
        logger.info(f"Loaded {len(self._users)} users from {self.path}")
        return self

    def save(self) -> None:
        payload = {"users": [user.to_dict() for user in self._users.values()]}
        self._fs.write_text(self.path, json.dumps(payload, indent=2))

    def add_user(self, username: str) -> User:
        """
        Register *username*, returning the existing user if already present.

        Args:
            username: Login name to register.

        Returns:
            The registered User.
        """
        user = self._users.get(username)
        if user is None:
            user = User(username)
            self._users[username] = user
            logger.info(f"Registered user {username}")
        return user

    def get_user(self, username: str) -> User | None:
        return self._users.get(username)

    def __contains__(self, username: object) -> bool:
        return username in self._users

    def __len__(self) -> int:
        return len(self._users)
