"""
Domain models for the Todo List application.

This module defines the in-memory object graph the route handlers
mutate: a User owns an ordered list of Todo objects, and each Todo
owns an ordered list of Item objects. Todos and items carry integer
ids handed out from per-owner counters; ids are never reused, so
deleting one entry leaves the ids of its siblings untouched.
"""

from typing import Any, Iterable


def _next_id(entries: list) -> int:
    """Return the id following the highest id in *entries*."""
    return max((entry.id for entry in entries), default=-1) + 1


class Item:
    """
    A single checkable entry within a Todo.

    Attributes:
        id: Identifier, unique within the owning todo.
        label: Text shown for the item.
        done: Whether the item has been marked complete.
    """

    def __init__(self, item_id: int, label: str, done: bool = False) -> None:
        self.id = item_id
        self.label = label
        self.done = done

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label, "done": self.done}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Item":
        return cls(int(data["id"]), data.get("label", ""), bool(data.get("done", False)))

    def __repr__(self) -> str:
        """Return string representation of the item."""
        return f"<Item {self.id}: {self.label}>"


class Todo:
    """
    A named list of items with a title and description.

    Attributes:
        id: Identifier, unique within the owning user.
        title: Short title of the list.
        description: Free-form description.
        items: Items in insertion order.
    """

    def __init__(self, todo_id: int, title: str, description: str = "") -> None:
        self.id = todo_id
        self.title = title
        self.description = description
        self.items: list[Item] = []
        self._next_item_id = 0

    def add_item(self, label: str) -> Item:
        """Append a new, not-done item and return it."""
        item = Item(self._next_item_id, label)
        self._next_item_id += 1
        self.items.append(item)
        return item

    def get_item(self, item_id: int) -> Item | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def remove_item(self, item_id: int) -> bool:
        """
        Remove the item with the given id.

        Returns:
            True if an item was removed, False if no item had that id.
        """
        item = self.get_item(item_id)
        if item is None:
            return False
        self.items.remove(item)
        return True

    def edit_item(self, item_id: int, label: str) -> bool:
        """
        Relabel an item; an empty label deletes it.

        Returns:
            True if the item existed, False otherwise.
        """
        if not label:
            return self.remove_item(item_id)
        item = self.get_item(item_id)
        if item is None:
            return False
        item.label = label
        return True

    def mark_item(self, item_id: int) -> bool:
        return self._set_done(item_id, True)

    def unmark_item(self, item_id: int) -> bool:
        return self._set_done(item_id, False)

    def _set_done(self, item_id: int, done: bool) -> bool:
        item = self.get_item(item_id)
        if item is None:
            return False
        item.done = done
        return True

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the todo to a dictionary representation.

        Returns:
            Dictionary containing the todo fields and its items.
        """
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Todo":
        todo = cls(int(data["id"]), data.get("title", ""), data.get("description", ""))
        todo.items = [Item.from_dict(item) for item in data.get("items", [])]
        todo._next_item_id = _next_id(todo.items)
        return todo

    def __repr__(self) -> str:
        """Return string representation of the todo."""
        return f"<Todo {self.id}: {self.title}>"


class User:
    """
    A registered user and the todos they own.

    Attributes:
        username: Unique login name.
        todos: Todos in creation order.
    """

    def __init__(self, username: str) -> None:
        self.username = username
        self.todos: list[Todo] = []
        self._next_todo_id = 0

    def add_todo(
        self,
        title: str,
        description: str = "",
        items: Iterable[str] = ()
    ) -> Todo:
        """
        Create a todo, append it to this user and return it.

        Args:
            title: Title of the new todo.
            description: Optional description.
            items: Labels of the initial items, in order.

        Returns:
            The created Todo.
        """
        todo = Todo(self._next_todo_id, title, description)
        self._next_todo_id += 1
        for label in items:
            todo.add_item(label)
        self.todos.append(todo)
        return todo

    def get_todo(self, todo_id: int) -> Todo | None:
        for todo in self.todos:
            if todo.id == todo_id:
                return todo
        return None

    def find_todo(self, title: str) -> Todo | None:
        """Return the first todo with the given title, or None."""
        for todo in self.todos:
            if todo.title == title:
                return todo
        return None

    def remove_todo(self, todo_id: int) -> bool:
        todo = self.get_todo(todo_id)
        if todo is None:
            return False
        self.todos.remove(todo)
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "username": self.username,
            "todos": [todo.to_dict() for todo in self.todos],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        user = cls(data["username"])
        user.todos = [Todo.from_dict(todo) for todo in data.get("todos", [])]
        user._next_todo_id = _next_id(user.todos)
        return user

    def __repr__(self) -> str:
        """Return string representation of the user."""
        return f"<User {self.username}>"
