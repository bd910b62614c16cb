"""Board state shared by the key handling and rendering: lists, cursor and view."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from .storage import save_todos
from .types import Todo, View

DISPLAYED_COMPLETED_LIMIT = 10


class SaveFailed(Exception):
    """Raised when a todo list cannot be written; the program should quit."""


def _instant(moment: datetime) -> float:
    return moment.timestamp()


def _newest_first(todo: Todo) -> tuple[bool, float]:
    if todo.completed_at is None:
        return (True, 0.0)
    return (False, -_instant(todo.completed_at))


def swap_todos(todos: list[Todo], first: int, second: int) -> None:
    """Swap two items of a list in place."""
    todos[first], todos[second] = todos[second], todos[first]


@dataclass
class BoardState:
    """The three todo lists, the visible slice of completed todos and the cursor."""

    backlog: list[Todo] = field(default_factory=list)
    ready: list[Todo] = field(default_factory=list)
    completed: list[Todo] = field(default_factory=list)
    displayed_completed: list[Todo] = field(default_factory=list)
    cursor: int = 0
    current_view: View = View.BACKLOG
    save_error: str = ""

    def current_list(self) -> list[Todo]:
        """Return the list shown in the current view."""
        if self.current_view == View.BACKLOG:
            return self.backlog
        if self.current_view == View.READY:
            return self.ready
        return self.displayed_completed

    def update_displayed_completed(self) -> None:
        """Show the ten most recently completed todos, newest first."""
        ordered = sorted(self.completed, key=_newest_first)
        self.displayed_completed = ordered[:DISPLAYED_COMPLETED_LIMIT]

    def update_completed_todo(self, update_fn: Callable[[Todo], None]) -> None:
        """Apply update_fn to the completed todo under the cursor, then refresh the display."""
        if not 0 <= self.cursor < len(self.displayed_completed):
            return
        target = self.displayed_completed[self.cursor]
        for todo in self.completed:
            if todo.text == target.text and _instant(todo.created_at) == _instant(
                target.created_at
            ):
                update_fn(todo)
                break
        self.update_displayed_completed()

    def save(self, filename: str, todos: list[Todo]) -> None:
        """Write a list to disk; on failure record the error and raise SaveFailed."""
        try:
            save_todos(filename, todos)
        except OSError as exc:
            self.save_error = f"Failed to save {filename}: {exc}"
            raise SaveFailed(self.save_error) from exc

    def count_completed_today(self) -> int:
        """Count the todos completed on today's date."""
        today = datetime.now().date()
        return sum(
            1
            for todo in self.completed
            if todo.completed_at is not None and todo.completed_at.date() == today
        )