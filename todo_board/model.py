"""The interactive board: key handling on top of the board state."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime

from .grouping import export_markdown_file
from .state import BoardState, SaveFailed, swap_todos
from .storage import (
    backup_completed_todos,
    create_backups,
    load_all_completed_todos,
    load_todos,
)
from .textinput import capitalize_first, handle_text_input
from .types import BACKLOG_FILE, COMPLETED_FILE, READY_FILE, Todo, View


def _now() -> datetime:
    return datetime.now().astimezone()


def _same_todo(first: Todo, second: Todo) -> bool:
    return (
        first.text == second.text
        and first.created_at.timestamp() == second.created_at.timestamp()
    )


@dataclass
class Model(BoardState):
    """Board state plus the interaction modes driven by key presses."""

    adding: bool = False
    new_todo: str = ""
    editing_description: bool = False
    new_description: str = ""
    renaming_todo: bool = False
    new_todo_name: str = ""
    showing_description: bool = False
    showing_all_descriptions: bool = False
    showing_commands: bool = False
    confirming_delete: bool = False
    navigating_descriptions: bool = False
    description_cursor: int = 0
    confirming_delete_desc: bool = False
    showing_prettify: bool = False
    message: str = ""
    text_input_cursor: int = 0
    width: int = 0
    height: int = 0

    def resize(self, width: int, height: int) -> None:
        """Record the terminal size."""
        self.width = width
        self.height = height

    def update(self, key: str) -> bool:
        """Handle one key press; return True when the program should quit.

        A failed save records save_error and asks to quit.
        """
        try:
            return self._handle_key(key)
        except SaveFailed:
            return True

    # -- helpers -----------------------------------------------------------

    def _cursor_valid(self) -> bool:
        return 0 <= self.cursor < len(self.current_list())

    def _editable_list(self) -> tuple[list[Todo], str] | None:
        if self.current_view == View.BACKLOG:
            return self.backlog, BACKLOG_FILE
        if self.current_view == View.READY:
            return self.ready, READY_FILE
        return None

    def _modify_current(self, change: Callable[[Todo], None]) -> None:
        """Apply change to the todo under the cursor and save its list."""
        if self.current_view == View.BACKLOG:
            change(self.backlog[self.cursor])
            self.save(BACKLOG_FILE, self.backlog)
        elif self.current_view == View.READY:
            change(self.ready[self.cursor])
            self.save(READY_FILE, self.ready)
        else:
            self.update_completed_todo(change)
            self.save(COMPLETED_FILE, self.completed)

    def _clamp_after_removal(self, remaining: int) -> None:
        if self.cursor >= remaining and self.cursor > 0:
            self.cursor -= 1

    def _reset_selection(self) -> None:
        self.cursor = 0
        self.message = ""
        self._leave_descriptions()

    def _leave_descriptions(self) -> None:
        self.showing_description = False
        self.navigating_descriptions = False
        self.description_cursor = 0

    # -- dispatch ----------------------------------------------------------

    def _handle_key(self, key: str) -> bool:
        if self.adding:
            self._key_adding(key)
            return False
        if self.editing_description:
            self._key_editing_description(key)
            return False
        if self.renaming_todo:
            self._key_renaming(key)
            return False
        if self.confirming_delete_desc:
            self._key_confirm_delete_description(key)
            return False
        if self.confirming_delete:
            self._key_confirm_delete(key)
            return False
        if self.navigating_descriptions and key != "e":
            self._key_navigating(key)
            return False
        return self._key_board(key)

    # -- text prompts ------------------------------------------------------

    def _key_adding(self, key: str) -> None:
        if key == "enter":
            if self.new_todo.strip():
                todo = Todo(text=capitalize_first(self.new_todo), created_at=_now())
                if self.current_view == View.BACKLOG:
                    self.backlog.append(todo)
                    self.save(BACKLOG_FILE, self.backlog)
                else:
                    self.ready.append(todo)
                    self.save(READY_FILE, self.ready)
                self.message = "Todo added!"
            self.adding = False
            self.new_todo = ""
        elif key == "esc":
            self.adding = False
            self.new_todo = ""
            self.message = "Cancelled"
        else:
            self.new_todo, self.text_input_cursor = handle_text_input(
                key, self.new_todo, self.text_input_cursor
            )

    def _key_editing_description(self, key: str) -> None:
        if key == "enter":
            if self._cursor_valid():
                trimmed = self.new_description.strip()
                if trimmed:

                    def apply(todo: Todo) -> None:
                        if self.navigating_descriptions and self.description_cursor < len(
                            todo.description
                        ):
                            todo.description[self.description_cursor] = trimmed
                        else:
                            todo.description.insert(0, trimmed)

                    self._modify_current(apply)
                    self.message = "Description saved!"
                    self.showing_description = True
            self.editing_description = False
            self.new_description = ""
        elif key == "esc":
            self.editing_description = False
            self.new_description = ""
            self.message = "Cancelled"
        else:
            self.new_description, self.text_input_cursor = handle_text_input(
                key, self.new_description, self.text_input_cursor
            )

    def _key_renaming(self, key: str) -> None:
        if key == "enter":
            if self.new_todo_name.strip() and self._cursor_valid():
                name = capitalize_first(self.new_todo_name)

                def rename(todo: Todo) -> None:
                    todo.text = name

                self._modify_current(rename)
                self.message = "Todo renamed!"
            self.renaming_todo = False
            self.new_todo_name = ""
        elif key == "esc":
            self.renaming_todo = False
            self.new_todo_name = ""
            self.message = "Cancelled"
        else:
            self.new_todo_name, self.text_input_cursor = handle_text_input(
                key, self.new_todo_name, self.text_input_cursor
            )

    # -- confirmations -----------------------------------------------------

    def _key_confirm_delete_description(self, key: str) -> None:
        if key == "y":
            if self._cursor_valid():
                index = self.description_cursor

                def remove(todo: Todo) -> None:
                    del todo.description[index]

                self._modify_current(remove)

                remaining = len(self.current_list()[self.cursor].description)
                if remaining == 0:
                    self.navigating_descriptions = False
                elif self.description_cursor >= remaining:
                    self.description_cursor = remaining - 1
                self.message = "Description deleted"
            self.confirming_delete_desc = False
        elif key in ("n", "esc"):
            self.confirming_delete_desc = False
            self.message = "Deletion cancelled"

    def _key_confirm_delete(self, key: str) -> None:
        if key == "y":
            editable = self._editable_list()
            if editable is not None:
                todos, filename = editable
                if 0 <= self.cursor < len(todos):
                    del todos[self.cursor]
                    self._clamp_after_removal(len(todos))
                    self.save(filename, todos)
                    self.message = "Todo deleted"
            elif 0 <= self.cursor < len(self.displayed_completed):
                target = self.displayed_completed[self.cursor]
                for index, todo in enumerate(self.completed):
                    if _same_todo(todo, target):
                        del self.completed[index]
                        break
                self.update_displayed_completed()
                self._clamp_after_removal(len(self.displayed_completed))
                self.save(COMPLETED_FILE, self.completed)
                self.message = "Todo deleted"
            self.confirming_delete = False
        elif key in ("n", "esc"):
            self.confirming_delete = False
            self.message = "Deletion cancelled"

    # -- description navigation -------------------------------------------

    def _key_navigating(self, key: str) -> None:
        if key == "j":
            if self._cursor_valid():
                todo = self.current_list()[self.cursor]
                if self.description_cursor < len(todo.description) - 1:
                    self.description_cursor += 1
            self.message = ""
        elif key == "k":
            if self.description_cursor > 0:
                self.description_cursor -= 1
            self.message = ""
        elif key == "d":
            self.confirming_delete_desc = True
            self.message = ""
        elif key in ("esc", "q"):
            self.message = ""
            self._leave_descriptions()

    # -- board keys --------------------------------------------------------

    def _key_board(self, key: str) -> bool:
        if key in ("q", "ctrl+c"):
            return True
        handler = self._BOARD_KEYS.get(key)
        if handler is not None:
            handler(self)
        return False

    def _enter(self) -> None:
        if not self._cursor_valid():
            return
        todo = self.current_list()[self.cursor]
        if todo.description:
            self.navigating_descriptions = True
            self.description_cursor = 0
            self.showing_description = True
            self.message = (
                "Description navigation mode "
                "(j/k to navigate, e to edit, d to delete, esc to exit)"
            )
        else:
            self.message = "No descriptions. Press 'e' to add one."

    def _down(self) -> None:
        if self.cursor < len(self.current_list()) - 1:
            self.cursor += 1
        self.message = ""
        self._leave_descriptions()

    def _up(self) -> None:
        if self.cursor > 0:
            self.cursor -= 1
        self.message = ""
        self._leave_descriptions()

    def _move_down(self) -> None:
        editable = self._editable_list()
        if editable is None:
            return
        todos, filename = editable
        if todos and self.cursor < len(todos) - 1:
            swap_todos(todos, self.cursor, self.cursor + 1)
            self.save(filename, todos)
            self.cursor += 1
            self.message = "Todo moved down"

    def _move_up(self) -> None:
        editable = self._editable_list()
        if editable is None:
            return
        todos, filename = editable
        if todos and self.cursor > 0:
            swap_todos(todos, self.cursor, self.cursor - 1)
            self.save(filename, todos)
            self.cursor -= 1
            self.message = "Todo moved up"

    def _move_to_top(self) -> None:
        editable = self._editable_list()
        if editable is None:
            return
        todos, filename = editable
        if todos and 0 < self.cursor < len(todos):
            todos.insert(0, todos.pop(self.cursor))
            self.cursor = 0
            self.save(filename, todos)
            self.message = "Todo moved to top"

    def _view_left(self) -> None:
        if self.current_view == View.READY:
            self.current_view = View.BACKLOG
            self._reset_selection()
        elif self.current_view == View.COMPLETED:
            self.current_view = View.READY
            self._reset_selection()

    def _view_right(self) -> None:
        if self.current_view == View.BACKLOG:
            self.current_view = View.READY
            self._reset_selection()
        elif self.current_view == View.READY:
            self.current_view = View.COMPLETED
            self.update_displayed_completed()
            self._reset_selection()

    def _start_adding(self) -> None:
        if self.current_view in (View.BACKLOG, View.READY):
            self.adding = True
            self.new_todo = ""
            self.text_input_cursor = 0
            self.message = ""

    def _start_delete(self) -> None:
        if self._cursor_valid():
            self.confirming_delete = True
            self.message = ""

    def _start_rename(self) -> None:
        if self._cursor_valid():
            self.renaming_todo = True
            self.new_todo_name = self.current_list()[self.cursor].text
            self.text_input_cursor = len(self.new_todo_name)
            self.message = ""

    def _complete(self) -> None:
        if self.current_view != View.READY or not 0 <= self.cursor < len(self.ready):
            return
        todo = self.ready.pop(self.cursor)
        todo.completed_at = _now()
        self.completed.append(todo)
        self.update_displayed_completed()
        self._clamp_after_removal(len(self.ready))
        self.save(READY_FILE, self.ready)
        self.save(COMPLETED_FILE, self.completed)
        self.message = "Todo completed!"

    def _undo_complete(self) -> None:
        if self.current_view != View.COMPLETED or not 0 <= self.cursor < len(
            self.displayed_completed
        ):
            return
        target = self.displayed_completed[self.cursor]
        for index, todo in enumerate(self.completed):
            if _same_todo(todo, target):
                del self.completed[index]
                self.ready.append(
                    replace(target, description=list(target.description), completed_at=None)
                )
                break
        self.update_displayed_completed()
        self._clamp_after_removal(len(self.displayed_completed))
        self.save(READY_FILE, self.ready)
        self.save(COMPLETED_FILE, self.completed)
        self.message = "Todo moved to ready!"

    def _backup_and_clear(self) -> None:
        if self.current_view != View.COMPLETED or not self.completed:
            return
        try:
            backup_file = backup_completed_todos(self.completed)
        except OSError as exc:
            self.message = f"Backup failed: {exc}"
            return
        self.completed = []
        self.update_displayed_completed()
        self.cursor = 0
        self.save(COMPLETED_FILE, self.completed)
        self.message = f"Backed up to {backup_file} and cleared completed todos!"

    def _to_ready(self) -> None:
        if self.current_view != View.BACKLOG or not 0 <= self.cursor < len(self.backlog):
            return
        self.ready.append(self.backlog.pop(self.cursor))
        self._clamp_after_removal(len(self.backlog))
        self.save(BACKLOG_FILE, self.backlog)
        self.save(READY_FILE, self.ready)
        self.message = "Todo moved to ready!"

    def _to_backlog(self) -> None:
        if self.current_view != View.READY or not 0 <= self.cursor < len(self.ready):
            return
        self.backlog.insert(0, self.ready.pop(self.cursor))
        self._clamp_after_removal(len(self.ready))
        self.save(READY_FILE, self.ready)
        self.save(BACKLOG_FILE, self.backlog)
        self.message = "Todo moved to backlog!"

    def _toggle_description(self) -> None:
        if self._cursor_valid():
            self.showing_description = not self.showing_description
            self.message = ""

    def _toggle_all_descriptions(self) -> None:
        self.showing_all_descriptions = not self.showing_all_descriptions
        self.message = ""

    def _start_edit_description(self) -> None:
        if not self._cursor_valid():
            return
        if self.navigating_descriptions:
            todo = self.current_list()[self.cursor]
            if self.description_cursor < len(todo.description):
                self.editing_description = True
                self.new_description = todo.description[self.description_cursor]
                self.text_input_cursor = len(self.new_description)
                self.message = ""
        else:
            self.editing_description = True
            self.new_description = ""
            self.text_input_cursor = 0
            self.message = ""

    def _toggle_commands(self) -> None:
        self.showing_commands = not self.showing_commands
        self.message = ""

    def _go_top(self) -> None:
        self._reset_selection()

    def _go_bottom(self) -> None:
        todos = self.current_list()
        if todos:
            self.cursor = len(todos) - 1
            self.message = ""
            self._leave_descriptions()

    def _toggle_prettify(self) -> None:
        if self.current_view == View.COMPLETED:
            self.showing_prettify = not self.showing_prettify
            self.message = ""
            self._leave_descriptions()

    def _export_markdown(self) -> None:
        if self.current_view != View.COMPLETED:
            return
        try:
            filename = export_markdown_file(load_all_completed_todos(), True)
        except OSError as exc:
            self.message = f"Failed to export markdown: {exc}"
        else:
            self.message = f"Exported to {filename}!"

    def _escape(self) -> None:
        if self.showing_description or self.showing_all_descriptions or self.showing_prettify:
            self.showing_description = False
            self.showing_all_descriptions = False
            self.showing_prettify = False
            self.message = ""

    _BOARD_KEYS: dict[str, Callable[[Model], None]] = {
        "enter": _enter,
        "j": _down,
        "k": _up,
        "J": _move_down,
        "K": _move_up,
        "t": _move_to_top,
        "h": _view_left,
        "l": _view_right,
        "a": _start_adding,
        "d": _start_delete,
        "n": _start_rename,
        "x": _complete,
        "u": _undo_complete,
        "B": _backup_and_clear,
        "r": _to_ready,
        "b": _to_backlog,
        "i": _toggle_description,
        "I": _toggle_all_descriptions,
        "e": _start_edit_description,
        "?": _toggle_commands,
        "g": _go_top,
        "G": _go_bottom,
        "p": _toggle_prettify,
        "P": _export_markdown,
        "esc": _escape,
    }


def initial_model() -> Model:
    """Back up the todo files, then load the board starting on the Ready view."""
    create_backups()
    model = Model(
        backlog=load_todos(BACKLOG_FILE),
        ready=load_todos(READY_FILE),
        completed=load_todos(COMPLETED_FILE),
        cursor=0,
        current_view=View.READY,
    )
    model.update_displayed_completed()
    return model