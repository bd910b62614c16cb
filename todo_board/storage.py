"""Persistence of todo lists as JSON-lines files in the working directory."""

from __future__ import annotations

import glob
import os
import shutil
from collections.abc import Iterable
from datetime import datetime

from .types import BACKLOG_FILE, COMPLETED_FILE, READY_FILE, Todo

BACKUP_DIR = "backup"
BACKUP_PATTERN = "todo_completed_backup_*.txt"


def load_todos(filename: str) -> list[Todo]:
    """Read todos from a file; a missing or unreadable file gives an empty list.

    Lines that are not valid todo JSON are taken as plain-text todos.
    """
    try:
        with open(filename, encoding="utf-8", errors="replace", newline="") as handle:
            content = handle.read()
    except OSError:
        return []

    todos = []
    for raw in content.split("\n"):
        line = raw.strip()
        if not line:
            continue
        try:
            todo = Todo.from_json(line)
        except ValueError:
            todo = Todo(text=line, created_at=datetime.now().astimezone())
        todos.append(todo)
    return todos


def save_todos(filename: str, todos: Iterable[Todo]) -> None:
    """Write todos one JSON object per line, replacing the file."""
    with open(filename, "w", encoding="utf-8", newline="") as handle:
        for todo in todos:
            handle.write(todo.to_json() + "\n")


def backup_completed_todos(todos: list[Todo]) -> str:
    """Save todos to a dated backup file and return its name."""
    date_str = datetime.now().strftime("%Y-%m-%d")
    filename = f"todo_completed_backup_{date_str}_{len(todos)}.txt"
    save_todos(filename, todos)
    return filename


def find_backup_files() -> list[str]:
    """Return the completed-todo backup files in the working directory, sorted."""
    return sorted(glob.glob(BACKUP_PATTERN))


def load_all_completed_todos() -> list[Todo]:
    """Load the completed file followed by every backup file."""
    todos = load_todos(COMPLETED_FILE)
    for backup in find_backup_files():
        todos.extend(load_todos(backup))
    return todos


def create_backups() -> None:
    """Copy each existing todo file into the backup directory with a .bak suffix."""
    os.makedirs(BACKUP_DIR, exist_ok=True)
    for filename in (BACKLOG_FILE, READY_FILE, COMPLETED_FILE):
        if not os.path.exists(filename):
            continue
        shutil.copyfile(filename, os.path.join(BACKUP_DIR, filename + ".bak"))