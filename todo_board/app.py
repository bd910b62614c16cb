"""Terminal front end: runs the board full-screen and feeds it key presses."""

from __future__ import annotations

import argparse
import sys
from typing import Any

from blessed import Terminal

from .model import Model, initial_model
from .view import render

_NAMED_KEYS = {
    "KEY_ENTER": "enter",
    "KEY_ESCAPE": "esc",
    "KEY_BACKSPACE": "backspace",
    "KEY_DELETE": "delete",
    "KEY_LEFT": "left",
    "KEY_RIGHT": "right",
    "KEY_UP": "up",
    "KEY_DOWN": "down",
    "KEY_HOME": "home",
    "KEY_END": "end",
    "KEY_PGUP": "pgup",
    "KEY_PGDOWN": "pgdown",
    "KEY_INSERT": "insert",
    "KEY_TAB": "tab",
    "KEY_BTAB": "shift+tab",
}

_CONTROL_CHARS = {
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x08": "backspace",
    "\x7f": "backspace",
    "\x1b": "esc",
    "\x00": "ctrl+@",
    "\x1c": "ctrl+\\",
    "\x1d": "ctrl+]",
    "\x1e": "ctrl+^",
    "\x1f": "ctrl+_",
}

_POLL_SECONDS = 0.25


def key_name(keystroke: Any) -> str:
    """Name a key press the way the board's key handling expects ("enter", "ctrl+c", "a")."""
    name = getattr(keystroke, "name", None)
    if name:
        mapped = _NAMED_KEYS.get(name)
        if mapped is not None:
            return mapped
        if name.startswith("KEY_F") and name[5:].isdigit():
            return "f" + name[5:]
        return name.removeprefix("KEY_").lower()

    text = str(keystroke)
    if not text:
        return ""
    if len(text) == 1:
        if text in _CONTROL_CHARS:
            return _CONTROL_CHARS[text]
        code = ord(text)
        if 1 <= code <= 26:
            return "ctrl+" + chr(code + ord("a") - 1)
        return text
    if len(text) == 2 and text[0] == "\x1b":
        return "alt+" + key_name(text[1])
    return text


def _run(term: Terminal, model: Model) -> None:
    size = None
    dirty = True
    with term.fullscreen(), term.cbreak(), term.hidden_cursor():
        while True:
            current = (term.width, term.height)
            if current != size:
                size = current
                model.resize(*current)
                dirty = True
            if dirty:
                print(term.home + term.clear + render(model), end="", flush=True)
                dirty = False

            keystroke = term.inkey(timeout=_POLL_SECONDS)
            if not keystroke:
                continue
            name = key_name(keystroke)
            if not name:
                continue
            if model.update(name):
                return
            dirty = True


def main(argv: list[str] | None = None) -> int:
    """Run the todo board in the terminal; return the process exit status."""
    parser = argparse.ArgumentParser(
        prog="todo-board",
        description="Keyboard-driven backlog / ready / completed todo board.",
    )
    parser.parse_args(argv)

    try:
        model = initial_model()
    except OSError as exc:
        print(f"Error creating backups: {exc}", file=sys.stderr)
        return 1

    try:
        _run(Terminal(), model)
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if model.save_error:
        print(f"Error: {model.save_error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())