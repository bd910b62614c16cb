"""Line-editing helpers for the text prompts."""

from __future__ import annotations

_SPECIAL_KEYS = frozenset(
    {
        "ctrl+c", "ctrl+d", "ctrl+z", "ctrl+k", "ctrl+u",
        "up", "down",
        "pgup", "pgdown",
        "insert",
        "f1", "f2", "f3", "f4", "f5", "f6", "f7", "f8", "f9", "f10", "f11", "f12",
        "alt+enter", "shift+enter",
    }
)

# These two are editing keys (home / end) rather than control sequences.
_EDITING_CTRL_KEYS = frozenset({"ctrl+a", "ctrl+e"})


def is_special_key(key: str) -> bool:
    """True for keys that must never be inserted into the text being edited."""
    if key in _SPECIAL_KEYS:
        return True
    if key in _EDITING_CTRL_KEYS:
        return False
    return key.startswith(("ctrl+", "alt+", "meta+"))


def capitalize_first(s: str) -> str:
    """Upper-case the first character and leave the rest untouched."""
    if not s:
        return s
    return s[0].upper()[0] + s[1:]


def handle_text_input(key: str, text: str, cursor: int) -> tuple[str, int]:
    """Apply one key press to a text field and return the new text and cursor."""
    cursor = max(0, min(cursor, len(text)))

    if key == "left":
        return text, max(cursor - 1, 0)
    if key == "right":
        return text, min(cursor + 1, len(text))
    if key in ("home", "ctrl+a"):
        return text, 0
    if key in ("end", "ctrl+e"):
        return text, len(text)
    if key == "backspace":
        if cursor > 0:
            return text[: cursor - 1] + text[cursor:], cursor - 1
        return text, cursor
    if key == "delete":
        if cursor < len(text):
            return text[:cursor] + text[cursor + 1 :], cursor
        return text, cursor
    if is_special_key(key):
        return text, cursor

    # Bracketed paste arrives wrapped in brackets.
    inserted = key.removeprefix("[").removesuffix("]")
    return text[:cursor] + inserted + text[cursor:], cursor + len(inserted)