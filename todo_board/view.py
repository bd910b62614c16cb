"""Rendering of the board and the prettified completed view as styled text."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from . import styles
from .grouping import format_day_header, format_week_range, group_todos_by_week
from .types import Todo, View

if TYPE_CHECKING:
    from .model import Model

DEFAULT_WIDTH = 80
_RESERVED_WIDTH = 35
_INPUT_CURSOR_MARK = "│"

_MONTH_ABBR = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_SUCCESS_WORDS = ("added", "completed", "moved", "updated", "renamed", "backed up")
_ERROR_WORDS = ("cancelled", "failed", "error")

_TABS = ((View.BACKLOG, "BACKLOG"), (View.READY, "READY"), (View.COMPLETED, "COMPLETED"))

_COMMAND_LINES = {
    View.COMPLETED: "d: delete  u: undo complete  p: prettify view  "
    "P: export markdown  B: backup and clear",
    View.READY: "a: add  d: delete  x: mark complete  b: move to backlog",
    View.BACKLOG: "a: add  d: delete  r: move to ready",
}


def _clamp(cursor_pos: int, length: int) -> int:
    return max(0, min(cursor_pos, length))


def _clock(moment: datetime) -> str:
    return f"{moment.hour:02d}:{moment.minute:02d}"


def _short_stamp(moment: datetime) -> str:
    return f"{_MONTH_ABBR[moment.month - 1]} {moment.day}, {_clock(moment)}"


def _text_width(model: Model) -> int:
    width = model.width if model.width > 0 else DEFAULT_WIDTH
    return width - _RESERVED_WIDTH


def _split_at_cursor(text: str, cursor_pos: int) -> str:
    return (
        styles.TODO_TEXT.render(text[:cursor_pos])
        + styles.INPUT_CURSOR.render(_INPUT_CURSOR_MARK)
        + styles.TODO_TEXT.render(text[cursor_pos:])
    )


def wrap_text(text: str, max_width: int) -> list[str]:
    """Wrap text at spaces and tabs so lines fit max_width; long words are not split."""
    if max_width <= 0 or len(text) <= max_width:
        return [text]

    lines: list[str] = []
    line = ""
    word = ""
    last = len(text) - 1
    for index, char in enumerate(text):
        word += char
        if char in (" ", "\t") or index == last:
            candidate = line + word
            if len(candidate) > max_width and line:
                lines.append(line)
                line = word
            else:
                line = candidate
            word = ""
    if line:
        lines.append(line)
    return lines


def render_colored_text_with_cursor(text: str, cursor_pos: int) -> str:
    """Render text with an input cursor mark at cursor_pos (clamped to the text)."""
    return _split_at_cursor(text, _clamp(cursor_pos, len(text)))


def render_wrapped_text_with_cursor(text: str, cursor_pos: int, max_width: int) -> list[str]:
    """Wrap text and render each line, placing the cursor mark on the line holding it."""
    if max_width <= 0:
        return [render_colored_text_with_cursor(text, cursor_pos)]

    cursor_pos = _clamp(cursor_pos, len(text))
    wrapped = wrap_text(text, max_width)
    if not wrapped:
        return [styles.INPUT_CURSOR.render(_INPUT_CURSOR_MARK)]

    result = []
    consumed = 0
    for line in wrapped:
        if consumed <= cursor_pos <= consumed + len(line):
            result.append(_split_at_cursor(line, cursor_pos - consumed))
        else:
            result.append(styles.TODO_TEXT.render(line))
        consumed += len(line)
    return result


def _description_lines(text: str, width: int, first_prefix: str, rest_prefix: str) -> list[str]:
    rendered = []
    for number, line in enumerate(wrap_text(text, width)):
        if number == 0:
            rendered.append(first_prefix + styles.DESCRIPTION.render("└─ " + line) + "\n")
        else:
            rendered.append(rest_prefix + styles.DESCRIPTION.render("   " + line) + "\n")
    return rendered


def render_prettify_view(model: Model, todos: list[Todo], title: str, exit_key: str) -> str:
    """Render completed todos grouped by week and day, with all their descriptions."""
    max_text_width = _text_width(model)
    out = ["  " + styles.ACTIVE_TAB.render(title) + "\n\n"]

    if not todos:
        out.append("  " + styles.INFO_MESSAGE.render("No completed todos") + "\n\n")
        out.append(
            "  "
            + styles.HELP_TEXT.render(f"Press {exit_key} to exit prettify view")
            + "\n\n"
        )
        return "".join(out)

    for week in group_todos_by_week(todos):
        todo_count = sum(len(day.todos) for day in week.days)
        week_header = (
            f"Week of {format_week_range(week.week_start, week.week_end)} ({todo_count} todos)"
        )
        out.append("  " + styles.HEADER.render(week_header) + "\n")
        out.append("  " + "─" * len(week_header) + "\n\n")

        for day in week.days:
            out.append(
                "    "
                + styles.COUNT.render(format_day_header(day.date))
                + " "
                + styles.HELP_TEXT.render(f"({len(day.todos)} todos)")
                + "\n"
            )
            for todo in day.todos:
                timestamp = styles.TIMESTAMP.render(f"[{_clock(todo.completed_at)}]")
                lines = wrap_text(todo.text, max_text_width)
                if lines:
                    first, *rest = lines
                    out.append(f"      • {styles.TODO_TEXT.render(first)} {timestamp}\n")
                    out.extend(f"        {styles.TODO_TEXT.render(line)}\n" for line in rest)
                for description in todo.description:
                    out.extend(
                        _description_lines(
                            description, max_text_width - 5, "        ", "        "
                        )
                    )
            out.append("\n")
        out.append("\n")

    out.append(
        "  "
        + styles.HELP_TEXT.render(f"Press {exit_key} to exit prettify view, q to quit")
        + "\n\n"
    )
    if model.message:
        out.append("  " + styles.INFO_MESSAGE.render(model.message) + "\n")
    return "".join(out)


def _render_todo(model: Model, index: int, todo: Todo, max_text_width: int) -> list[str]:
    out = []
    selected = index == model.cursor
    cursor = styles.CURSOR.render(">") if selected else " "
    indicator = f" 📄×{len(todo.description)}" if todo.description else ""

    if model.current_view == View.COMPLETED and todo.completed_at is not None:
        stamp_time = todo.completed_at
    else:
        stamp_time = todo.created_at
    timestamp = styles.TIMESTAMP.render(f"[{_short_stamp(stamp_time)}]")

    lines = wrap_text(todo.text, max_text_width)
    if lines:
        lines[-1] += indicator
        first, *rest = lines
        out.append(f"  {cursor} {styles.TODO_TEXT.render(first)} {timestamp}\n")
        out.extend(f"     {styles.TODO_TEXT.render(line)}\n" for line in rest)

    if todo.description and ((model.showing_description and selected) or model.showing_all_descriptions):
        for desc_index, description in enumerate(todo.description):
            if model.navigating_descriptions and selected and desc_index == model.description_cursor:
                desc_cursor = styles.CURSOR.render("►") + " "
            else:
                desc_cursor = "  "
            out.extend(
                _description_lines(
                    description, max_text_width - 5, "     " + desc_cursor, "     " + "   "
                )
            )
    return out


def _render_prompt(label: str, text: str, cursor_pos: int, max_width: int) -> list[str]:
    lines = render_wrapped_text_with_cursor(text, cursor_pos, max_width)
    indent = " " * (len(label) + 3)
    out = ["  " + styles.PROMPT.render(label) + " " + lines[0] + "\n"]
    out.extend(indent + line + "\n" for line in lines[1:])
    out.append(
        "  "
        + styles.HELP_TEXT.render("(press Enter to save, Esc to cancel, arrows to navigate)")
        + "\n\n"
    )
    return out


def _message_style(message: str) -> styles.Style:
    lowered = message.lower()
    if any(word in lowered for word in _SUCCESS_WORDS):
        return styles.SUCCESS_MESSAGE
    if any(word in lowered for word in _ERROR_WORDS):
        return styles.ERROR_MESSAGE
    return styles.INFO_MESSAGE


def render(model: Model) -> str:
    """Render the whole board for the model's current view and mode."""
    if model.current_view == View.COMPLETED and model.showing_prettify:
        return render_prettify_view(model, model.completed, "COMPLETED", "p")

    max_text_width = _text_width(model)
    out = []

    tabs = [
        (styles.ACTIVE_TAB if model.current_view == view else styles.INACTIVE_TAB).render(label)
        for view, label in _TABS
    ]
    out.append("  " + "  ".join(tabs) + "\n\n")

    out.append(
        "  "
        + styles.HEADER.render("Completed today:")
        + " "
        + styles.COUNT.render(str(model.count_completed_today()))
        + "\n\n"
    )

    todos = model.current_list()
    if not todos:
        out.append("  " + styles.INFO_MESSAGE.render("No todos") + "\n")
    else:
        for index, todo in enumerate(todos):
            out.extend(_render_todo(model, index, todo, max_text_width))

    out.append("\n")

    input_width = max_text_width + 10
    if model.adding:
        out.extend(_render_prompt("Add new todo:", model.new_todo, model.text_input_cursor, input_width))
    elif model.editing_description:
        out.extend(
            _render_prompt(
                "Edit description:", model.new_description, model.text_input_cursor, input_width
            )
        )
    elif model.renaming_todo:
        out.extend(
            _render_prompt("Rename todo:", model.new_todo_name, model.text_input_cursor, input_width)
        )
    elif model.confirming_delete:
        out.append(
            "  "
            + styles.ERROR_MESSAGE.render("Are you sure you want to delete this todo? (y/n)")
            + "\n\n"
        )
    elif model.confirming_delete_desc:
        out.append(
            "  "
            + styles.ERROR_MESSAGE.render(
                "Are you sure you want to delete this description? (y/n)"
            )
            + "\n\n"
        )
    elif model.showing_commands:
        view_commands = _COMMAND_LINES.get(model.current_view)
        if view_commands is None:
            raise ValueError(f"invalid view: {model.current_view!r}")
        out.append("  " + styles.HEADER.render("Commands:") + "\n")
        out.append(
            "  "
            + styles.COMMAND.render(
                "j/k: move down/up  g/G: go to top/bottom  J/K: reorder (backlog/ready)  "
                "t: move to top (backlog/ready)  h/l: switch views"
            )
            + "\n"
        )
        out.append("  " + styles.COMMAND.render(view_commands) + "\n")
        out.append(
            "  "
            + styles.COMMAND.render(
                "i: toggle description  I: toggle all descriptions  e: add description  "
                "enter: navigate descriptions  n: rename  ?: toggle help  q: quit"
            )
            + "\n\n"
        )
    else:
        out.append("  " + styles.HELP_TEXT.render("Press ? for help") + "\n\n")

    if model.message:
        out.append("  " + _message_style(model.message).render(model.message) + "\n")

    return "".join(out)