import pytest

from todo_board.textinput import capitalize_first, handle_text_input, is_special_key


@pytest.mark.parametrize(
    "key, expected",
    [
        ("ctrl+c", True),
        ("up", True),
        ("down", True),
        ("left", False),
        ("right", False),
        ("ctrl+z", True),
        ("ctrl+a", False),
        ("ctrl+e", False),
        ("alt+enter", True),
        ("f1", True),
        ("f12", True),
        ("ctrl+x", True),
        ("alt+x", True),
        ("meta+x", True),
        ("a", False),
        ("5", False),
        (" ", False),
        ("enter", False),
        ("backspace", False),
        ("esc", False),
        ("home", False),
        ("end", False),
        ("delete", False),
    ],
)
def test_is_special_key(key, expected):
    assert is_special_key(key) is expected


@pytest.mark.parametrize(
    "key, text, cursor, expected_text, expected_cursor",
    [
        ("a", "hello", 5, "helloa", 6),
        ("x", "hello", 2, "hexllo", 3),
        ("world", "hello ", 6, "hello world", 11),
        ("backspace", "hello", 5, "hell", 4),
        ("backspace", "hello", 3, "helo", 2),
        ("backspace", "", 0, "", 0),
        ("backspace", "hello世", 6, "hello", 5),
        ("[abc", "test", 4, "testabc", 7),
        ("abc]", "test", 4, "testabc", 7),
        ("up", "hello", 5, "hello", 5),
        ("left", "hello", 5, "hello", 4),
        ("right", "hello", 2, "hello", 3),
        ("left", "hello", 0, "hello", 0),
        ("right", "hello", 5, "hello", 5),
        ("home", "hello", 3, "hello", 0),
        ("end", "hello", 2, "hello", 5),
        ("ctrl+a", "hello", 3, "hello", 0),
        ("ctrl+e", "hello", 2, "hello", 5),
        ("delete", "hello", 5, "hello", 5),
        ("delete", "hello", 2, "helo", 2),
        (" ", "hello", 5, "hello ", 6),
        ("5", "task", 4, "task5", 5),
    ],
)
def test_handle_text_input(key, text, cursor, expected_text, expected_cursor):
    assert handle_text_input(key, text, cursor) == (expected_text, expected_cursor)


def test_cursor_out_of_range_is_clamped():
    assert handle_text_input("a", "hi", 10) == ("hia", 3)
    assert handle_text_input("a", "hi", -4) == ("ahi", 1)


def test_bracketed_paste_with_both_markers():
    assert handle_text_input("[pasted]", "", 0) == ("pasted", 6)


@pytest.mark.parametrize(
    "value, expected",
    [("new task", "New task"), ("", ""), ("Already", "Already"), ("世界", "世界"), ("a", "A")],
)
def test_capitalize_first(value, expected):
    assert capitalize_first(value) == expected