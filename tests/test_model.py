import os
from datetime import datetime, timedelta

import pytest

from todo_board.model import Model, initial_model
from todo_board.storage import load_todos, save_todos
from todo_board.types import BACKLOG_FILE, COMPLETED_FILE, READY_FILE, Todo, View


@pytest.fixture(autouse=True)
def _work_in_tmp(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)


def now():
    return datetime.now().astimezone()


def press(model, *keys):
    results = [model.update(key) for key in keys]
    return results[-1]


def test_cursor_navigation():
    m = Model(
        current_view=View.BACKLOG,
        backlog=[Todo("task1"), Todo("task2"), Todo("task3")],
    )
    press(m, "j")
    assert m.cursor == 1
    press(m, "j")
    assert m.cursor == 2
    press(m, "j")
    assert m.cursor == 2
    press(m, "k")
    assert m.cursor == 1
    press(m, "k")
    assert m.cursor == 0
    press(m, "k")
    assert m.cursor == 0


def test_view_switching():
    m = Model(current_view=View.READY, cursor=5)
    press(m, "h")
    assert m.current_view == View.BACKLOG
    assert m.cursor == 0
    press(m, "l")
    assert m.current_view == View.READY
    press(m, "l")
    assert m.current_view == View.COMPLETED
    press(m, "l")
    assert m.current_view == View.COMPLETED
    press(m, "h")
    assert m.current_view == View.READY


def test_adding_mode():
    m = Model(current_view=View.BACKLOG)
    press(m, "a")
    assert m.adding
    press(m, "h", "i")
    assert m.new_todo == "hi"
    press(m, "esc")
    assert not m.adding
    assert m.new_todo == ""
    assert m.message == "Cancelled"


def test_editing_description_mode():
    m = Model(current_view=View.BACKLOG, backlog=[Todo("task1")])
    press(m, "e")
    assert m.editing_description
    press(m, "d", "e", "s", "c")
    assert m.new_description == "desc"
    press(m, "esc")
    assert not m.editing_description
    assert m.new_description == ""


def test_renaming_mode():
    m = Model(current_view=View.BACKLOG, backlog=[Todo("oldname")])
    press(m, "n")
    assert m.renaming_todo
    assert m.new_todo_name == "oldname"
    assert m.text_input_cursor == len("oldname")

    m.new_todo_name = ""
    m.text_input_cursor = 0
    press(m, "n", "e", "w")
    assert m.new_todo_name == "new"

    press(m, "esc")
    assert not m.renaming_todo
    assert m.new_todo_name == ""


def test_delete_confirmation_cancelled():
    m = Model(current_view=View.BACKLOG, backlog=[Todo("task1")])
    press(m, "d")
    assert m.confirming_delete
    press(m, "n")
    assert not m.confirming_delete
    assert len(m.backlog) == 1
    assert m.message == "Deletion cancelled"


def test_toggle_description():
    m = Model(current_view=View.BACKLOG, backlog=[Todo("task1", description=["desc1"])])
    press(m, "i")
    assert m.showing_description
    press(m, "i")
    assert not m.showing_description


def test_toggle_all_descriptions():
    m = Model(current_view=View.BACKLOG)
    press(m, "I")
    assert m.showing_all_descriptions
    press(m, "I")
    assert not m.showing_all_descriptions


@pytest.mark.parametrize("with_todos", [False, True])
def test_initial_model(with_todos):
    completed_time = now() - timedelta(hours=1)
    if with_todos:
        save_todos(BACKLOG_FILE, [Todo("Backlog task")])
        save_todos(READY_FILE, [Todo("Ready task")])
        save_todos(COMPLETED_FILE, [Todo("Completed task", completed_at=completed_time)])
    expected = 1 if with_todos else 0

    m = initial_model()

    assert len(m.backlog) == expected
    assert len(m.ready) == expected
    assert len(m.displayed_completed) == expected
    assert m.current_view == View.READY
    assert m.cursor == 0
    assert os.path.isdir("backup")


def test_initial_model_backs_up_files():
    save_todos(READY_FILE, [Todo("Ready task")])
    initial_model()
    backups = load_todos(os.path.join("backup", READY_FILE + ".bak"))
    assert [todo.text for todo in backups] == ["Ready task"]


def test_move_backlog_to_ready():
    m = Model(current_view=View.BACKLOG, backlog=[Todo("task1")])
    press(m, "r")
    assert m.backlog == []
    assert [todo.text for todo in m.ready] == ["task1"]
    assert m.message == "Todo moved to ready!"
    assert [todo.text for todo in load_todos(READY_FILE)] == ["task1"]


def test_mark_complete():
    m = Model(current_view=View.READY, ready=[Todo("task1")])
    press(m, "x")
    assert m.ready == []
    assert len(m.completed) == 1
    assert m.completed[0].text == "task1"
    assert m.completed[0].completed_at is not None
    assert m.message == "Todo completed!"
    assert [todo.text for todo in load_todos(COMPLETED_FILE)] == ["task1"]


def test_undo_complete():
    moment = now()
    m = Model(
        current_view=View.COMPLETED,
        completed=[Todo("task1", created_at=moment, completed_at=moment)],
    )
    m.update_displayed_completed()
    press(m, "u")
    assert m.completed == []
    assert len(m.ready) == 1
    assert m.ready[0].text == "task1"
    assert m.ready[0].completed_at is None


def test_reorder_down():
    m = Model(current_view=View.BACKLOG, backlog=[Todo("task1"), Todo("task2")])
    press(m, "J")
    assert [todo.text for todo in m.backlog] == ["task2", "task1"]
    assert m.cursor == 1


def test_reorder_up():
    m = Model(current_view=View.BACKLOG, backlog=[Todo("task1"), Todo("task2")], cursor=1)
    press(m, "K")
    assert [todo.text for todo in m.backlog] == ["task2", "task1"]
    assert m.cursor == 0


def test_confirm_delete():
    m = Model(current_view=View.BACKLOG, backlog=[Todo("task1"), Todo("task2")])
    press(m, "d", "y")
    assert [todo.text for todo in m.backlog] == ["task2"]
    assert not m.confirming_delete
    assert m.message == "Todo deleted"


def test_confirm_delete_in_completed_view():
    moment = now()
    m = Model(
        current_view=View.COMPLETED,
        completed=[
            Todo("older", created_at=moment, completed_at=moment - timedelta(hours=1)),
            Todo("newer", created_at=moment, completed_at=moment),
        ],
    )
    m.update_displayed_completed()
    press(m, "d", "y")
    assert [todo.text for todo in m.completed] == ["older"]
    assert [todo.text for todo in m.displayed_completed] == ["older"]


def test_save_new_todo():
    m = Model(current_view=View.BACKLOG, adding=True, new_todo="new task")
    press(m, "enter")
    assert len(m.backlog) == 1
    assert m.backlog[0].text == "New task"
    assert not m.adding
    assert m.new_todo == ""
    assert m.message == "Todo added!"


def test_save_description():
    m = Model(
        current_view=View.BACKLOG,
        backlog=[Todo("task1")],
        editing_description=True,
        new_description="new description",
    )
    press(m, "enter")
    assert m.backlog[0].description == ["new description"]
    assert not m.editing_description
    assert m.new_description == ""
    assert m.showing_description


def test_save_rename():
    m = Model(
        current_view=View.BACKLOG,
        backlog=[Todo("old name")],
        renaming_todo=True,
        new_todo_name="new name",
    )
    press(m, "enter")
    assert m.backlog[0].text == "New name"
    assert not m.renaming_todo
    assert m.new_todo_name == ""


def test_move_ready_to_backlog():
    m = Model(
        current_view=View.READY,
        backlog=[Todo("existing backlog")],
        ready=[Todo("task to move")],
    )
    press(m, "b")
    assert m.ready == []
    assert [todo.text for todo in m.backlog] == ["task to move", "existing backlog"]


def test_backup_and_clear():
    completed_time = now() - timedelta(hours=1)
    m = Model(
        current_view=View.COMPLETED,
        completed=[
            Todo("task1", completed_at=completed_time),
            Todo("task2", completed_at=completed_time),
        ],
    )
    m.update_displayed_completed()
    press(m, "B")
    assert m.completed == []
    assert m.cursor == 0
    assert "Backed up" in m.message
    prefix = "todo_completed_backup_" + datetime.now().strftime("%Y-%m-%d")
    backups = [name for name in os.listdir(".") if name.startswith(prefix)]
    assert len(backups) == 1
    assert [todo.text for todo in load_todos(backups[0])] == ["task1", "task2"]


def test_toggle_help():
    m = Model()
    press(m, "?")
    assert m.showing_commands
    press(m, "?")
    assert not m.showing_commands


def test_enter_description_navigation():
    m = Model(
        current_view=View.BACKLOG,
        backlog=[Todo("task1", description=["desc1", "desc2"])],
    )
    press(m, "enter")
    assert m.navigating_descriptions
    assert m.description_cursor == 0
    assert m.showing_description


def test_enter_description_navigation_no_descriptions():
    m = Model(current_view=View.BACKLOG, backlog=[Todo("task without desc")])
    press(m, "enter")
    assert not m.navigating_descriptions
    assert "No descriptions" in m.message


def test_description_navigation_mode():
    m = Model(
        current_view=View.BACKLOG,
        backlog=[Todo("task1", description=["desc1", "desc2", "desc3"])],
        navigating_descriptions=True,
        showing_description=True,
    )
    press(m, "j")
    assert m.description_cursor == 1
    press(m, "j")
    assert m.description_cursor == 2
    press(m, "j")
    assert m.description_cursor == 2
    press(m, "k")
    assert m.description_cursor == 1
    press(m, "k")
    assert m.description_cursor == 0
    press(m, "k")
    assert m.description_cursor == 0
    press(m, "esc")
    assert not m.navigating_descriptions
    assert m.description_cursor == 0


def test_description_navigation_q_does_not_quit():
    m = Model(
        current_view=View.BACKLOG,
        backlog=[Todo("task1", description=["desc1"])],
        navigating_descriptions=True,
    )
    assert press(m, "q") is False
    assert not m.navigating_descriptions


def test_description_navigation_exit_on_todo_change():
    m = Model(
        current_view=View.BACKLOG,
        backlog=[Todo("task1", description=["desc1"]), Todo("task2", description=["desc2"])],
        cursor=1,
    )
    press(m, "k")
    assert m.cursor == 0
    assert not m.navigating_descriptions
    press(m, "j")
    assert m.cursor == 1
    assert not m.navigating_descriptions


def test_description_deletion_in_navigation():
    m = Model(
        current_view=View.BACKLOG,
        backlog=[Todo("task1", description=["desc1", "desc2", "desc3"])],
        navigating_descriptions=True,
        description_cursor=1,
    )
    press(m, "d")
    assert m.confirming_delete_desc
    press(m, "y")
    assert not m.confirming_delete_desc
    assert m.backlog[0].description == ["desc1", "desc3"]
    assert m.message == "Description deleted"


def test_description_deletion_cancelled():
    m = Model(
        current_view=View.BACKLOG,
        backlog=[Todo("task1", description=["desc1", "desc2"])],
        navigating_descriptions=True,
        confirming_delete_desc=True,
    )
    press(m, "n")
    assert not m.confirming_delete_desc
    assert len(m.backlog[0].description) == 2


def test_description_deletion_exit_navigation_when_empty():
    m = Model(
        current_view=View.BACKLOG,
        backlog=[Todo("task1", description=["only desc"])],
        navigating_descriptions=True,
        confirming_delete_desc=True,
    )
    press(m, "y")
    assert not m.navigating_descriptions
    assert m.backlog[0].description == []


def test_description_deletion_clamps_cursor():
    m = Model(
        current_view=View.BACKLOG,
        backlog=[Todo("task1", description=["a", "b"])],
        navigating_descriptions=True,
        description_cursor=1,
        confirming_delete_desc=True,
    )
    press(m, "y")
    assert m.backlog[0].description == ["a"]
    assert m.description_cursor == 0
    assert m.navigating_descriptions


def test_edit_description_in_navigation_mode():
    m = Model(
        current_view=View.BACKLOG,
        backlog=[Todo("task1", description=["old desc 1", "old desc 2"])],
        navigating_descriptions=True,
        description_cursor=1,
    )
    press(m, "e")
    assert m.editing_description
    assert m.new_description == "old desc 2"

    m.new_description = "updated desc"
    press(m, "enter")
    assert not m.editing_description
    assert m.backlog[0].description == ["old desc 1", "updated desc"]


def test_edit_description_not_in_navigation_mode():
    m = Model(current_view=View.BACKLOG, backlog=[Todo("task1", description=["existing"])])
    press(m, "e")
    assert m.editing_description
    assert m.new_description == ""

    m.new_description = "new desc"
    press(m, "enter")
    assert m.backlog[0].description == ["new desc", "existing"]


def test_move_to_top_backlog():
    m = Model(
        current_view=View.BACKLOG,
        backlog=[Todo("task1"), Todo("task2"), Todo("task3")],
        cursor=2,
    )
    press(m, "t")
    assert [todo.text for todo in m.backlog] == ["task3", "task1", "task2"]
    assert m.cursor == 0
    assert m.message == "Todo moved to top"


def test_move_to_top_ready():
    m = Model(
        current_view=View.READY,
        ready=[Todo("ready1"), Todo("ready2"), Todo("ready3")],
        cursor=1,
    )
    press(m, "t")
    assert [todo.text for todo in m.ready] == ["ready2", "ready1", "ready3"]
    assert m.cursor == 0


def test_move_to_top_already_at_top():
    m = Model(current_view=View.BACKLOG, backlog=[Todo("task1"), Todo("task2")])
    press(m, "t")
    assert [todo.text for todo in m.backlog] == ["task1", "task2"]
    assert m.cursor == 0
    assert m.message == ""


def test_move_to_top_in_completed_view():
    moment = now()
    m = Model(
        current_view=View.COMPLETED,
        completed=[
            Todo("completed1", created_at=moment, completed_at=moment),
            Todo("completed2", created_at=moment, completed_at=moment),
        ],
        cursor=1,
    )
    m.update_displayed_completed()
    press(m, "t")
    assert m.cursor == 1


def test_move_to_top_single_item():
    m = Model(current_view=View.BACKLOG, backlog=[Todo("only task")])
    press(m, "t")
    assert [todo.text for todo in m.backlog] == ["only task"]


@pytest.mark.parametrize("key", ["q", "ctrl+c"])
def test_quit_keys(key):
    assert Model().update(key) is True


def test_ordinary_key_keeps_running():
    assert Model().update("j") is False


def test_save_failure_requests_quit():
    os.mkdir(BACKLOG_FILE)
    m = Model(current_view=View.BACKLOG, adding=True, new_todo="task")
    assert m.update("enter") is True
    assert "Failed to save" in m.save_error
    assert m.adding


def test_resize():
    m = Model()
    m.resize(120, 40)
    assert (m.width, m.height) == (120, 40)


def test_go_bottom_and_top():
    m = Model(current_view=View.BACKLOG, backlog=[Todo("a"), Todo("b"), Todo("c")])
    press(m, "G")
    assert m.cursor == 2
    press(m, "g")
    assert m.cursor == 0


def test_prettify_only_in_completed_view():
    m = Model(current_view=View.BACKLOG)
    press(m, "p")
    assert not m.showing_prettify
    m.current_view = View.COMPLETED
    press(m, "p")
    assert m.showing_prettify
    press(m, "esc")
    assert not m.showing_prettify


def test_export_markdown():
    save_todos(COMPLETED_FILE, [Todo("Done task", completed_at=now())])
    m = Model(current_view=View.COMPLETED)
    press(m, "P")
    assert m.message.startswith("Exported to completed_todos_")
    filename = m.message.removeprefix("Exported to ").removesuffix("!")
    with open(filename, encoding="utf-8") as handle:
        assert "Done task" in handle.read()