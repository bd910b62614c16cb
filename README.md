# todo-board

A keyboard-driven todo board for the terminal. Todos move through three
lists: **Backlog**, **Ready** and **Completed**. Everything is stored as
JSON-lines files in the directory you start it from.

## Installing

```
pip install .
```

## Running

```
todo-board
```

Run it from the directory that holds your todo files. It takes no options
beyond `--help`. At startup, copies of whichever of `todo_backlog.txt`,
`todo_ready.txt` and `todo_completed.txt` exist are written to a `backup/`
directory as `<name>.bak`; if that fails, the program prints the error and
exits with status 1. The board opens on the Ready list.

Every change is saved at once. If a list cannot be written, the board quits,
prints `Error: Failed to save <file>: ...` and exits with status 1.

## Keys

| Key | Action |
| --- | --- |
| `j` / `k` | move down / up |
| `g` / `G` | go to top / bottom |
| `h` / `l` | switch between Backlog, Ready and Completed |
| `J` / `K` | move the selected todo down / up (Backlog and Ready) |
| `t` | move the selected todo to the top (Backlog and Ready) |
| `a` | add a todo (Backlog and Ready); the first letter is capitalised |
| `n` | rename the selected todo |
| `d` | delete the selected todo (asks `y`/`n`) |
| `r` | move from Backlog to the end of Ready |
| `b` | move from Ready to the top of Backlog |
| `x` | mark a Ready todo complete |
| `u` | move a Completed todo back to Ready |
| `e` | add a new description at the top (or edit the selected one while navigating descriptions) |
| `enter` | navigate the descriptions of the selected todo |
| `i` / `I` | show descriptions of the selected todo / of all todos |
| `p` | week-by-week summary of completed todos (Completed) |
| `P` | export completed todos, backups included, to a Markdown file (Completed) |
| `B` | save the Completed list to a backup file and clear it (Completed) |
| `?` | show or hide help |
| `esc` | hide descriptions and the summary |
| `q` / `ctrl+c` | quit |

While navigating descriptions, `j` / `k` move between them, `e` edits the
selected one, `d` deletes it (asks `y`/`n`) and `esc` or `q` leave the mode.
In the text prompts, `enter` saves, `esc` cancels, and the arrow keys,
`home`/`end`, `ctrl+a`/`ctrl+e`, `backspace` and `delete` edit the line.

The Completed list shows the ten most recently finished todos; the header
shows how many were completed today.

## Files

| File | Contents |
| --- | --- |
| `todo_backlog.txt` | Backlog todos |
| `todo_ready.txt` | Ready todos |
| `todo_completed.txt` | Completed todos |
| `backup/<file>.bak` | copies made at startup |
| `todo_completed_backup_<date>_<count>.txt` | lists saved by `B` |
| `completed_todos_<date>_<time>.md` | Markdown exports made by `P` |

Each line is one JSON object with `text`, `created_at` and optionally
`description` (a list of strings; a single string is also accepted) and
`completed_at`. Lines that are not valid todo JSON are read as plain-text
todo titles.

## Using it from Python

```python
from todo_board.storage import load_todos
from todo_board.grouping import generate_markdown_from_todos

todos = load_todos("todo_completed.txt")
print(generate_markdown_from_todos(todos, False))
```

The modules:

- `todo_board.types` — `Todo` (with `from_json` / `to_json`) and `View`.
- `todo_board.storage` — `load_todos`, `save_todos`, `backup_completed_todos`,
  `find_backup_files`, `load_all_completed_todos`, `create_backups`.
- `todo_board.grouping` — `group_todos_by_week`, `generate_markdown_from_todos`,
  `export_markdown_file` and date formatting helpers.
- `todo_board.model` — `Model`, whose `update(key)` applies one key press and
  returns `True` when the board should quit, and `initial_model()`.
- `todo_board.view` — `render(model)` returns the board as styled text.
- `todo_board.app` — `main()`, the terminal front end.

## Tests

```
pip install ".[test]"
pytest
```