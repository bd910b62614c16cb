[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "todo-board"
version = "0.1.0"
description = "A keyboard-driven terminal todo board with backlog, ready and completed lists"
requires-python = ">=3.10"
keywords = ["todo", "terminal", "tui", "kanban", "productivity"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]
dependencies = [
    "blessed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
todo-board = "todo_board.app:main"

[tool.hatch.build.targets.wheel]
packages = ["todo_board"]

[tool.pytest.ini_options]
addopts = "-ra"
