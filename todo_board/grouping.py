"""Grouping of completed todos by week and day, and the Markdown report built on it."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta

from .storage import find_backup_files
from .types import Todo

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
# Indexed by datetime.weekday(): Monday is 0.
_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


@dataclass
class DayGroup:
    """Todos completed on one calendar day."""

    date: datetime
    todos: list[Todo] = field(default_factory=list)


@dataclass
class WeekGroup:
    """A Sunday-to-Saturday week holding its day groups, most recent day first."""

    week_start: datetime
    week_end: datetime
    days: list[DayGroup] = field(default_factory=list)


def _instant(moment: datetime) -> float:
    return moment.timestamp()


def _month_abbr(moment: datetime) -> str:
    return _MONTHS[moment.month - 1][:3]


def _day_label(moment: datetime) -> str:
    return f"{_WEEKDAYS[moment.weekday()]}, {_month_abbr(moment)} {moment.day}"


def _clock_12(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {suffix}"


def truncate_to_day(t: datetime) -> datetime:
    """Return midnight of the same day, keeping the time zone."""
    return t.replace(hour=0, minute=0, second=0, microsecond=0)


def get_week_start(t: datetime) -> datetime:
    """Return midnight of the Sunday that starts the week containing t."""
    days_since_sunday = (t.weekday() + 1) % 7
    return truncate_to_day(t - timedelta(days=days_since_sunday))


def group_todos_by_week(todos: list[Todo]) -> list[WeekGroup]:
    """Group completed todos into weeks and days, most recent week and day first.

    Todos without a completion time are left out.
    """
    finished = sorted(
        (todo for todo in todos if todo.completed_at is not None),
        key=lambda todo: _instant(todo.completed_at),
    )

    days: dict[date, DayGroup] = {}
    for todo in finished:
        key = todo.completed_at.date()
        group = days.get(key)
        if group is None:
            group = days[key] = DayGroup(date=truncate_to_day(todo.completed_at))
        group.todos.append(todo)

    weeks: dict[date, WeekGroup] = {}
    for day in days.values():
        start = get_week_start(day.date)
        week = weeks.get(start.date())
        if week is None:
            week = weeks[start.date()] = WeekGroup(
                week_start=start, week_end=start + timedelta(days=6)
            )
        week.days.append(day)

    result = []
    for week in reversed(list(weeks.values())):
        week.days.reverse()
        result.append(week)
    return result


def format_week_range(start: datetime, end: datetime) -> str:
    """Format a week as "Jan 14 - 20", or "Jan 28 - Feb 3" across months."""
    if start.month == end.month:
        return f"{_month_abbr(start)} {start.day} - {end.day}"
    return f"{_month_abbr(start)} {start.day} - {_month_abbr(end)} {end.day}"


def format_day_header(t: datetime) -> str:
    """Format a day as "Monday, Jan 15", marking today and yesterday."""
    today = datetime.combine(date.today(), time())
    yesterday = today - timedelta(days=1)
    label = _day_label(t)
    if _instant(t) == _instant(today):
        return f"Today ({label})"
    if _instant(t) == _instant(yesterday):
        return f"Yesterday ({label})"
    return label


def generate_markdown_from_todos(todos: list[Todo], include_backups: bool) -> str:
    """Build a Markdown report of completed todos grouped by week and day."""
    title = "Completed Todos"
    if include_backups:
        title = f"Completed Todos (including {len(find_backup_files())} backup files)"

    now = datetime.now()
    generated = (
        f"{_WEEKDAYS[now.weekday()]}, {_MONTHS[now.month - 1]} {now.day}, {now.year}"
        f" at {_clock_12(now)}"
    )
    parts = [f"# {title}\n\n", f"Generated: {generated}\n\n"]

    if not todos:
        parts.append("No completed todos found.\n")
        return "".join(parts)

    parts.append(f"**Total completed todos:** {len(todos)}\n\n")
    parts.append("---\n\n")

    for week in group_todos_by_week(todos):
        todo_count = sum(len(day.todos) for day in week.days)
        parts.append(f"## Week of {format_week_range(week.week_start, week.week_end)}\n\n")
        parts.append(f"*{todo_count} todos completed this week*\n\n")

        for day in week.days:
            parts.append(f"### {format_day_header(day.date)}\n\n")
            for todo in day.todos:
                parts.append(f"- **{todo.text}** _{_clock_12(todo.completed_at)}_\n")
                parts.extend(f"  - {note}\n" for note in todo.description)
            parts.append("\n")

    return "".join(parts)


def export_markdown_file(todos: list[Todo], include_backups: bool) -> str:
    """Write the Markdown report to a timestamped file and return its name."""
    filename = datetime.now().strftime("completed_todos_%Y-%m-%d_%H%M%S.md")
    content = generate_markdown_from_todos(todos, include_backups)
    with open(filename, "w", encoding="utf-8", newline="") as handle:
        handle.write(content)
    return filename