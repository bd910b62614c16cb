"""Core data types: the todo item, its JSON line format and the board views."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Any

BACKLOG_FILE = "todo_backlog.txt"
READY_FILE = "todo_ready.txt"
COMPLETED_FILE = "todo_completed.txt"

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
"""Timestamp used when a stored todo carries no creation time."""

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})\Z"
)


class View(IntEnum):
    """The three columns of the board."""

    BACKLOG = 0
    READY = 1
    COMPLETED = 2


def _now() -> datetime:
    return datetime.now().astimezone()


def _parse_timestamp(value: str) -> datetime:
    match = _RFC3339.match(value)
    if match is None:
        raise ValueError(f"invalid timestamp: {value!r}")
    year, month, day, hour, minute, second = (int(g) for g in match.groups()[:6])
    fraction = match.group(7) or ""
    microsecond = int((fraction + "000000")[:6])
    zone = match.group(8)
    if zone.upper() == "Z":
        tz = timezone.utc
    else:
        sign = 1 if zone[0] == "+" else -1
        offset = timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6]))
        tz = timezone(sign * offset)
    return datetime(year, month, day, hour, minute, second, microsecond, tzinfo=tz)


def _format_timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.astimezone()
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return text + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = int(abs(offset).total_seconds()) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _parse_optional_timestamp(value: Any) -> datetime | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"timestamp must be a string, got {value!r}")
    return _parse_timestamp(value)


@dataclass
class Todo:
    """A single todo item with optional notes and completion time."""

    text: str
    description: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)
    completed_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: Any) -> Todo:
        """Build a todo from decoded JSON, accepting the old single-string description."""
        if data is None:
            return cls(text="", created_at=ZERO_TIME)
        if not isinstance(data, dict):
            raise ValueError("a todo must be a JSON object")

        text = data.get("text")
        if text is None:
            text = ""
        if not isinstance(text, str):
            raise ValueError(f"todo text must be a string, got {text!r}")

        raw_description = data.get("description")
        if isinstance(raw_description, str):
            description = [raw_description] if raw_description else []
        elif isinstance(raw_description, list):
            description = [item for item in raw_description if isinstance(item, str)]
        else:
            description = []

        created_at = _parse_optional_timestamp(data.get("created_at")) or ZERO_TIME
        completed_at = _parse_optional_timestamp(data.get("completed_at"))
        return cls(
            text=text,
            description=description,
            created_at=created_at,
            completed_at=completed_at,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping; empty fields are omitted."""
        data: dict[str, Any] = {"text": self.text}
        if self.description:
            data["description"] = list(self.description)
        data["created_at"] = _format_timestamp(self.created_at)
        if self.completed_at is not None:
            data["completed_at"] = _format_timestamp(self.completed_at)
        return data

    @classmethod
    def from_json(cls, line: str) -> Todo:
        """Parse one JSON line; raises ValueError if it is not a valid todo."""
        try:
            data = json.loads(line)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid todo JSON: {exc}") from exc
        return cls.from_dict(data)

    def to_json(self) -> str:
        """Serialise to a compact single JSON line."""
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))