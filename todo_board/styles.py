"""Terminal text styles rendered with ANSI escape sequences."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Style:
    """A text style: 256-colour foreground/background, bold, italic and side padding."""

    foreground: int | None = None
    background: int | None = None
    bold: bool = False
    italic: bool = False
    padding: int = 0

    def __post_init__(self) -> None:
        for color in (self.foreground, self.background):
            if color is not None and not 0 <= color <= 255:
                raise ValueError(f"colour must be in 0..255, got {color}")
        if self.padding < 0:
            raise ValueError(f"padding must not be negative, got {self.padding}")

    def _sgr(self) -> str:
        params = []
        if self.bold:
            params.append("1")
        if self.italic:
            params.append("3")
        if self.foreground is not None:
            params.append(f"38;5;{self.foreground}")
        if self.background is not None:
            params.append(f"48;5;{self.background}")
        return ";".join(params)

    def render(self, text: str) -> str:
        """Return text padded and wrapped in this style's escape sequences, line by line."""
        codes = self._sgr()
        pad = " " * self.padding
        lines = []
        for line in text.split("\n"):
            body = f"{pad}{line}{pad}"
            if codes and body:
                body = f"\x1b[{codes}m{body}\x1b[0m"
            lines.append(body)
        return "\n".join(lines)


ACTIVE_TAB = Style(foreground=117, background=236, bold=True, padding=1)
INACTIVE_TAB = Style(foreground=240, padding=1)

CURSOR = Style(foreground=81, bold=True)
TODO_TEXT = Style(foreground=255)
TIMESTAMP = Style(foreground=243)
DESCRIPTION = Style(foreground=117, italic=True)

HEADER = Style(foreground=75, bold=True)
COUNT = Style(foreground=120, bold=True)

PROMPT = Style(foreground=117, bold=True)
INPUT_CURSOR = Style(foreground=81, bold=True)
HELP_TEXT = Style(foreground=241, italic=True)

SUCCESS_MESSAGE = Style(foreground=120, bold=True)
ERROR_MESSAGE = Style(foreground=203, bold=True)
INFO_MESSAGE = Style(foreground=117)

COMMAND = Style(foreground=75)