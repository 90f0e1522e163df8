"""Logical caret position over the rendered word block."""

from typing import NamedTuple, Optional


class LinePosition(NamedTuple):
    """Where a rendered line sits on screen."""
    x: int  # Column of the line's first character
    y: int  # Terminal row
    length: int  # Characters in the line


class CursorModel:
    """Tracks the caret as a (line, column) pair over wrapped lines.

    Lines are recorded top to bottom while the word block is rendered.
    Movement wraps across line ends exactly where the layout broke the
    lines and clamps at the first and last character.
    """

    def __init__(self):
        self.lines: list[LinePosition] = []
        self.line_index = 0
        self.column_index = 0

    def reset(self) -> None:
        self.lines = []
        self.line_index = 0
        self.column_index = 0

    def record_line(self, x: int, y: int, length: int) -> None:
        """Track a rendered line. Empty lines have no caret positions and are skipped."""
        if length < 1:
            return
        self.lines.append(LinePosition(x, y, length))

    @property
    def at_start(self) -> bool:
        return self.line_index == 0 and self.column_index == 0

    @property
    def at_end(self) -> bool:
        """True on the last character of the last line, where advance() clamps."""
        if not self.lines:
            return True
        return (self.line_index == len(self.lines) - 1
                and self.column_index == self.lines[-1].length - 1)

    def advance(self) -> Optional[tuple[int, int]]:
        """Move one character forward and return the new (x, y)."""
        if not self.lines:
            return None
        line = self.lines[self.line_index]
        if self.column_index < line.length - 1:
            self.column_index += 1
        elif self.line_index + 1 < len(self.lines):
            self.line_index += 1
            self.column_index = 0
        return self.current_position()

    def retreat(self) -> Optional[tuple[int, int]]:
        """Move one character backward and return the new (x, y)."""
        if not self.lines:
            return None
        if self.column_index > 0:
            self.column_index -= 1
        elif self.line_index > 0:
            self.line_index -= 1
            self.column_index = self.lines[self.line_index].length - 1
        return self.current_position()

    def previous_position(self) -> Optional[tuple[int, int]]:
        """Absolute (x, y) of the character before the caret, without moving.

        Returns None at the first character or when no line is tracked.
        """
        if not self.lines or self.at_start:
            return None
        if self.column_index > 0:
            line = self.lines[self.line_index]
            return (line.x + self.column_index - 1, line.y)
        line = self.lines[self.line_index - 1]
        return (line.x + line.length - 1, line.y)

    def current_position(self) -> Optional[tuple[int, int]]:
        """Absolute (x, y) of the caret, or None when no line is tracked."""
        if not self.lines:
            return None
        line = self.lines[self.line_index]
        return (line.x + self.column_index, line.y)
