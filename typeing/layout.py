"""Word wrapping of the word block."""

from __future__ import annotations

from typing import Sequence

import blessed

from .constants import TypeingConstants
from .errors import TerminalTooSmallError
from .text import StyledText


def wrap_words(words: Sequence[str], max_line_width: int,
               max_words_per_line: int = TypeingConstants.MAX_WORDS_PER_LINE) -> list[str]:
    """Partition words into plain lines.

    Each word counts its length plus one for the separating space. A word is
    added to the current line only while the line stays within both limits;
    otherwise the line is closed with a trailing space (users instinctively
    type a space after every word) and the word starts a new line. A word
    wider than ``max_line_width`` still gets a line of its own and is never
    truncated. The last line has no trailing space.

    Returns:
        List of plain lines; ``[""]`` for an empty word list.
    """
    lines: list[str] = []
    line: list[str] = []
    current_width = 0

    for word in words:
        new_width = current_width + len(word) + 1
        if not line or (len(line) < max_words_per_line and new_width <= max_line_width):
            line.append(word)
            current_width = new_width
        else:
            lines.append(" ".join(line) + " ")
            line = [word]
            current_width = len(word) + 1

    lines.append(" ".join(line))
    return lines


def min_columns_for(words: Sequence[str]) -> int:
    """Narrowest terminal that can show ``words``.

    The longest word needs room for its trailing separator plus one column,
    and never less than the usability floor.
    """
    longest = max((len(word) for word in words), default=0)
    return max(longest + 2, TypeingConstants.MIN_LINE_WIDTH)


def layout_words(words: Sequence[str], columns: int, rows: int, reserved_rows: int,
                 term: blessed.Terminal) -> list[StyledText]:
    """Wrap words into faint lines that fit the terminal.

    Args:
        words: Words to show, without embedded whitespace
        columns: Terminal width
        rows: Terminal height
        reserved_rows: Rows already taken by other content (status lines)
        term: Terminal used for the faint style

    Returns:
        One faint StyledText per line

    Raises:
        TerminalTooSmallError: if the lines plus reserved rows and margin
            do not fit vertically, or the longest word does not fit
            horizontally
    """
    max_line_width = columns * TypeingConstants.LINE_WIDTH_NUMERATOR // TypeingConstants.LINE_WIDTH_DENOMINATOR
    lines = [StyledText.from_plain(line).with_faint(term) for line in wrap_words(words, max_line_width)]

    required_rows = len(lines) + reserved_rows + TypeingConstants.VERTICAL_MARGIN
    if required_rows > rows:
        raise TerminalTooSmallError(
            TypeingConstants.TOO_FEW_ROWS_MESSAGE.format(required_rows, rows),
            dimension="rows", required=required_rows, actual=rows,
        )
    required_columns = min_columns_for(words)
    if required_columns > columns:
        raise TerminalTooSmallError(
            TypeingConstants.TOO_FEW_COLUMNS_MESSAGE.format(required_columns, columns),
            dimension="columns", required=required_columns, actual=columns,
        )
    return lines
