"""Terminal surface using Blessed for display and Curtsies for input."""

from __future__ import annotations

import signal
import sys
import termios
import threading
from typing import Optional, Sequence, TextIO, Union

import blessed
from curtsies import Input, events

from .constants import TypeingConstants
from .cursor import CursorModel, LinePosition
from .errors import TerminalIOError
from .layout import layout_words
from .text import StyledText, visual_width_of

Row = Union[StyledText, Sequence[StyledText]]


def _as_row(row: Row) -> Sequence[StyledText]:
    if isinstance(row, StyledText):
        return [row]
    return row


class TerminalSurface:
    """Owns the terminal while a typing test runs.

    Output goes through Blessed sequences; Curtsies' Input holds the terminal
    in non-canonical, no-echo mode and delivers keys. Use as a context
    manager so the terminal is restored on every exit path::

        with TerminalSurface() as surface:
            surface.display_word_block(words)
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None, stream: Optional[TextIO] = None,
                 in_stream: Optional[TextIO] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.stream = stream or sys.stdout
        self.in_stream = in_stream or sys.stdin
        self._cursor = CursorModel()
        self.bottom_rows = 0  # Rows used by the last bottom-anchored block
        self._recording = False
        self._input: Optional[Input] = None
        self._saved_attrs: Optional[list] = None
        self._resize_trigger = None
        self._original_sigwinch = None
        self.is_active = False
        # Last absolute position the hardware cursor was sent to
        self._x = 0
        self._y = 0

    def __enter__(self) -> "TerminalSurface":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def initialize(self) -> None:
        """Enter non-canonical mode and start watching for resizes.

        On top of Curtsies' cbreak mode, flow control (IXON/IXOFF) and extended
        input processing (IEXTEN) are switched off so Ctrl-S, Ctrl-Q and
        Ctrl-V reach the test as keys. ISIG stays on so Ctrl-C still interrupts.

        Raises:
            TerminalIOError: if the terminal cannot be switched
        """
        if self.is_active:
            return
        try:
            self._input = Input(in_stream=self.in_stream, keynames='curtsies')
            self._input.__enter__()
        except (termios.error, OSError) as e:
            self._input = None
            raise TerminalIOError(f"Could not enter raw mode: {e}") from e
        try:
            self._saved_attrs = termios.tcgetattr(self.in_stream)
            attrs = list(self._saved_attrs)
            attrs[0] &= ~(termios.IXON | termios.IXOFF)  # iflag
            attrs[3] &= ~termios.IEXTEN  # lflag
            termios.tcsetattr(self.in_stream, termios.TCSANOW, attrs)
        except termios.error as e:
            self._saved_attrs = None
            self._input.__exit__(None, None, None)
            self._input = None
            raise TerminalIOError(f"Could not enter raw mode: {e}") from e
        self._watch_resize()
        self.is_active = True

    def _watch_resize(self) -> None:
        # Signal handlers can only be installed from the main thread
        if threading.current_thread() is not threading.main_thread():
            return
        self._resize_trigger = self._input.threadsafe_event_trigger(events.WindowChangeEvent)
        self._original_sigwinch = signal.signal(signal.SIGWINCH, self._handle_sigwinch)

    def _handle_sigwinch(self, signum, frame) -> None:
        """Queue a window change event so a blocked get_key() returns."""
        if self._resize_trigger is not None:
            self._resize_trigger(rows=self.height, columns=self.width)

    def close(self) -> None:
        """Restore the terminal: clear it and leave a steady visible block at the top-left.

        The input mode is restored even if writing the reset sequences fails.
        Calling close() on an inactive surface does nothing.
        """
        if not self.is_active:
            return
        self.is_active = False
        error: Optional[TerminalIOError] = None
        try:
            self._write(self.term.clear, TypeingConstants.STEADY_BLOCK,
                        self.term.move_xy(0, 0), self.term.normal_cursor)
            self.flush()
        except TerminalIOError as e:
            error = e
        finally:
            if self._original_sigwinch is not None:
                signal.signal(signal.SIGWINCH, self._original_sigwinch)
                self._original_sigwinch = None
            self._resize_trigger = None
            if self._saved_attrs is not None:
                try:
                    termios.tcsetattr(self.in_stream, termios.TCSANOW, self._saved_attrs)
                except termios.error as e:
                    error = error or TerminalIOError(f"Could not restore terminal mode: {e}")
                finally:
                    self._saved_attrs = None
            if self._input is not None:
                try:
                    self._input.__exit__(None, None, None)
                except (termios.error, OSError) as e:
                    error = error or TerminalIOError(f"Could not restore terminal mode: {e}")
                finally:
                    self._input = None
        if error is not None:
            raise error

    def _write(self, *parts: str) -> None:
        try:
            print(*parts, sep='', end='', file=self.stream)
        except OSError as e:
            raise TerminalIOError(str(e)) from e

    def flush(self) -> None:
        try:
            self.stream.flush()
        except OSError as e:
            raise TerminalIOError(str(e)) from e

    @property
    def width(self) -> int:
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self) -> int:
        """Terminal height in rows."""
        return self.term.height

    def _move_to(self, x: int, y: int) -> None:
        self._write(self.term.move_xy(x, y))
        self._x, self._y = x, y

    def _move_left(self, columns: int) -> None:
        # cub with a zero count still moves one column on most terminals
        if columns > 0:
            self._write(self.term.move_left(columns))
        self._x -= columns

    def get_key(self, timeout: Optional[float] = None) -> Optional[str]:
        """Get a single keypress as a curtsies key name.

        Args:
            timeout: Timeout in seconds (None for blocking)

        Returns:
            The key name, or None on timeout or when input is not active.
        """
        if self._input is None:
            return None
        evt = next(self._input) if timeout is None else self._input.send(timeout)
        if evt is None:
            return None
        if isinstance(evt, events.Event):
            # Non-key events such as "<WindowChangeEvent>" are reported by name
            return evt.name
        return str(evt)

    def clear_and_center_caret(self) -> None:
        """Clear the screen and park a blinking bar caret in the middle."""
        self._write(self.term.clear)
        self._move_to(self.width // 2, self.height // 2)
        self._write(TypeingConstants.BLINKING_BAR)
        self.flush()

    def _render_row(self, row: Row) -> None:
        items = _as_row(row)
        width = visual_width_of(items)
        self._move_left(width // 2)
        if self._recording:
            self._cursor.record_line(self._x, self._y, width)
        self._write(*(item.display_form for item in items))
        # Writing advanced the hardware cursor by width; step back to the row start
        if width > 0:
            self._write(self.term.move_left(width))

    def render_row(self, row: Row) -> None:
        """Write one row centered on the current hardware cursor column."""
        self._render_row(row)
        self.flush()

    def _render_block_centered(self, rows: Sequence[Row]) -> None:
        center_x = self.width // 2
        top = self.height // 2 - len(rows) // 2
        for line_no, row in enumerate(rows):
            self._move_to(center_x, top + line_no)
            self._render_row(row)

    def render_block_centered(self, rows: Sequence[Row]) -> None:
        """Write rows vertically centered, each row horizontally centered."""
        self._render_block_centered(rows)
        self.flush()

    def render_block_bottom_anchored(self, rows: Sequence[Row]) -> None:
        """Write rows just above the last terminal row.

        The row count is remembered so the next word block leaves room for it.
        """
        center_x = self.width // 2
        top = self.height - 1 - len(rows)
        self.bottom_rows = len(rows)
        for line_no, row in enumerate(rows):
            self._move_to(center_x, top + line_no)
            self._render_row(row)
        self.flush()

    def display_word_block(self, words: Sequence[str]) -> list[StyledText]:
        """Lay out and show the words to type, and start tracking the caret.

        Returns:
            The faint lines as rendered; their plain forms are the text to type.

        Raises:
            TerminalTooSmallError: if the block does not fit the terminal
            TerminalIOError: if writing to the terminal fails
        """
        self._cursor.reset()
        lines = layout_words(words, self.width, self.height, self.bottom_rows, self.term)
        self._recording = True
        try:
            self._render_block_centered(lines)
        finally:
            self._recording = False
        self._move_to_position(self._cursor.current_position())
        self.flush()
        return lines

    def _move_to_position(self, position: Optional[tuple[int, int]]) -> None:
        if position is not None:
            self._move_to(*position)

    def move_forward(self) -> None:
        self._move_to_position(self._cursor.advance())
        self.flush()

    def move_backward(self) -> None:
        self._move_to_position(self._cursor.retreat())
        self.flush()

    def replace_preceding_character(self, text: StyledText) -> None:
        """Overwrite the character before the caret, leaving the caret where it is.

        Does nothing at the first character.
        """
        previous = self._cursor.previous_position()
        if previous is None:
            return
        self._move_to(*previous)
        self._write(text.display_form)
        self._move_to_position(self._cursor.current_position())
        self.flush()

    def set_cursor_visible(self, visible: bool) -> None:
        self._write(self.term.normal_cursor if visible else self.term.hide_cursor)
        self.flush()

    @property
    def current_line(self) -> int:
        """Index of the word block line holding the caret."""
        return self._cursor.line_index

    @property
    def at_first_character(self) -> bool:
        return self._cursor.at_start

    @property
    def at_last_character(self) -> bool:
        return self._cursor.at_end

    @property
    def current_column(self) -> int:
        """Index of the caret within its line."""
        return self._cursor.column_index

    @property
    def caret_position(self) -> Optional[tuple[int, int]]:
        """Absolute (x, y) of the logical caret, or None when no words are shown."""
        return self._cursor.current_position()

    @property
    def line_positions(self) -> tuple[LinePosition, ...]:
        """Screen geometry of the word block lines, top to bottom."""
        return tuple(self._cursor.lines)
