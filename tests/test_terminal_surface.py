"""Test TerminalSurface rendering, caret tracking and terminal restore."""

import signal
import termios
from unittest.mock import MagicMock

import pytest
from curtsies import events

from typeing.constants import TypeingConstants
from typeing.cursor import LinePosition
from typeing.errors import TerminalIOError, TerminalTooSmallError
from typeing.terminal import TerminalSurface
from typeing.text import StyledText


def output(surface):
    return surface.stream.getvalue()


def test_display_short_block(surface, term):
    lines = surface.display_word_block(["the", "quick", "brown", "fox"])

    assert [line.plain_form for line in lines] == ["the quick brown fox"]
    # Centered on column 40 of row 12: 19 columns wide, so it starts 9 to the left
    assert surface.line_positions == (LinePosition(31, 12, 19),)
    assert surface.caret_position == (31, 12)
    assert output(surface).endswith(term.move_xy(31, 12))
    assert lines[0].display_form in output(surface)
    assert surface.current_line == 0
    assert surface._recording is False


def test_display_multi_line_block_is_vertically_centered(surface):
    lines = surface.display_word_block(["ab"] * 25)

    assert len(lines) == 3
    rows = [line.y for line in surface.line_positions]
    assert rows == [11, 12, 13]
    # Full lines are "ab ab ... ab " (30 columns), the last one 14
    assert [line.length for line in surface.line_positions] == [30, 30, 14]
    assert [line.x for line in surface.line_positions] == [25, 25, 33]


def test_display_too_small_terminal(surface, geometry):
    geometry[1].return_value = 3

    with pytest.raises(TerminalTooSmallError) as excinfo:
        surface.display_word_block(["ab"] * 40)

    assert excinfo.value.required == 6
    assert excinfo.value.actual == 3
    assert "6" in str(excinfo.value)
    assert surface.line_positions == ()
    assert surface._recording is False


def test_rerender_replaces_line_geometry(surface):
    surface.display_word_block(["ab"] * 25)
    surface.move_forward()
    surface.display_word_block(["one"])

    assert len(surface.line_positions) == 1
    assert (surface.current_line, surface.current_column) == (0, 0)


def test_bottom_block_reserves_rows(surface, geometry, term):
    help_line = StyledText.from_plain("ctrl-c: quit")
    surface.render_block_bottom_anchored([help_line, help_line])

    assert surface.bottom_rows == 2
    # Rows 21 and 22, leaving the last row free
    assert term.move_xy(40, 21) in output(surface)
    assert term.move_xy(40, 22) in output(surface)
    # Bottom rows are never recorded as word lines
    assert surface.line_positions == ()

    geometry[1].return_value = 4
    with pytest.raises(TerminalTooSmallError) as excinfo:
        surface.display_word_block(["ab"])
    assert excinfo.value.required == 5


def test_render_row_centers_on_current_column(surface, term):
    row = [StyledText.from_plain("abc"), StyledText.from_plain("de").with_faint(term)]
    surface.render_row(row)

    expected = term.move_left(2) + "abc" + row[1].display_form + term.move_left(5)
    assert output(surface) == expected


def test_render_single_character_row_skips_zero_move(surface, term):
    surface.render_row(StyledText.from_plain("a"))
    assert output(surface) == "a" + term.move_left(1)


def test_move_forward_and_backward(surface, term):
    surface.display_word_block(["ab", "cd"])

    surface.move_forward()
    assert output(surface).endswith(term.move_xy(39, 12))
    surface.move_backward()
    surface.move_backward()
    assert output(surface).endswith(term.move_xy(38, 12))
    assert surface.at_first_character


def test_replace_preceding_character(surface, term):
    surface.display_word_block(["ab", "cd"])
    surface.move_forward()
    surface.move_forward()
    surface.stream.truncate(0)
    surface.stream.seek(0)

    marked = StyledText.from_plain("b").with_color(term, "green")
    surface.replace_preceding_character(marked)

    assert output(surface) == term.move_xy(39, 12) + marked.display_form + term.move_xy(40, 12)
    # The logical position is unchanged
    assert surface.current_column == 2


def test_replace_at_first_character_does_nothing(surface):
    surface.display_word_block(["ab"])
    before = output(surface)
    surface.replace_preceding_character(StyledText.from_plain("x"))
    assert output(surface) == before


def test_at_last_character(surface):
    surface.display_word_block(["ab"])
    assert not surface.at_last_character
    surface.move_forward()
    assert surface.at_last_character
    surface.move_forward()
    assert surface.at_last_character


def test_clear_and_center_caret(surface, term):
    surface.clear_and_center_caret()
    assert output(surface) == term.clear + term.move_xy(40, 12) + TypeingConstants.BLINKING_BAR


def test_cursor_visibility(surface, term):
    surface.set_cursor_visible(False)
    assert output(surface).endswith(term.hide_cursor)
    surface.set_cursor_visible(True)
    assert output(surface).endswith(term.normal_cursor)


def test_write_failure_is_io_error(term, geometry):
    stream = MagicMock()
    stream.write.side_effect = OSError("device gone")
    surface = TerminalSurface(terminal=term, stream=stream)

    with pytest.raises(TerminalIOError) as excinfo:
        surface.display_word_block(["ab"])
    assert "device gone" in str(excinfo.value)
    assert surface._recording is False


def test_context_manager_restores_terminal(surface, term, tty):
    with surface:
        assert surface.is_active
        surface.display_word_block(["ab"])

    tty.input.return_value.__enter__.assert_called_once()
    tty.input.return_value.__exit__.assert_called_once()
    assert not surface.is_active
    assert output(surface).endswith(
        term.clear + TypeingConstants.STEADY_BLOCK + term.move_xy(0, 0) + term.normal_cursor)


def test_initialize_disables_flow_control_and_extended_input(surface, tty):
    """Ctrl-S, Ctrl-Q and Ctrl-V must reach the test; Ctrl-C must still interrupt."""
    surface.initialize()

    tty.tcsetattr.assert_called_once()
    fd, when, attrs = tty.tcsetattr.call_args[0]
    assert fd is surface.in_stream
    assert when == termios.TCSANOW
    assert not attrs[0] & termios.IXON
    assert not attrs[0] & termios.IXOFF
    assert attrs[0] & termios.ICRNL
    assert not attrs[3] & termios.IEXTEN
    assert attrs[3] & termios.ISIG
    surface.close()


def test_close_restores_saved_attributes_before_leaving_input(surface, tty):
    input_exit = tty.input.return_value.__exit__
    restored = []
    tty.tcsetattr.side_effect = lambda fd, when, attrs: restored.append((list(attrs), input_exit.called))

    surface.initialize()
    surface.close()

    assert restored[-1] == (tty.saved_attrs, False)
    input_exit.assert_called_once()


def test_attribute_failure_leaves_terminal_untouched(surface, tty):
    tty.tcgetattr.side_effect = termios.error(25, "Inappropriate ioctl for device")

    with pytest.raises(TerminalIOError):
        surface.initialize()
    assert not surface.is_active
    tty.input.return_value.__exit__.assert_called_once()
    tty.signal.assert_not_called()


def test_sigwinch_handler_installed_and_restored(surface, tty):
    previous = tty.signal.return_value
    surface.initialize()

    tty.signal.assert_called_once_with(signal.SIGWINCH, surface._handle_sigwinch)
    tty.input.return_value.threadsafe_event_trigger.assert_called_once_with(events.WindowChangeEvent)

    surface.close()
    tty.signal.assert_called_with(signal.SIGWINCH, previous)


def test_sigwinch_queues_window_change_event(surface, tty, geometry):
    width, height = geometry
    surface.initialize()
    width.return_value, height.return_value = 100, 30

    surface._handle_sigwinch(signal.SIGWINCH, None)

    trigger = tty.input.return_value.threadsafe_event_trigger.return_value
    trigger.assert_called_once_with(rows=30, columns=100)
    surface.close()


def test_get_key_reports_window_change_by_name(surface, tty):
    surface.initialize()
    tty.input.return_value.send.return_value = events.WindowChangeEvent(rows=30, columns=100)

    assert surface.get_key(timeout=0) == "<WindowChangeEvent>"
    surface.close()


def test_terminal_restored_on_exception(surface, tty):
    with pytest.raises(RuntimeError):
        with surface:
            raise RuntimeError("boom")
    tty.input.return_value.__exit__.assert_called_once()
    assert TypeingConstants.STEADY_BLOCK in output(surface)


def test_close_is_idempotent(surface, tty):
    surface.initialize()
    surface.close()
    surface.close()
    tty.input.return_value.__exit__.assert_called_once()


def test_initialize_failure(surface, tty):
    tty.input.return_value.__enter__.side_effect = termios.error(25, "Inappropriate ioctl for device")
    with pytest.raises(TerminalIOError):
        surface.initialize()
    assert not surface.is_active
    tty.tcsetattr.assert_not_called()


def test_close_restores_mode_even_if_write_fails(term, geometry, tty):
    stream = MagicMock()
    surface = TerminalSurface(terminal=term, stream=stream)
    surface.initialize()
    stream.write.side_effect = OSError("device gone")
    with pytest.raises(TerminalIOError):
        surface.close()
    tty.tcsetattr.assert_called_with(surface.in_stream, termios.TCSANOW, tty.saved_attrs)
    tty.input.return_value.__exit__.assert_called_once()


def test_get_key_without_input(surface):
    assert surface.get_key(timeout=0) is None
