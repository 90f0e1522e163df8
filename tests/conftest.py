"""Shared fixtures: a styling xterm and a surface with patched geometry."""

import io
import termios
from types import SimpleNamespace
from unittest.mock import PropertyMock, patch

import blessed
import pytest

from typeing.terminal import TerminalSurface


@pytest.fixture(scope="session")
def term():
    """One terminal kind per process; curses cannot switch kinds once set up."""
    return blessed.Terminal(kind="xterm-256color", force_styling=True, stream=io.StringIO())


@pytest.fixture
def geometry():
    """Patch terminal size to 80x24; returns (width, height) PropertyMocks for resizing."""
    with patch.object(TerminalSurface, 'width', new_callable=PropertyMock, return_value=80) as width, \
            patch.object(TerminalSurface, 'height', new_callable=PropertyMock, return_value=24) as height:
        yield width, height


@pytest.fixture
def surface(term, geometry):
    return TerminalSurface(terminal=term, stream=io.StringIO())


SAVED_ATTRS = [
    termios.ICRNL | termios.IXON | termios.IXOFF,  # iflag
    termios.OPOST,  # oflag
    termios.CS8,  # cflag
    termios.ISIG | termios.ICANON | termios.ECHO | termios.IEXTEN,  # lflag
    termios.B38400,
    termios.B38400,
    [b'\x00'] * 32,
]


@pytest.fixture
def tty():
    """Stand in for the controlling terminal: Curtsies Input, termios attributes and SIGWINCH.

    Returns a namespace with the mocks; ``tcgetattr`` reports ``saved_attrs``.
    """
    with patch('typeing.terminal.Input') as mock_input, \
            patch('typeing.terminal.termios.tcgetattr', return_value=list(SAVED_ATTRS)) as tcgetattr, \
            patch('typeing.terminal.termios.tcsetattr') as tcsetattr, \
            patch('typeing.terminal.signal.signal') as mock_signal:
        yield SimpleNamespace(saved_attrs=SAVED_ATTRS, input=mock_input, tcgetattr=tcgetattr,
                              tcsetattr=tcsetattr, signal=mock_signal)
