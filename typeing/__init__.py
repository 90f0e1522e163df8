"""Typeing - A terminal typing speed tester."""

from .text import StyledText, visual_width_of
from .layout import layout_words
from .cursor import CursorModel, LinePosition
from .terminal import TerminalSurface
from .errors import TypeingError, TerminalIOError, TerminalTooSmallError

__all__ = [
    'StyledText',
    'visual_width_of',
    'layout_words',
    'CursorModel',
    'LinePosition',
    'TerminalSurface',
    'TypeingError',
    'TerminalIOError',
    'TerminalTooSmallError',
]
