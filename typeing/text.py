"""Length-aware styled text for terminal output."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Union

import blessed

from .constants import TypeingConstants


@dataclass(frozen=True)
class StyledText:
    """Text ready for display together with its on-screen width.

    ``display_form`` is what gets written to the terminal and may contain
    styling sequences. ``plain_form`` is the same text without styling and
    ``visual_width`` is the number of columns it occupies. Styling only ever
    wraps ``display_form``; the other two fields never change.

    Each style is closed with its own reset (normal intensity, underline off,
    default foreground) rather than a full attribute reset, so styles nest:
    the underlined text inside a colored one stays colored.

    A single StyledText is styled as a whole. To color parts of a row
    differently, render a sequence of StyledText.
    """
    display_form: str
    plain_form: str
    visual_width: int

    @classmethod
    def from_plain(cls, text: str) -> "StyledText":
        """Build from a string without escapes, zero-width or wide glyphs."""
        return cls(display_form=text, plain_form=text, visual_width=len(text))

    def _wrapped(self, start: str, end: str) -> "StyledText":
        # Without a start sequence (no styling, unknown capability) there is nothing to close
        if not start:
            return self
        return replace(self, display_form=f"{start}{self.display_form}{end}")

    def with_faint(self, term: blessed.Terminal) -> "StyledText":
        return self._wrapped(term.dim, TypeingConstants.NO_FAINT)

    def with_underline(self, term: blessed.Terminal) -> "StyledText":
        return self._wrapped(term.underline, term.no_underline)

    def with_color(self, term: blessed.Terminal, color: Union[str, int]) -> "StyledText":
        """Color the text.

        Args:
            term: Terminal providing the sequences
            color: A blessed color name such as ``"green"`` or a color number
        """
        if isinstance(color, int):
            start = term.color(color)
        else:
            start = getattr(term, color)
        return self._wrapped(start, TypeingConstants.DEFAULT_FOREGROUND)

    def __str__(self) -> str:
        return self.display_form

    def __len__(self) -> int:
        return self.visual_width


def visual_width_of(items: Union[StyledText, Iterable[StyledText]]) -> int:
    """Columns used when ``items`` are rendered on one row."""
    if isinstance(items, StyledText):
        return items.visual_width
    return sum(item.visual_width for item in items)
